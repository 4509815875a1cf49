"""Editor settings resolved from ``EDIT_ENGINE_*`` environment variables."""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "EDIT_ENGINE_"


def _lookup(env: Mapping[str, str], name: str) -> Optional[str]:
    return env.get(f"{ENV_PREFIX}{name}")


def _env_int(env: Mapping[str, str], name: str, fallback: int) -> int:
    value = _lookup(env, name)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _env_float(env: Mapping[str, str], name: str, fallback: float) -> float:
    value = _lookup(env, name)
    if value is None:
        return fallback
    try:
        return float(value)
    except ValueError:
        return fallback


def _env_codec(env: Mapping[str, str], name: str, fallback: str) -> str:
    value = _lookup(env, name)
    if not value:
        return fallback
    try:
        return codecs.lookup(value).name
    except LookupError:
        return fallback


@dataclass(frozen=True)
class EditorSettings:
    """Host-side presentation settings; the editing core takes none of these."""

    status_timeout_s: float = 5.0
    help_text: str = "HELP: Ctrl-S to save | Ctrl-Q to quit"
    placeholder: str = "~"
    name_width: int = 20
    no_name_label: str = "[No Name]"
    reserved_rows: int = 2
    encoding: str = "utf-8"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        source = os.environ if env is None else env
        defaults = cls()
        return cls(
            status_timeout_s=_env_float(
                source, "STATUS_TIMEOUT", defaults.status_timeout_s
            ),
            help_text=_lookup(source, "HELP_TEXT") or defaults.help_text,
            placeholder=_lookup(source, "PLACEHOLDER") or defaults.placeholder,
            name_width=max(_env_int(source, "NAME_WIDTH", defaults.name_width), 1),
            no_name_label=_lookup(source, "NO_NAME_LABEL") or defaults.no_name_label,
            reserved_rows=max(
                _env_int(source, "RESERVED_ROWS", defaults.reserved_rows), 0
            ),
            encoding=_env_codec(source, "ENCODING", defaults.encoding),
        )


__all__ = ["ENV_PREFIX", "EditorSettings"]
