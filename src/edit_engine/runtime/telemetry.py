"""telelog wiring for the editor.

While the editor is running the terminal belongs to Textual, so nothing here
writes to the console unless asked to. Settings come from a named preset or
from ``EDIT_ENGINE_LOG_*`` variables and are turned into a ``telelog.Config``
in one place.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "EDIT_ENGINE_"
ROOT_LOGGER = "edit_engine"


@dataclass(frozen=True)
class LogSettings:
    level: str = "INFO"
    console: bool = False
    file: Optional[str] = None
    json: bool = False
    buffered: bool = False


PRESET_SETTINGS: Dict[str, LogSettings] = {
    "development": LogSettings(level="DEBUG", console=True),
    "production": LogSettings(level="INFO", file="edit_engine.log", buffered=True),
    "performance": LogSettings(
        level="DEBUG", file="edit_engine-performance.log", json=True, buffered=True
    ),
}
PRESETS = tuple(PRESET_SETTINGS)

_LOGGERS: MutableMapping[str, Any] = {}
_CONFIG: Optional[Any] = None


def _flag(raw: Optional[str]) -> bool:
    return raw is not None and raw.lower() in {"1", "true", "yes", "on"}


def resolve_settings(
    preset: Optional[str] = None, env: Optional[Mapping[str, str]] = None
) -> LogSettings:
    """Start from ``preset`` (or silent defaults) and apply env overrides.

    ``LOG_LEVEL`` and ``LOG_FILE`` replace the preset's values;
    ``LOG_CONSOLE`` turns console output on.
    """

    source = os.environ if env is None else env
    if preset is None:
        settings = LogSettings()
    else:
        try:
            settings = PRESET_SETTINGS[preset.lower()]
        except KeyError:
            raise ValueError(f"Unknown preset '{preset}'.") from None

    level = source.get(f"{ENV_PREFIX}LOG_LEVEL")
    if level:
        settings = replace(settings, level=level.upper())
    log_file = source.get(f"{ENV_PREFIX}LOG_FILE")
    if log_file:
        settings = replace(settings, file=log_file)
    if _flag(source.get(f"{ENV_PREFIX}LOG_CONSOLE")):
        settings = replace(settings, console=True)
    return settings


def build_config(settings: LogSettings) -> Any:
    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(True)
    if settings.file:
        config.with_file_output(settings.file)
    if settings.json:
        config.with_json_format(True)
    if settings.buffered:
        config.with_buffering(True)
    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Install a telelog config, built from ``preset`` unless one is given.

    Loggers handed out earlier keep their old config; later ``get_logger``
    calls see the new one.
    """

    global _CONFIG
    if config is not None and preset is not None:
        raise ValueError("Provide either `config` or `preset`, not both.")
    _CONFIG = config if config is not None else build_config(resolve_settings(preset))
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or ROOT_LOGGER
    logger = _LOGGERS.get(logger_name)
    if logger is None:
        if _CONFIG is None:
            configure()
        logger = tl.Logger.with_config(logger_name, _CONFIG)
        _LOGGERS[logger_name] = logger
    return logger


def _text(value: Any) -> str:
    return value if isinstance(value, str) else repr(value)


def _log(logger: Any, level: str, message: str, data: Dict[str, Any]) -> None:
    name = level.lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        with_data(message, [(key, _text(value)) for key, value in data.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {data}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _log(get_logger(logger_name), level, f"event::{name}", payload)


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> Iterator[None]:
    """Profile the block under ``name``.

    ``component`` is tracked for the duration of the block, and ``metadata``
    is attached as logger context. An exception escaping the block is logged
    as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    context = {key: _text(value) for key, value in (metadata or {}).items()}
    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield
        except Exception as exc:
            failure = {"span": name, **context, "reason": str(exc)}
            if component:
                failure["component"] = component
            _log(log, "error", "span::fail", failure)
            raise


__all__ = [
    "LogSettings",
    "PRESETS",
    "PRESET_SETTINGS",
    "build_config",
    "configure",
    "get_logger",
    "record_event",
    "resolve_settings",
    "span",
]
