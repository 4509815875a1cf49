"""Abstract commands delivered to an edit session and the results it returns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from edit_engine.viewport import Navigation


@dataclass(frozen=True, slots=True)
class InsertChar:
    """Insert one user-perceived character at the cursor."""

    char: str


@dataclass(frozen=True, slots=True)
class InsertNewline:
    pass


@dataclass(frozen=True, slots=True)
class Backspace:
    pass


@dataclass(frozen=True, slots=True)
class DeleteForward:
    pass


@dataclass(frozen=True, slots=True)
class Navigate:
    command: Navigation


@dataclass(frozen=True, slots=True)
class SaveRequest:
    pass


@dataclass(frozen=True, slots=True)
class QuitRequest:
    pass


Command = Union[
    InsertChar,
    InsertNewline,
    Backspace,
    DeleteForward,
    Navigate,
    SaveRequest,
    QuitRequest,
]


@dataclass(slots=True)
class SessionResult:
    """Outcome of ``EditSession.apply``.

    ``request`` is set to ``"save"`` or ``"quit"`` when the host has to run a
    UI flow (prompting, persisting, exiting) that lives outside the core.
    """

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    request: Optional[str] = None


__all__ = [
    "Backspace",
    "Command",
    "DeleteForward",
    "InsertChar",
    "InsertNewline",
    "Navigate",
    "QuitRequest",
    "SaveRequest",
    "SessionResult",
]
