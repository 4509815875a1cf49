"""Command dispatch for a single editing session."""

from .commands import (
    Backspace,
    Command,
    DeleteForward,
    InsertChar,
    InsertNewline,
    Navigate,
    QuitRequest,
    SaveRequest,
    SessionResult,
)
from .edit_session import DEFAULT_WINDOW, EditSession

__all__ = [
    "Backspace",
    "Command",
    "DEFAULT_WINDOW",
    "DeleteForward",
    "EditSession",
    "InsertChar",
    "InsertNewline",
    "Navigate",
    "QuitRequest",
    "SaveRequest",
    "SessionResult",
]
