"""Composition root tying the text buffer to the cursor viewport."""

from __future__ import annotations

from typing import List, Optional

from edit_engine.buffer import ORIGIN, Position, TextBuffer
from edit_engine.runtime import telemetry
from edit_engine.storage import FileStore, StorageError
from edit_engine.viewport import CursorViewport, Navigation, WindowSize

from .commands import (
    Backspace,
    DeleteForward,
    InsertChar,
    InsertNewline,
    Navigate,
    QuitRequest,
    SaveRequest,
    SessionResult,
)

DEFAULT_WINDOW = WindowSize(width=80, height=24)


class EditSession:
    """Owns one buffer and one viewport and applies commands in order.

    Each command is applied completely (content mutation, cursor step,
    clamp, offset recompute) before ``apply`` returns.
    """

    def __init__(
        self,
        buffer: Optional[TextBuffer] = None,
        *,
        viewport: Optional[CursorViewport] = None,
        window: WindowSize = DEFAULT_WINDOW,
    ) -> None:
        self.buffer = buffer if buffer is not None else TextBuffer()
        self.viewport = viewport or CursorViewport()
        self.window = window
        self.logger = telemetry.get_logger("edit_engine.session")

    @property
    def cursor(self) -> Position:
        return self.viewport.cursor

    @property
    def offset(self) -> Position:
        return self.viewport.offset

    def apply(self, command: object) -> SessionResult:
        name = type(command).__name__
        with telemetry.span(
            name=f"session::{name}",
            component="session",
            metadata={"command": name, "buffer": self.buffer.name or "[unnamed]"},
        ):
            result = self._dispatch(command)
            self.viewport.recompute_offset(self.window)
        return result

    def _dispatch(self, command: object) -> SessionResult:
        if isinstance(command, InsertChar):
            y = self.viewport.cursor.y
            before = self.buffer.line_length(y)
            self.buffer.insert_char(self.viewport.cursor, command.char)
            if self.buffer.line_length(y) > before:
                self._after_edit(Navigation.RIGHT)
            else:
                # No new column, e.g. a combining mark joined its base.
                self.viewport.clamp(self.buffer)
        elif isinstance(command, InsertNewline):
            self.buffer.insert_char(self.viewport.cursor, "\n")
            self._after_edit(Navigation.RIGHT)
        elif isinstance(command, Backspace):
            if self.viewport.cursor == ORIGIN:
                return SessionResult(consumed=True, status="noop")
            self._move(Navigation.LEFT)
            self.buffer.delete_char(self.viewport.cursor)
            self.viewport.clamp(self.buffer)
        elif isinstance(command, DeleteForward):
            self.buffer.delete_char(self.viewport.cursor)
            self.viewport.clamp(self.buffer)
        elif isinstance(command, Navigate):
            self._move(command.command)
        elif isinstance(command, SaveRequest):
            return SessionResult(consumed=True, request="save")
        elif isinstance(command, QuitRequest):
            return SessionResult(consumed=True, request="quit")
        else:
            self.logger.debug(f"ignored command {type(command).__name__}")
            return SessionResult(consumed=False, status="ignored")
        return SessionResult(consumed=True)

    def _after_edit(self, step: Navigation) -> None:
        self.viewport.clamp(self.buffer)
        self._move(step)

    def _move(self, command: Navigation) -> None:
        self.viewport.move_cursor(command, self.buffer, self.window)

    def resize(self, window: WindowSize) -> None:
        self.window = window
        self.viewport.recompute_offset(window)

    def persist(self, store: FileStore, *, name: Optional[str] = None) -> bool:
        """Write the buffer through ``store``; ``dirty`` is kept on failure."""

        if name:
            self.buffer.name = name
        try:
            store.save(self.buffer)
        except StorageError as exc:
            telemetry.record_event(
                "session.save_failed",
                level="warning",
                data={"path": exc.path or "", "reason": str(exc)},
            )
            return False
        return True

    def visible_rows(self) -> List[Optional[str]]:
        """Rendered slice of every window row; ``None`` past the last line."""

        start = self.viewport.offset.x
        end = start + self.window.width
        rows: List[Optional[str]] = []
        for row in range(self.window.height):
            line = self.buffer.line_at(self.viewport.offset.y + row)
            rows.append(line.render(start, end) if line is not None else None)
        return rows
