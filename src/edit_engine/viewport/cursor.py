"""Cursor navigation and the scroll offset that keeps it on screen."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from edit_engine.buffer import ORIGIN, Position, TextBuffer


class Navigation(str, Enum):
    """Abstract navigation commands understood by :class:`CursorViewport`."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    LINE_START = "line_start"
    LINE_END = "line_end"
    DOCUMENT_START = "document_start"
    DOCUMENT_END = "document_end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"


@dataclass(frozen=True, slots=True)
class WindowSize:
    """Visible text area in terminal cells; owned by the host terminal."""

    width: int
    height: int


class CursorViewport:
    """Logical cursor plus the top-left offset of the visible window.

    The viewport never observes the buffer. Callers that mutate the buffer
    must call :meth:`clamp` before :meth:`recompute_offset`.
    """

    def __init__(
        self, cursor: Optional[Position] = None, offset: Optional[Position] = None
    ) -> None:
        self.cursor = cursor or ORIGIN
        self.offset = offset or ORIGIN

    def move_cursor(
        self, command: Navigation, buffer: TextBuffer, window: WindowSize
    ) -> Position:
        x, y = self.cursor.x, self.cursor.y
        count = len(buffer)
        width = buffer.line_length(y)
        page = window.height

        if command is Navigation.UP:
            y = max(y - 1, 0)
        elif command is Navigation.DOWN:
            if y < count:
                y += 1
        elif command is Navigation.LEFT:
            if x > 0:
                x -= 1
            elif y > 0:
                y -= 1
                x = buffer.line_length(y)
        elif command is Navigation.RIGHT:
            if x < width:
                x += 1
            elif y < count:
                y += 1
                x = 0
        elif command is Navigation.LINE_START:
            x = 0
        elif command is Navigation.LINE_END:
            x = width
        elif command is Navigation.DOCUMENT_START:
            y = 0
        elif command is Navigation.DOCUMENT_END:
            y = count
        elif command is Navigation.PAGE_UP:
            y = y - page if y > page else 0
        elif command is Navigation.PAGE_DOWN:
            y = y + page if y + page < count else count

        # Horizontal position sticks to the nearest valid column.
        self.cursor = Position(min(x, buffer.line_length(y)), y)
        return self.cursor

    def clamp(self, buffer: TextBuffer) -> Position:
        y = min(max(self.cursor.y, 0), len(buffer))
        x = min(max(self.cursor.x, 0), buffer.line_length(y))
        self.cursor = Position(x, y)
        return self.cursor

    def recompute_offset(self, window: WindowSize) -> Position:
        """Scroll the minimum amount needed to keep the cursor visible."""

        width = max(window.width, 1)
        height = max(window.height, 1)
        x, y = self.cursor.x, self.cursor.y
        offset_x, offset_y = self.offset.x, self.offset.y

        if y < offset_y:
            offset_y = y
        elif y >= offset_y + height:
            offset_y = y - height + 1
        if x < offset_x:
            offset_x = x
        elif x >= offset_x + width:
            offset_x = x - width + 1

        self.offset = Position(offset_x, offset_y)
        return self.offset

    def screen_position(self) -> Position:
        return Position(
            max(self.cursor.x - self.offset.x, 0),
            max(self.cursor.y - self.offset.y, 0),
        )
