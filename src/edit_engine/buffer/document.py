"""Whole-document storage as an ordered list of grapheme-indexed lines."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence

from edit_engine.runtime import telemetry

from .line import Line
from .state import Position

NEWLINE = "\n"


class TextBuffer:
    """Ordered, never-sparse sequence of :class:`Line` objects.

    Line index ``y`` is valid when ``0 <= y < len(buffer)``; ``y == len(buffer)``
    is additionally accepted by the insert operations as "append a new line".
    Positional operations are total: anything outside that range is absorbed
    as a no-op so a stale cursor can never bring the session down.
    """

    def __init__(
        self, lines: Optional[Iterable[Line]] = None, *, name: Optional[str] = None
    ) -> None:
        self._lines: List[Line] = list(lines or [])
        self.name = name
        self.dirty = False
        self.version = 0
        self.logger = telemetry.get_logger("edit_engine.buffer")

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], *, name: Optional[str] = None
    ) -> "TextBuffer":
        return cls((Line(text) for text in lines), name=name)

    @classmethod
    def from_text(cls, text: str, *, name: Optional[str] = None) -> "TextBuffer":
        """Split ``text`` into lines; a trailing newline adds no empty line."""

        if not text:
            return cls(name=name)
        raw = text.split(NEWLINE)
        if text.endswith(NEWLINE):
            raw.pop()
        return cls.from_lines(
            (line[:-1] if line.endswith("\r") else line for line in raw), name=name
        )

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    def line_at(self, y: int) -> Optional[Line]:
        if y < 0 or y >= len(self._lines):
            return None
        return self._lines[y]

    def line_length(self, y: int) -> int:
        line = self.line_at(y)
        return len(line) if line is not None else 0

    def snapshot(self) -> Sequence[str]:
        """Return the current lines as an immutable tuple of strings."""

        return tuple(line.content for line in self._lines)

    def insert_char(self, position: Position, char: str) -> None:
        if char == NEWLINE:
            self._insert_newline(position)
            return

        if position.y < 0 or position.y > len(self._lines):
            self._absorb("insert_char", position)
            return
        if position.y == len(self._lines):
            line = Line()
            line.insert(0, char)
            self._lines.append(line)
        else:
            self._lines[position.y].insert(position.x, char)
        self._touch()

    def _insert_newline(self, position: Position) -> None:
        if position.y < 0 or position.y > len(self._lines):
            self._absorb("insert_newline", position)
            return
        if position.y == len(self._lines):
            self._lines.append(Line())
        else:
            remainder = self._lines[position.y].split(position.x)
            self._lines.insert(position.y + 1, remainder)
        self._touch()

    def delete_char(self, position: Position) -> None:
        count = len(self._lines)
        if position.y < 0 or position.y >= count:
            self._absorb("delete_char", position)
            return
        line = self._lines[position.y]
        if position.x == len(line) and position.y + 1 < count:
            line.append(self._lines.pop(position.y + 1))
        else:
            line.delete(position.x)
        self._touch()

    def is_dirty(self) -> bool:
        return self.dirty

    def mark_clean(self) -> None:
        self.dirty = False

    def _touch(self) -> None:
        self.dirty = True
        self.version += 1

    def _absorb(self, operation: str, position: Position) -> None:
        self.logger.debug(
            f"{operation} ignored at ({position.x}, {position.y}); "
            f"buffer has {len(self._lines)} lines"
        )
