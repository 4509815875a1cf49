"""Single line of text indexed by extended grapheme clusters."""

from __future__ import annotations

from typing import List

import grapheme


def _segment(text: str) -> List[str]:
    return list(grapheme.graphemes(text))


class Line:
    """Owned line content with a grapheme count that never goes stale.

    Every mutation funnels through ``_set_content`` so the cached count is
    recomputed in the same step that replaces the text. Columns are grapheme
    indices: a base letter followed by a combining mark, or a multi-codepoint
    emoji, is one editable unit.
    """

    __slots__ = ("_content", "_grapheme_count")

    def __init__(self, content: str = "") -> None:
        self._content = ""
        self._grapheme_count = 0
        self._set_content(content)

    @property
    def content(self) -> str:
        return self._content

    @property
    def grapheme_count(self) -> int:
        return self._grapheme_count

    def _set_content(self, content: str) -> None:
        self._content = content
        self._grapheme_count = grapheme.length(content)

    def render(self, start: int, end: int) -> str:
        """Return graphemes ``[start, end)`` with tabs drawn as one space."""

        end = max(min(end, self._grapheme_count), 0)
        start = max(min(start, end), 0)
        pieces = _segment(self._content)[start:end]
        return "".join(" " if piece == "\t" else piece for piece in pieces)

    def insert(self, column: int, char: str) -> None:
        if column >= self._grapheme_count:
            self._set_content(self._content + char)
            return
        pieces = _segment(self._content)
        column = max(column, 0)
        self._set_content("".join(pieces[:column]) + char + "".join(pieces[column:]))

    def delete(self, column: int) -> None:
        if column < 0 or column >= self._grapheme_count:
            return
        pieces = _segment(self._content)
        del pieces[column]
        self._set_content("".join(pieces))

    def append(self, other: "Line") -> None:
        self._set_content(self._content + other.content)

    def split(self, column: int) -> "Line":
        """Keep the first ``column`` graphemes and return the rest as a new line."""

        pieces = _segment(self._content)
        column = max(column, 0)
        remainder = "".join(pieces[column:])
        self._set_content("".join(pieces[:column]))
        return Line(remainder)

    def as_bytes(self, encoding: str = "utf-8") -> bytes:
        return self._content.encode(encoding)

    def __len__(self) -> int:
        return self._grapheme_count

    def __str__(self) -> str:
        return self._content

    def __repr__(self) -> str:
        return f"Line({self._content!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Line):
            return self._content == other.content
        return NotImplemented
