"""Coordinates shared by the buffer, cursor, and viewport layers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """Grapheme column ``x`` on line index ``y``."""

    x: int = 0
    y: int = 0


ORIGIN = Position(0, 0)
