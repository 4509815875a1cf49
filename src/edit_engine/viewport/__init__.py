"""Cursor navigation and viewport scrolling."""

from .cursor import CursorViewport, Navigation, WindowSize

__all__ = ["CursorViewport", "Navigation", "WindowSize"]
