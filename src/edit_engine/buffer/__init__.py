"""Line and document storage for the editing core."""

from .document import TextBuffer
from .line import Line
from .state import ORIGIN, Position

__all__ = [
    "Line",
    "ORIGIN",
    "Position",
    "TextBuffer",
]
