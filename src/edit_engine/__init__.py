"""Grapheme-aware line editing core with cursor and viewport tracking."""

__all__ = [
    "adapters",
    "buffer",
    "config",
    "runtime",
    "session",
    "storage",
    "viewport",
]

__version__ = "0.1.0"
