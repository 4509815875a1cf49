"""File-system collaborators for loading and saving buffers."""

from .files import FileStore, StorageError

__all__ = ["FileStore", "StorageError"]
