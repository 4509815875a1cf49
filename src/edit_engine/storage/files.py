"""Load and persist buffers as newline-terminated text files."""

from __future__ import annotations

from typing import Optional

from edit_engine.buffer import TextBuffer
from edit_engine.runtime import telemetry


class StorageError(RuntimeError):
    """Raised when a buffer cannot be read from or written to disk."""

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class FileStore:
    """Reads files into :class:`TextBuffer` objects and writes them back."""

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self.encoding = encoding
        self.logger = telemetry.get_logger("edit_engine.storage")

    def open(self, path: str) -> TextBuffer:
        try:
            with open(path, "r", encoding=self.encoding, newline="") as handle:
                text = handle.read()
        except (OSError, UnicodeDecodeError, LookupError) as exc:
            telemetry.record_event(
                "storage.open_failed",
                level="warning",
                data={"path": path, "error": str(exc)},
            )
            raise StorageError(f"Could not open file: {path}", path=path) from exc

        buffer = TextBuffer.from_text(text, name=path)
        telemetry.record_event(
            "storage.open", data={"path": path, "lines": len(buffer)}
        )
        return buffer

    def save(self, buffer: TextBuffer) -> None:
        """Write every line followed by ``\\n`` and mark the buffer clean."""

        if not buffer.name:
            raise StorageError("Buffer has no file name")
        try:
            payload = b"".join(line.as_bytes(self.encoding) + b"\n" for line in buffer)
            with open(buffer.name, "wb") as handle:
                handle.write(payload)
        except (OSError, UnicodeEncodeError, LookupError) as exc:
            telemetry.record_event(
                "storage.save_failed",
                level="warning",
                data={"path": buffer.name, "error": str(exc)},
            )
            raise StorageError(
                f"Error writing to file: {buffer.name}", path=buffer.name
            ) from exc

        buffer.mark_clean()
        telemetry.record_event(
            "storage.save", data={"path": buffer.name, "lines": len(buffer)}
        )
