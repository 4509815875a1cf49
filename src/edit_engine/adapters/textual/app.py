"""Executable Textual app hosting the editing core in the terminal."""

from __future__ import annotations

import argparse
import os
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the editor is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use edit_engine.adapters.textual.app"
    ) from exc

import grapheme

from edit_engine.buffer import TextBuffer
from edit_engine.config import EditorSettings
from edit_engine.runtime import telemetry
from edit_engine.session import EditSession
from edit_engine.storage import FileStore, StorageError

from .controller import TextualEditAdapter, TextualUIHooks, ViewFrame


def frame_text(frame: ViewFrame) -> Text:
    """Join the frame rows and highlight the grapheme under the cursor."""

    rows = list(frame.rows)
    while len(rows) <= frame.cursor.y:
        rows.append("")
    if frame.text_rows is not None and frame.cursor.y >= frame.text_rows:
        rows[frame.cursor.y] = ""
    row = rows[frame.cursor.y]
    pieces = list(grapheme.graphemes(row))
    if frame.cursor.x >= len(pieces):
        pieces.extend(" " * (frame.cursor.x - len(pieces) + 1))
        rows[frame.cursor.y] = "".join(pieces)

    start = sum(len(line) + 1 for line in rows[: frame.cursor.y])
    start += sum(len(piece) for piece in pieces[: frame.cursor.x])
    text = Text("\n".join(rows), no_wrap=True)
    text.stylize("reverse", start, start + len(pieces[frame.cursor.x]))
    return text


class BufferView(Static, can_focus=True):
    """Focusable text area that forwards every key press to the adapter."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.adapter: TextualEditAdapter | None = None

    async def on_key(self, event: events.Key) -> None:
        if self.adapter is None:
            return
        event.prevent_default()
        event.stop()
        self.adapter.handle_textual_key(event.key, text=event.character)


class EditEngineApp(App[None]):
    """Minimal full-screen editor: text area, status bar, message bar."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-lighten-2;
		color: $text;
	}

	#message-line {
		height: 1;
	}
	"""

    def __init__(
        self,
        session: EditSession,
        *,
        settings: Optional[EditorSettings] = None,
        store: Optional[FileStore] = None,
        initial_status: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.session = session
        self.settings = settings or EditorSettings()
        self.store = store
        self.initial_status = initial_status
        self.adapter: TextualEditAdapter | None = None
        self._buffer_widget: BufferView | None = None
        self._status_widget: Static | None = None
        self._message_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._buffer_widget = BufferView("", id="buffer-view")
        self._status_widget = Static("", id="status-line")
        self._message_widget = Static("", id="message-line")
        yield self._buffer_widget
        yield self._status_widget
        yield self._message_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            request_exit=self.exit,
            log=self._log_line,
        )
        self.adapter = TextualEditAdapter(
            self.session,
            hooks,
            store=self.store,
            settings=self.settings,
            initial_status=self.initial_status,
        )
        if self._buffer_widget is not None:
            self._buffer_widget.adapter = self.adapter
            self._buffer_widget.focus()
        self.adapter.resize(self.size.width, self.size.height)
        self.set_interval(1.0, self.adapter.refresh)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(event.size.width, event.size.height)

    async def action_quit(self) -> None:
        # Ctrl+Q is a priority binding; route it through the dirty check.
        if self.adapter:
            self.adapter.handle_textual_key("ctrl+q")

    def _update_view(self, frame: ViewFrame) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(frame_text(frame))
        if self._status_widget:
            self._status_widget.update(Text(frame.status_bar, no_wrap=True))
        if self._message_widget:
            self._message_widget.update(Text(frame.message_bar, no_wrap=True))

    def _log_line(self, line: str) -> None:
        telemetry.get_logger("edit_engine.adapters.textual").debug(line)


def load_session(
    path: Optional[str], store: FileStore
) -> tuple[EditSession, Optional[str]]:
    """Open ``path`` if given; on failure start empty and report why."""

    if not path:
        return EditSession(), None
    try:
        return EditSession(store.open(path)), None
    except StorageError:
        return EditSession(TextBuffer()), f"ERR: Could not open file: {path}"


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a text file in the terminal.")
    parser.add_argument("file", nargs="?", help="File to open")
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=os.environ.get("EDIT_ENGINE_LOG_PRESET", "production"),
        help="telelog preset (default: production, which logs to a file)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    settings = EditorSettings.from_env()
    store = FileStore(encoding=settings.encoding)
    session, error = load_session(args.file, store)
    app = EditEngineApp(
        session, settings=settings, store=store, initial_status=error
    )
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
