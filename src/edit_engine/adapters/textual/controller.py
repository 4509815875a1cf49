"""Textual-facing adapter: key decoding, prompts, and frame rendering.

Nothing in here imports Textual, so the whole host flow can be driven from
tests through :class:`TextualUIHooks`.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from edit_engine.buffer import Position
from edit_engine.config import EditorSettings
from edit_engine.runtime import telemetry
from edit_engine.session import (
    Backspace,
    Command,
    DeleteForward,
    EditSession,
    InsertChar,
    InsertNewline,
    Navigate,
    QuitRequest,
    SaveRequest,
    SessionResult,
)
from edit_engine.storage import FileStore
from edit_engine.viewport import Navigation, WindowSize

SAVE_AS_PROMPT = "Save as: "
QUIT_PROMPT = "Quit without saving? (y/n) "

KEY_COMMANDS: Dict[str, Command] = {
    "up": Navigate(Navigation.UP),
    "down": Navigate(Navigation.DOWN),
    "left": Navigate(Navigation.LEFT),
    "right": Navigate(Navigation.RIGHT),
    "home": Navigate(Navigation.LINE_START),
    "end": Navigate(Navigation.LINE_END),
    "ctrl+home": Navigate(Navigation.DOCUMENT_START),
    "ctrl+end": Navigate(Navigation.DOCUMENT_END),
    "pageup": Navigate(Navigation.PAGE_UP),
    "ctrl+b": Navigate(Navigation.PAGE_UP),
    "pagedown": Navigate(Navigation.PAGE_DOWN),
    "ctrl+f": Navigate(Navigation.PAGE_DOWN),
    "enter": InsertNewline(),
    "backspace": Backspace(),
    "delete": DeleteForward(),
    "tab": InsertChar("\t"),
    "ctrl+s": SaveRequest(),
    "ctrl+q": QuitRequest(),
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def decode_key(key: str, text: Optional[str] = None) -> Optional[Command]:
    """Map a Textual key name (plus its character) to an editing command."""

    command = KEY_COMMANDS.get(key)
    if command is not None:
        return command
    if text and text.isprintable():
        return InsertChar(text)
    return None


@dataclass(slots=True)
class ViewFrame:
    """Everything the host needs to paint one screen."""

    rows: Tuple[str, ...]
    cursor: Position
    status_bar: str
    message_bar: str
    # Leading rows backed by buffer lines; None means every row is.
    text_rows: Optional[int] = None


@dataclass(slots=True)
class StatusMessage:
    text: str
    time: float


@dataclass(slots=True)
class PromptState:
    label: str
    on_submit: Callable[[Optional[str]], None]
    text: str = ""


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[ViewFrame], None]
    request_exit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditAdapter:
    """Bridges decoded key events to an :class:`EditSession` and back to the UI."""

    def __init__(
        self,
        session: EditSession,
        hooks: TextualUIHooks,
        *,
        store: Optional[FileStore] = None,
        settings: Optional[EditorSettings] = None,
        clock: Callable[[], float] = time.monotonic,
        initial_status: Optional[str] = None,
    ) -> None:
        self.session = session
        self.hooks = hooks
        self.settings = settings or EditorSettings()
        self.store = store or FileStore(encoding=self.settings.encoding)
        self.clock = clock
        self.quitting = False
        self.prompt: Optional[PromptState] = None
        self.logger = telemetry.get_logger("edit_engine.adapters.textual")
        self.status = StatusMessage(initial_status or self.settings.help_text, clock())
        self.refresh()

    def handle_textual_key(
        self, key: str, *, text: Optional[str] = None
    ) -> Optional[SessionResult]:
        """Route one key event; returns the session result when one ran."""

        self.hooks.log(f"key -> key={key!r} text={text!r}")
        if self.prompt is not None:
            self._handle_prompt_key(key, text)
            self.refresh()
            return None

        command = decode_key(key, text)
        if command is None:
            return None
        result = self.session.apply(command)
        if result.request == "save":
            self.request_save()
        elif result.request == "quit":
            self.request_quit()
        cursor = self.session.cursor
        self.hooks.log(
            f"result <- status={result.status!r} cursor=({cursor.x}, {cursor.y}) "
            f"lines={len(self.session.buffer)} dirty={self.session.buffer.dirty}"
        )
        self.refresh()
        return result

    def resize(self, width: int, height: int) -> None:
        """Adopt a new terminal size, leaving room for the status rows."""

        window = WindowSize(
            width=max(width, 1),
            height=max(height - self.settings.reserved_rows, 1),
        )
        self.session.resize(window)
        self.refresh()

    def set_status(self, text: str) -> None:
        self.status = StatusMessage(text, self.clock())

    def request_save(self) -> None:
        if self.session.buffer.name is None:
            self._open_prompt(SAVE_AS_PROMPT, self._finish_save_as)
            return
        self._save()

    def request_quit(self) -> None:
        if self.session.buffer.is_dirty():
            self._open_prompt(QUIT_PROMPT, self._finish_quit)
            return
        self._quit()

    def _finish_save_as(self, answer: Optional[str]) -> None:
        if not answer:
            self.set_status("Save aborted")
            return
        self._save(name=answer)

    def _save(self, name: Optional[str] = None) -> None:
        if self.session.persist(self.store, name=name):
            self.set_status("File saved successfully.")
        else:
            self.set_status("Error writing to file.")

    def _finish_quit(self, answer: Optional[str]) -> None:
        if answer == "y":
            self._quit()

    def _quit(self) -> None:
        self.quitting = True
        self.logger.info("quit requested")
        self.hooks.request_exit()

    def _open_prompt(self, label: str, on_submit: Callable[[Optional[str]], None]) -> None:
        self.prompt = PromptState(label=label, on_submit=on_submit)
        self.set_status(label)

    def _handle_prompt_key(self, key: str, text: Optional[str]) -> None:
        prompt = self.prompt
        if prompt is None:
            return
        if key == "enter":
            self._close_prompt(prompt.text or None)
            return
        if key == "escape":
            self._close_prompt(None)
            return
        if key == "backspace":
            prompt.text = prompt.text[:-1]
        elif text and text.isprintable():
            prompt.text += text
        self.set_status(f"{prompt.label}{prompt.text}")

    def _close_prompt(self, answer: Optional[str]) -> None:
        prompt = self.prompt
        if prompt is None:
            return
        self.prompt = None
        self.set_status("")
        prompt.on_submit(answer)

    def refresh(self) -> None:
        self.hooks.update_view(self.render())

    def render(self) -> ViewFrame:
        placeholder = self.settings.placeholder
        visible = self.session.visible_rows()
        return ViewFrame(
            rows=tuple(row if row is not None else placeholder for row in visible),
            cursor=self.session.viewport.screen_position(),
            status_bar=self._status_bar(),
            message_bar=self._message_bar(),
            text_rows=sum(1 for row in visible if row is not None),
        )

    def _status_bar(self) -> str:
        buffer = self.session.buffer
        width = self.session.window.width
        if buffer.name:
            name = buffer.name[: self.settings.name_width]
        else:
            name = self.settings.no_name_label
        modified = " (modified)" if buffer.is_dirty() else ""
        status = f"{name} - {len(buffer)} lines{modified}"
        indicator = f"{self.session.cursor.y + 1}/{len(buffer)}"
        padding = " " * max(width - len(status) - len(indicator), 0)
        return f"{status}{padding}{indicator}"[:width]

    def _message_bar(self) -> str:
        if self.clock() - self.status.time >= self.settings.status_timeout_s:
            return ""
        return self.status.text[: self.session.window.width]


__all__ = [
    "KEY_COMMANDS",
    "PromptState",
    "StatusMessage",
    "TextualEditAdapter",
    "TextualUIHooks",
    "ViewFrame",
    "decode_key",
]
