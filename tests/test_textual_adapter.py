from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from edit_engine.buffer import Position, TextBuffer
from edit_engine.config import EditorSettings
from edit_engine.session import EditSession, InsertChar, Navigate
from edit_engine.viewport import Navigation, WindowSize
from edit_engine.adapters.textual import (
    TextualEditAdapter,
    TextualUIHooks,
    ViewFrame,
    decode_key,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class Recorder:
    def __init__(self) -> None:
        self.frames: List[ViewFrame] = []
        self.exits = 0
        self.logs: List[str] = []

    def hooks(self) -> TextualUIHooks:
        return TextualUIHooks(
            update_view=self.frames.append,
            request_exit=self._exit,
            log=self.logs.append,
        )

    def _exit(self) -> None:
        self.exits += 1

    @property
    def last(self) -> ViewFrame:
        return self.frames[-1]


def make_adapter(
    *lines: str,
    name: Optional[str] = None,
    clock: Optional[FakeClock] = None,
    initial_status: Optional[str] = None,
) -> tuple[TextualEditAdapter, Recorder]:
    recorder = Recorder()
    session = EditSession(TextBuffer.from_lines(lines, name=name))
    adapter = TextualEditAdapter(
        session,
        recorder.hooks(),
        clock=clock or FakeClock(),
        initial_status=initial_status,
    )
    adapter.resize(40, 6)
    return adapter, recorder


def press(adapter: TextualEditAdapter, text: str) -> None:
    for char in text:
        adapter.handle_textual_key(char, text=char)


def test_decode_key_maps_keys_to_commands() -> None:
    assert decode_key("a", "a") == InsertChar("a")
    assert decode_key("space", " ") == InsertChar(" ")
    assert decode_key("tab", "\t") == InsertChar("\t")
    assert decode_key("pagedown") == Navigate(Navigation.PAGE_DOWN)
    assert decode_key("ctrl+home") == Navigate(Navigation.DOCUMENT_START)
    assert decode_key("f5") is None
    assert decode_key("ctrl+x", "\x18") is None


def test_resize_reserves_status_rows() -> None:
    adapter, recorder = make_adapter("abc")

    assert adapter.session.window == WindowSize(40, 4)
    assert len(recorder.last.rows) == 4


def test_rendered_frame_uses_placeholder_past_end() -> None:
    adapter, recorder = make_adapter("abc", "d\te")

    assert recorder.last.rows == ("abc", "d e", "~", "~")
    assert recorder.last.cursor == Position(0, 0)
    assert recorder.last.text_rows == 2


def test_typing_updates_rows_and_cursor() -> None:
    adapter, recorder = make_adapter()

    press(adapter, "hey")
    adapter.handle_textual_key("enter")
    press(adapter, "yo")

    assert adapter.session.buffer.snapshot() == ("hey", "yo")
    assert recorder.last.rows[:2] == ("hey", "yo")
    assert recorder.last.cursor == Position(2, 1)


def test_status_bar_layout() -> None:
    adapter, recorder = make_adapter("abc", name="a-really-long-file-name.txt")

    bar = recorder.last.status_bar
    assert bar.startswith("a-really-long-file-n - 1 lines")
    assert bar.endswith("1/1")
    assert len(bar) == 40

    press(adapter, "x")
    assert recorder.last.status_bar == "a-really-long-file-n - 1 lines (modified"

    adapter.resize(60, 6)
    bar = recorder.last.status_bar
    assert bar.startswith("a-really-long-file-n - 1 lines (modified)")
    assert bar.endswith("1/1")


def test_status_bar_for_unnamed_buffer() -> None:
    adapter, recorder = make_adapter()

    assert recorder.last.status_bar.startswith("[No Name] - 0 lines")


def test_initial_message_expires() -> None:
    clock = FakeClock()
    adapter, recorder = make_adapter(clock=clock)

    assert recorder.last.message_bar == EditorSettings().help_text

    clock.now += 5.0
    adapter.refresh()

    assert recorder.last.message_bar == ""


def test_initial_status_override() -> None:
    adapter, recorder = make_adapter(initial_status="ERR: Could not open file: x")

    assert recorder.last.message_bar == "ERR: Could not open file: x"


def test_save_as_prompt_writes_file(tmp_path: Path) -> None:
    adapter, recorder = make_adapter()
    press(adapter, "hi")
    target = tmp_path / "saved.txt"

    adapter.handle_textual_key("ctrl+s")
    assert recorder.last.message_bar == "Save as: "

    press(adapter, str(target))
    assert recorder.last.message_bar.startswith("Save as: ")
    adapter.handle_textual_key("enter")

    assert target.read_text(encoding="utf-8") == "hi\n"
    assert adapter.session.buffer.name == str(target)
    assert adapter.session.buffer.is_dirty() is False
    assert recorder.last.message_bar == "File saved successfully."


def test_save_as_prompt_backspace_edits_answer() -> None:
    adapter, _ = make_adapter("abc")

    adapter.handle_textual_key("ctrl+s")
    press(adapter, "ab")
    adapter.handle_textual_key("backspace")

    assert adapter.prompt is not None
    assert adapter.prompt.text == "a"
    assert adapter.session.buffer.snapshot() == ("abc",)


def test_save_as_escape_aborts() -> None:
    adapter, recorder = make_adapter("abc")
    press(adapter, "x")

    adapter.handle_textual_key("ctrl+s")
    press(adapter, "name")
    adapter.handle_textual_key("escape")

    assert recorder.last.message_bar == "Save aborted"
    assert adapter.session.buffer.name is None
    assert adapter.session.buffer.is_dirty() is True


def test_save_named_buffer_skips_prompt(tmp_path: Path) -> None:
    target = tmp_path / "named.txt"
    adapter, recorder = make_adapter("abc", name=str(target))

    adapter.handle_textual_key("ctrl+s")

    assert adapter.prompt is None
    assert target.read_text(encoding="utf-8") == "abc\n"
    assert recorder.last.message_bar == "File saved successfully."


def test_save_failure_is_reported(tmp_path: Path) -> None:
    adapter, recorder = make_adapter("abc", name=str(tmp_path))
    press(adapter, "x")

    adapter.handle_textual_key("ctrl+s")

    assert recorder.last.message_bar == "Error writing to file."
    assert adapter.session.buffer.is_dirty() is True


def test_quit_clean_buffer_exits_immediately() -> None:
    adapter, recorder = make_adapter("abc")

    adapter.handle_textual_key("ctrl+q")

    assert adapter.quitting is True
    assert recorder.exits == 1


def test_quit_dirty_buffer_requires_confirmation() -> None:
    adapter, recorder = make_adapter("abc")
    press(adapter, "x")

    adapter.handle_textual_key("ctrl+q")
    assert recorder.last.message_bar == "Quit without saving? (y/n) "
    press(adapter, "n")
    adapter.handle_textual_key("enter")
    assert adapter.quitting is False
    assert recorder.exits == 0

    adapter.handle_textual_key("ctrl+q")
    press(adapter, "y")
    adapter.handle_textual_key("enter")
    assert adapter.quitting is True
    assert recorder.exits == 1


def test_unmapped_keys_are_ignored() -> None:
    adapter, recorder = make_adapter("abc")

    result = adapter.handle_textual_key("f5")

    assert result is None
    assert adapter.session.buffer.is_dirty() is False


def test_adapter_emits_log_lines() -> None:
    adapter, recorder = make_adapter("abc")

    adapter.handle_textual_key("right")

    assert any(line.startswith("key ->") for line in recorder.logs)
    assert any(line.startswith("result <-") for line in recorder.logs)
    assert recorder.last.cursor == Position(1, 0)


def test_closing_without_open_prompt_is_ignored() -> None:
    adapter, recorder = make_adapter("abc")
    frames = len(recorder.frames)

    adapter._close_prompt("ignored")

    assert adapter.prompt is None
    assert adapter.quitting is False
    assert len(recorder.frames) == frames
