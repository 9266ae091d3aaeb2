from __future__ import annotations

from pathlib import Path
from typing import Iterable

from viedit.buffer import Buffer, Position
from viedit.config import EditorMode
from viedit.modes import KeyInput, ModeBus, ModeContext, ModeResult, create_default_manager
from viedit.modes.mode_manager import ModeManager


def make_manager(lines: Iterable[str] = ()) -> ModeManager:
    buffer = Buffer.from_lines(lines)
    context = ModeContext(buffer=buffer, registers=buffer.registers, bus=ModeBus())
    manager = create_default_manager(context)
    manager.switch_mode(EditorMode.INSERT)
    return manager


def press(manager: ModeManager, *keys: str) -> ModeResult:
    result = ModeResult(consumed=False)
    for key in keys:
        text = key if len(key) == 1 else None
        result = manager.handle_key(KeyInput(key=key, text=text))
    return result


def test_backspace_clears_a_row_without_touching_the_next() -> None:
    manager = make_manager(["abc", "def"])
    buffer = manager.context.buffer
    buffer.state.set_cursor(0, 3)

    press(manager, "BACKSPACE", "BACKSPACE", "BACKSPACE")

    assert buffer.document.lines() == ("", "def")
    assert buffer.cursor == Position(0, 0)


def test_backspace_at_row_start_joins_with_previous() -> None:
    manager = make_manager(["abc", "def"])
    buffer = manager.context.buffer
    buffer.state.set_cursor(1, 0)

    press(manager, "BACKSPACE")

    assert buffer.document.lines() == ("abcdef",)
    assert buffer.cursor == Position(0, 3)


def test_backspace_at_document_origin_is_noop() -> None:
    manager = make_manager(["abc"])

    press(manager, "BACKSPACE")

    assert manager.context.buffer.document.lines() == ("abc",)
    assert manager.context.buffer.document.dirty is False


def test_enter_splits_the_row() -> None:
    manager = make_manager(["abcdef"])
    buffer = manager.context.buffer
    buffer.state.set_cursor(0, 3)

    press(manager, "ENTER")

    assert buffer.document.lines() == ("abc", "def")
    assert buffer.cursor == Position(1, 0)


def test_enter_at_column_zero_opens_a_row_above() -> None:
    manager = make_manager(["abc"])
    buffer = manager.context.buffer

    press(manager, "ENTER")

    assert buffer.document.lines() == ("", "abc")
    assert buffer.cursor == Position(1, 0)


def test_typing_into_empty_document_creates_a_row() -> None:
    manager = make_manager()
    buffer = manager.context.buffer

    press(manager, "h", "i", "TAB")

    assert buffer.document.lines() == ("hi\t",)
    assert buffer.cursor == Position(0, 3)
    assert buffer.document.dirty is True


def test_escape_steps_left_and_returns_to_normal() -> None:
    manager = make_manager()
    buffer = manager.context.buffer

    press(manager, "x", "ESC")

    assert manager.mode is EditorMode.NORMAL
    assert buffer.cursor == Position(0, 0)

    press(manager, "i", "ESC")
    assert buffer.cursor == Position(0, 0)


def test_delete_at_row_end_joins_the_next_row() -> None:
    manager = make_manager(["ab", "cd"])
    buffer = manager.context.buffer
    buffer.state.set_cursor(0, 2)

    press(manager, "DELETE")

    assert buffer.document.lines() == ("abcd",)
    assert buffer.cursor == Position(0, 2)


def test_control_chords_are_not_inserted() -> None:
    manager = make_manager(["ab"])

    result = manager.handle_key(KeyInput(key="x", modifiers=("CTRL",)))

    assert result.consumed is False
    assert manager.context.buffer.document.lines() == ("ab",)


def test_arrow_keys_move_within_insert_mode() -> None:
    manager = make_manager(["abc", "de"])
    buffer = manager.context.buffer

    press(manager, "END", "DOWN")

    assert buffer.cursor == Position(1, 2)
    assert manager.mode is EditorMode.INSERT


def test_backspace_after_return_on_empty_document_steps_back() -> None:
    manager = make_manager()
    buffer = manager.context.buffer

    press(manager, "ENTER")
    assert buffer.document.lines() == ("",)
    assert buffer.cursor == Position(1, 0)

    press(manager, "BACKSPACE")
    assert buffer.cursor == Position(0, 0)
    assert buffer.document.lines() == ("",)


def test_backspace_past_end_of_single_row_returns_to_its_end() -> None:
    manager = make_manager(["ab"])
    buffer = manager.context.buffer
    buffer.state.set_cursor(1, 0)

    press(manager, "BACKSPACE")

    assert buffer.cursor == Position(0, 2)
    assert buffer.document.lines() == ("ab",)


def test_ctrl_s_saves_and_stays_in_insert(tmp_path: Path) -> None:
    target = tmp_path / "draft.txt"
    manager = make_manager()
    manager.context.buffer.filename = str(target)

    press(manager, "h", "i")
    result = manager.handle_key(KeyInput(key="s", modifiers=("CTRL",)))

    assert result.status == "saved"
    assert target.read_bytes() == b"hi\n"
    assert manager.mode is EditorMode.INSERT
