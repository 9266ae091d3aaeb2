from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from viedit.actions import parse_command_line
from viedit.actions.command import NO_FILENAME, NO_WRITE
from viedit.buffer import Buffer
from viedit.config import EditorMode
from viedit.modes import KeyInput, ModeBus, ModeContext, ModeResult, create_default_manager
from viedit.modes.mode_manager import ModeManager


def make_manager(
    lines: Iterable[str] = (), *, filename: Optional[str] = None
) -> ModeManager:
    buffer = Buffer.from_lines(lines, filename=filename)
    context = ModeContext(buffer=buffer, registers=buffer.registers, bus=ModeBus())
    return create_default_manager(context)


def press(manager: ModeManager, *keys: str) -> ModeResult:
    result = ModeResult(consumed=False)
    for key in keys:
        text = key if len(key) == 1 else None
        result = manager.handle_key(KeyInput(key=key, text=text))
    return result


def run_command(manager: ModeManager, line: str) -> ModeResult:
    press(manager, ":", *line)
    return press(manager, "ENTER")


def make_dirty(manager: ModeManager) -> None:
    manager.context.buffer.document.insert_char(0, 0, "x")


def test_parse_command_line_splits_verb_and_argument() -> None:
    assert parse_command_line("  w   out.txt ") == ("w", "out.txt")
    assert parse_command_line("q") == ("q", None)
    assert parse_command_line("e! other file.txt") == ("e!", "other file.txt")
    assert parse_command_line("   ") == ("", None)


def test_quit_refuses_when_buffer_is_dirty() -> None:
    manager = make_manager(["abc"])
    make_dirty(manager)

    result = run_command(manager, "q")

    assert result.quit is False
    assert manager.quit_requested is False
    assert manager.context.buffer.status.text == NO_WRITE
    assert manager.mode is EditorMode.NORMAL


def test_forced_quit_ignores_dirty_state() -> None:
    manager = make_manager(["abc"])
    make_dirty(manager)

    result = run_command(manager, "q!")

    assert result.quit is True
    assert manager.quit_requested is True


def test_quit_on_clean_buffer() -> None:
    manager = make_manager(["abc"])

    assert run_command(manager, "q").quit is True


def test_write_without_any_filename() -> None:
    manager = make_manager(["abc"])

    result = run_command(manager, "w")

    assert result.status == "command_write_failed"
    assert manager.context.buffer.status.text == NO_FILENAME


def test_insert_then_write_quit_to_new_file(tmp_path: Path) -> None:
    manager = make_manager()
    target = tmp_path / "out.txt"

    press(manager, "i", "h", "i", "ESC")
    result = run_command(manager, f"wq {target}")

    assert target.read_bytes() == b"hi\n"
    assert result.quit is True
    assert manager.context.buffer.filename == str(target)


def test_write_clears_dirty_and_reports_size(tmp_path: Path) -> None:
    target = tmp_path / "notes.txt"
    manager = make_manager(["one", "two"], filename=str(target))
    make_dirty(manager)

    result = run_command(manager, "w")

    assert result.status == "command_write"
    assert target.read_bytes() == b"xone\ntwo\n"
    assert manager.context.buffer.document.dirty is False
    assert result.message == f'"{target}" 2L, 9B written'


def test_failed_write_keeps_editor_open(tmp_path: Path) -> None:
    manager = make_manager(["abc"])
    make_dirty(manager)
    target = tmp_path / "missing" / "out.txt"

    result = run_command(manager, f"wq {target}")

    assert result.quit is False
    assert result.status == "command_write_failed"
    assert manager.context.buffer.document.dirty is True
    assert manager.context.buffer.filename is None


def test_edit_loads_a_file(tmp_path: Path) -> None:
    source = tmp_path / "source.txt"
    source.write_bytes(b"one\ntwo\n")
    manager = make_manager(["abc"])

    result = run_command(manager, f"e {source}")

    buffer = manager.context.buffer
    assert result.status == "command_edit"
    assert buffer.document.lines() == ("one", "two")
    assert buffer.filename == str(source)
    assert buffer.status.text == f'"{source}" 2L, 8B'


def test_edit_refuses_dirty_buffer_unless_forced(tmp_path: Path) -> None:
    source = tmp_path / "source.txt"
    source.write_bytes(b"fresh\n")
    manager = make_manager(["abc"])
    make_dirty(manager)

    refused = run_command(manager, f"e {source}")
    assert refused.status == "command_refused"
    assert manager.context.buffer.document.lines() == ("xabc",)

    forced = run_command(manager, f"e! {source}")
    assert forced.status == "command_edit_force"
    assert manager.context.buffer.document.lines() == ("fresh",)


def test_edit_missing_file_starts_empty(tmp_path: Path) -> None:
    manager = make_manager(["abc"])
    target = tmp_path / "new.txt"

    run_command(manager, f"e {target}")

    buffer = manager.context.buffer
    assert buffer.document.row_count == 0
    assert buffer.status.text == f'"{target}" [New File]'
    assert buffer.filename == str(target)


def test_edit_without_filename() -> None:
    manager = make_manager(["abc"])

    result = run_command(manager, "e")

    assert result.message == NO_FILENAME


def test_unknown_command_reports_not_implemented() -> None:
    manager = make_manager(["abc"])

    result = run_command(manager, "foo bar")

    assert result.status == "command_error"
    assert manager.context.buffer.status.text == "Not implemented: foo"
    assert manager.mode is EditorMode.NORMAL


def test_empty_command_line_returns_to_normal() -> None:
    manager = make_manager(["abc"])

    result = run_command(manager, "")

    assert result.status == "command_empty"
    assert manager.mode is EditorMode.NORMAL


def test_command_line_editing_and_cancel() -> None:
    manager = make_manager(["abc"])
    extras = manager.context.extras

    press(manager, ":", "w", "x", "BACKSPACE")
    assert extras["command_state"] == {"text": "w"}

    press(manager, "BACKSPACE")
    assert extras["command_state"] == {"text": ""}
    assert manager.mode is EditorMode.COMMAND

    press(manager, "BACKSPACE")
    assert manager.mode is EditorMode.NORMAL

    press(manager, ":", "q", "ESC")
    assert manager.mode is EditorMode.NORMAL
    assert manager.quit_requested is False


def test_command_events_reach_the_bus() -> None:
    manager = make_manager(["abc"])
    seen: List[tuple[str, object]] = []
    for name in ("command.start", "command.submit", "command.error", "command.end"):
        manager.context.bus.subscribe(
            name, lambda payload, name=name: seen.append((name, payload))
        )

    run_command(manager, "zz")

    assert [name for name, _ in seen] == [
        "command.start",
        "command.submit",
        "command.error",
        "command.end",
    ]
    assert ("command.submit", "zz") in seen


def test_command_state_is_the_only_shared_extra() -> None:
    manager = make_manager(["abc"])

    press(manager, ":", "w")

    assert set(manager.context.extras) == {"command_state"}
