"""Core action implementations shared across modes."""

from __future__ import annotations

from viedit.buffer import Position
from viedit.config import EditorMode
from viedit.modes.base_mode import ModeContext, ModeResult
from viedit.motions import Motion, evaluate


def move_cursor(context: ModeContext, motion: Motion, count: int = 1) -> Position:
    buffer = context.buffer
    target = evaluate(motion, buffer.document, buffer.cursor, count)
    buffer.state.set_cursor(*target)
    return target


def enter_insert_mode(context: ModeContext) -> ModeResult:
    del context
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, message="enter_insert")


def insert_at_line_start(context: ModeContext) -> ModeResult:
    move_cursor(context, Motion.LINE_START)
    return enter_insert_mode(context)


def append_after_cursor(context: ModeContext) -> ModeResult:
    move_cursor(context, Motion.RIGHT)
    return enter_insert_mode(context)


def append_at_line_end(context: ModeContext) -> ModeResult:
    move_cursor(context, Motion.LINE_END)
    return enter_insert_mode(context)


def exit_to_normal_mode(context: ModeContext) -> ModeResult:
    move_cursor(context, Motion.LEFT)
    return ModeResult(consumed=True, switch_to=EditorMode.NORMAL, message="exit_insert")


def save_buffer(context: ModeContext) -> ModeResult:
    """Ctrl-S: write the buffer to its current filename without leaving the mode."""

    saved = context.buffer.save()
    context.bus.emit("command.write", {"ok": saved.ok, "message": saved.message})
    return ModeResult(
        consumed=True,
        status="saved" if saved.ok else "save_failed",
        message=saved.message,
    )


def enter_command_mode(context: ModeContext) -> ModeResult:
    del context
    return ModeResult(
        consumed=True, switch_to=EditorMode.COMMAND, message="enter_command"
    )


__all__ = [
    "move_cursor",
    "enter_insert_mode",
    "insert_at_line_start",
    "append_after_cursor",
    "append_at_line_end",
    "exit_to_normal_mode",
    "save_buffer",
    "enter_command_mode",
]
