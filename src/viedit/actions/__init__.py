"""High-level editing verbs reused across modes."""

from .core import (
    append_after_cursor,
    append_at_line_end,
    enter_command_mode,
    enter_insert_mode,
    exit_to_normal_mode,
    insert_at_line_start,
    move_cursor,
    save_buffer,
)
from .operators import Operator, apply_linewise, apply_operator, put
from .command import evaluate_command_line, parse_command_line

__all__ = [
    "append_after_cursor",
    "append_at_line_end",
    "enter_command_mode",
    "enter_insert_mode",
    "exit_to_normal_mode",
    "insert_at_line_start",
    "move_cursor",
    "save_buffer",
    "Operator",
    "apply_operator",
    "apply_linewise",
    "put",
    "evaluate_command_line",
    "parse_command_line",
]
