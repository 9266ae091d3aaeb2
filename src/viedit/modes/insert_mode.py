"""Insert mode: text entry, row splitting and joining."""

from __future__ import annotations

from viedit.actions import core as core_actions
from viedit.buffer import Transaction
from viedit.config import EditorMode
from viedit.motions import HOST_KEYS, PAGE_KEYS
from viedit.runtime import telemetry

from .base_mode import BACKSPACE, DELETE, ENTER, ESC, KeyInput, Mode, ModeContext, ModeResult


class InsertMode(Mode):
    name = EditorMode.INSERT

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("viedit.modes.insert")

    def handle_key(self, key: KeyInput) -> ModeResult:
        if key.key == ESC or key.is_ctrl_key("c"):
            return core_actions.exit_to_normal_mode(self.context)
        if key.is_ctrl_key("s"):
            return core_actions.save_buffer(self.context)
        if key.key == ENTER:
            self.insert_newline()
            return ModeResult(consumed=True, status="newline")
        if key.key == BACKSPACE or key.is_ctrl_key("h"):
            self.delete_left()
            return ModeResult(consumed=True, status="backspace")
        if key.key == DELETE:
            self.delete_under()
            return ModeResult(consumed=True, status="delete")

        motion = HOST_KEYS.get(key.key)
        if motion is not None:
            count = 1
            if key.key in PAGE_KEYS:
                count = self.buffer.state.viewport.screen_rows
            core_actions.move_cursor(self.context, motion, count)
            return ModeResult(consumed=True, status="motion")

        char = key.printable
        if char is None:
            self.logger.debug(f"ignored key {key.key!r}")
            return ModeResult(consumed=False, status="miss", message="unhandled")
        self.insert_char(char)
        return ModeResult(consumed=True, status="insert")

    def insert_char(self, char: str) -> None:
        buffer = self.buffer
        document = buffer.document
        row, col = buffer.cursor
        if row >= document.row_count:
            document.insert_row(document.row_count, "")
            row = document.row_count - 1
        document.insert_char(row, col, char)
        buffer.state.set_cursor(row, col + 1)

    def insert_newline(self) -> None:
        buffer = self.buffer
        document = buffer.document
        row, col = buffer.cursor
        with Transaction(buffer, "newline"):
            if col == 0:
                document.insert_row(row, "")
            else:
                tail = document.row(row).chars[col:]
                document.insert_row(row + 1, tail)
                document.truncate_row(row, col)
        buffer.state.set_cursor(row + 1, 0)

    def delete_left(self) -> None:
        buffer = self.buffer
        document = buffer.document
        row, col = buffer.cursor
        if row >= document.row_count:
            # Past the last row after Return at the end: step back onto it.
            if document.row_count:
                last = document.row_count - 1
                buffer.state.set_cursor(last, document.row_length(last))
            return
        if col > 0:
            document.delete_char(row, col - 1)
            buffer.state.set_cursor(row, col - 1)
            return
        if row == 0:
            return
        with Transaction(buffer, "join_previous"):
            join_at = document.row_length(row - 1)
            document.append_bytes(row - 1, document.row(row).chars)
            document.delete_row(row)
        buffer.state.set_cursor(row - 1, join_at)

    def delete_under(self) -> None:
        buffer = self.buffer
        document = buffer.document
        row, col = buffer.cursor
        if row >= document.row_count:
            return
        if col < document.row_length(row):
            document.delete_char(row, col)
            return
        if row + 1 < document.row_count:
            with Transaction(buffer, "join_next"):
                document.append_bytes(row, document.row(row + 1).chars)
                document.delete_row(row + 1)
