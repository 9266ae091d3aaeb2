"""Normal mode: repeat counts, pending operators and motions."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from viedit.actions import core as core_actions
from viedit.actions import operators
from viedit.config import EditorMode
from viedit.motions import PAGE_KEYS, Motion, evaluate, lookup
from viedit.runtime import telemetry

from .base_mode import ESC, KeyInput, Mode, ModeContext, ModeResult

EntryAction = Callable[[ModeContext], ModeResult]


def _entry_actions() -> Dict[str, EntryAction]:
    return {
        "i": core_actions.enter_insert_mode,
        "I": core_actions.insert_at_line_start,
        "a": core_actions.append_after_cursor,
        "A": core_actions.append_at_line_end,
        ":": core_actions.enter_command_mode,
    }


class NormalMode(Mode):
    name = EditorMode.NORMAL

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("viedit.modes.normal")
        self.pending_count = 0
        self.pending_operator: Optional[operators.Operator] = None
        self._entry = _entry_actions()

    def on_enter(self, previous: EditorMode | None) -> None:
        del previous
        self.reset_pending()

    def reset_pending(self) -> None:
        self.pending_count = 0
        self.pending_operator = None

    def take_count(self) -> int:
        count = self.pending_count or 1
        self.pending_count = 0
        return count

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key.key

        if (
            not key.is_ctrl
            and token.isdigit()
            and len(token) == 1
            and (token != "0" or self.pending_count)
        ):
            self.pending_count = self.pending_count * 10 + int(token)
            return ModeResult(consumed=True, status="count")

        if token == ESC or key.is_ctrl_key("c"):
            self.reset_pending()
            return ModeResult(consumed=True, status="cancel")

        if key.is_ctrl_key("s"):
            self.reset_pending()
            return core_actions.save_buffer(self.context)
        if key.is_ctrl:
            self.reset_pending()
            return self.not_implemented(f"^{token}")

        operator = operators.OPERATOR_KEYS.get(token)
        if operator is not None:
            if self.pending_operator is operator:
                self.pending_operator = None
                return operators.apply_linewise(self.context, operator, self.take_count())
            self.pending_operator = operator
            return ModeResult(consumed=True, status="operator_pending")

        if self.pending_operator is None:
            entry = self._entry.get(token)
            if entry is not None:
                self.pending_count = 0
                return entry(self.context)
            if token == "x":
                return self._apply(operators.Operator.DELETE, Motion.RIGHT, self.take_count())
            if token in {"p", "P"}:
                self.pending_count = 0
                return operators.put(self.context, after=token == "p")

        motion = lookup(token)
        if motion is None:
            self.logger.debug(f"unmapped key {token!r}")
            self.reset_pending()
            return self.not_implemented(token)

        count = self.take_count()
        if token in PAGE_KEYS:
            count = self.context.buffer.state.viewport.screen_rows
        operator = self.pending_operator
        self.pending_operator = None
        if operator is not None:
            return self._apply(operator, motion, count)

        core_actions.move_cursor(self.context, motion, count)
        return ModeResult(consumed=True, status="motion")

    def _apply(
        self, operator: operators.Operator, motion: Motion, count: int
    ) -> ModeResult:
        buffer = self.context.buffer
        start = buffer.cursor
        end = evaluate(motion, buffer.document, start, count)
        return operators.apply_operator(self.context, operator, start, end)
