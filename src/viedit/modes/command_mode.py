"""Command-line mode with inline editing."""

from __future__ import annotations

from typing import List, MutableMapping, cast

from viedit.actions import command as command_actions
from viedit.config import EditorMode
from viedit.runtime import telemetry

from .base_mode import BACKSPACE, ENTER, ESC, KeyInput, Mode, ModeContext, ModeResult


class CommandMode(Mode):
    name = EditorMode.COMMAND

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("viedit.modes.command")
        self._typed: List[str] = []

    def on_enter(self, previous: EditorMode | None) -> None:
        del previous
        self._typed.clear()
        self.context.bus.emit("command.start", None)
        self._sync_command_state()

    def on_exit(self, next_mode: EditorMode | None) -> None:
        del next_mode
        self.context.bus.emit("command.end", self.current_command)
        self._typed.clear()
        self._sync_command_state()

    @property
    def current_command(self) -> str:
        return "".join(self._typed)

    def handle_key(self, key: KeyInput) -> ModeResult:
        if key.key == ESC or key.is_ctrl_key("c"):
            return self._cancel()

        if key.key == ENTER:
            command = self.current_command
            self.logger.debug(f"submit {command!r}")
            self._typed.clear()
            self._sync_command_state()
            result = command_actions.evaluate_command_line(self.context, command)
            result.switch_to = EditorMode.NORMAL
            return result

        if key.key == BACKSPACE or key.is_ctrl_key("h"):
            if not self._typed:
                return self._cancel()
            self._typed.pop()
            self._sync_command_state()
            return ModeResult(consumed=True, status="editing")

        char = key.printable
        if char is not None:
            self._typed.append(char)
            self._sync_command_state()
            return ModeResult(consumed=True, status="editing")

        return ModeResult(consumed=False, status="miss", message="unhandled")

    def _cancel(self) -> ModeResult:
        self._typed.clear()
        self._sync_command_state()
        return ModeResult(
            consumed=True, switch_to=EditorMode.NORMAL, message="command_cancel"
        )

    def _command_state(self) -> MutableMapping[str, object]:
        return cast(
            MutableMapping[str, object],
            self.context.extras.setdefault("command_state", {}),
        )

    def _sync_command_state(self) -> None:
        state = self._command_state()
        state["text"] = self.current_command
