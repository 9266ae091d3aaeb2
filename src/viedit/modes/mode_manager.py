"""Mode manager coordinating Normal/Insert/Command handlers."""

from __future__ import annotations

from typing import Dict, Optional, Type

from viedit.config import EditorMode
from viedit.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .command_mode import CommandMode
from .insert_mode import InsertMode
from .normal_mode import NormalMode


class ModeManager:
    """Owns the active mode, handles transitions and dispatches key events.

    Every key is processed to completion (transition, buffer mutation) before
    ``handle_key`` returns; there are no timers or background work.
    """

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self._modes: Dict[EditorMode, Mode] = {}
        self._active: Optional[EditorMode] = None
        self.quit_requested = False
        self.logger = telemetry.get_logger("viedit.modes")

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def mode(self) -> Optional[EditorMode]:
        return self._active

    def get_mode(self, name: EditorMode) -> Mode:
        return self._modes[name]

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name.value}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: EditorMode) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self.logger.debug(f"switch -> {name.value}")
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", data={"mode": name.value})

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name.value}",
            component=True,
            metadata={"key": key.key, "mode": mode.name.value},
        ):
            result = mode.handle_key(key)
        return self._after_mode_result(result)

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        if result.switch_to:
            self.switch_mode(result.switch_to)
        if result.quit:
            self.quit_requested = True
        return result


def create_default_manager(context: ModeContext) -> ModeManager:
    """Build a ModeManager with Normal, Insert and Command registered."""

    manager = ModeManager(context)
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)
    manager.register_mode(CommandMode)
    return manager
