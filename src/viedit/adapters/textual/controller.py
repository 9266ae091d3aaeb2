"""Textual adapter that wires ModeManager results and frames into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from viedit.modes import KeyInput, ModeResult
from viedit.modes.mode_manager import ModeManager
from viedit.render import Frame, compose_frame
from viedit.runtime import telemetry


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_frame: Callable[[Frame], None]
    handle_event: Callable[[str, object | None], None] = _noop
    request_exit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges ModeManager + bus events to a Textual-friendly surface."""

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self.logger = telemetry.get_logger("viedit.adapters.textual")
        self._subscribe_events()
        self.refresh()

    @property
    def buffer(self):
        return self.manager.context.buffer

    def open(self, path: str) -> None:
        self.buffer.load(path)
        self.refresh()

    def resize(self, rows: int, cols: int) -> None:
        self.buffer.state.viewport.resize(rows, cols)
        self.refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.manager.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        self.refresh()
        if result.quit:
            self.hooks.request_exit()
        return result

    def frame(self) -> Frame:
        mode = self.manager.mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        return compose_frame(
            self.buffer,
            mode,
            config=self.manager.context.config,
            command_text=self._command_text(),
        )

    def refresh(self) -> None:
        self.hooks.update_frame(self.frame())

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in (
            "operator.apply",
            "command.start",
            "command.end",
            "command.submit",
            "command.write",
            "command.quit",
            "command.edit",
            "command.refused",
            "command.error",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _command_text(self) -> str:
        state = self.manager.context.extras.get("command_state")
        if isinstance(state, dict):
            return str(state.get("text", ""))
        return ""

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        line = " ".join(parts)
        self.logger.debug(line)
        self.hooks.log(line)

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.buffer
        mode = self.manager.mode
        return {
            "mode": mode.value if mode else "?",
            "cursor": tuple(buffer.cursor),
            "command": self._command_text(),
            "dirty": buffer.document.dirty,
            "file": buffer.filename,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
