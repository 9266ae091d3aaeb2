"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from viedit.buffer import Buffer, YankRegister
from viedit.config import EditorConfig, EditorMode

# Named key symbols supplied by the host.
ESC = "ESC"
ENTER = "ENTER"
BACKSPACE = "BACKSPACE"
DELETE = "DELETE"
TAB = "TAB"
CTRL = "CTRL"


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def is_ctrl(self) -> bool:
        return CTRL in self.modifiers

    def is_ctrl_key(self, letter: str) -> bool:
        return self.is_ctrl and self.key.lower() == letter

    @property
    def printable(self) -> Optional[str]:
        """The character this key inserts, if any."""

        if self.is_ctrl:
            return None
        if self.key == TAB:
            return "\t"
        if self.text and len(self.text) == 1 and self.text.isprintable():
            return self.text
        if len(self.key) == 1 and self.key.isprintable():
            return self.key
        return None


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[EditorMode] = None
    status: str = "ok"
    message: Optional[str] = None
    quit: bool = False


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    buffer: Buffer
    registers: YankRegister
    bus: "ModeBus"
    config: EditorConfig = field(default_factory=EditorConfig)
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: EditorMode = EditorMode.NORMAL

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def buffer(self) -> Buffer:
        return self.context.buffer

    def on_enter(
        self, previous: Optional[EditorMode]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[EditorMode]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def not_implemented(self, what: str) -> ModeResult:
        message = f"Not implemented: {what}"
        self.buffer.set_status(message)
        return ModeResult(consumed=True, status="not_implemented", message=message)
