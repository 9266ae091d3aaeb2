"""Executable Textual app that hosts the editing engine."""

from __future__ import annotations

from typing import Any, Optional, Tuple

from rich.style import Style
from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from viedit.buffer import Buffer
from viedit.config import EditorConfig
from viedit.modes import ModeBus, ModeContext, create_default_manager
from viedit.modes.mode_manager import ModeManager
from viedit.render import Frame

from .controller import TextualEditorAdapter, TextualUIHooks

_NAMED_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "ctrl+h": "BACKSPACE",
    "delete": "DELETE",
    "tab": "TAB",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
    "home": "HOME",
    "end": "END",
    "pageup": "PAGEUP",
    "pagedown": "PAGEDOWN",
}

_CURSOR_STYLE = Style(reverse=True)


def build_manager(config: Optional[EditorConfig] = None) -> ModeManager:
    """Build a ModeManager around a fresh, empty buffer."""

    config = config or EditorConfig.from_env()
    buffer = Buffer(config=config)
    context = ModeContext(
        buffer=buffer,
        registers=buffer.registers,
        bus=ModeBus(),
        config=config,
        extras={},
    )
    return create_default_manager(context)


class ViEditApp(App[None], inherit_bindings=False):
    """Full-screen Textual UI embedding the editing engine."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #buffer-view {
        height: 1fr;
        padding: 0;
        content-align: left top;
    }

    #status-line {
        height: 1;
        background: $surface-darken-1;
        text-style: reverse;
    }

    #message-line {
        height: 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "request_quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        filename: Optional[str] = None,
        *,
        config: Optional[EditorConfig] = None,
    ) -> None:
        super().__init__()
        self._filename = filename
        self._config = config
        self.manager: ModeManager | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._message_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._buffer_widget = Static("", id="buffer-view")
        self._status_widget = Static("", id="status-line")
        self._message_widget = Static("", id="message-line")
        yield self._buffer_widget
        yield self._status_widget
        yield self._message_widget

    async def on_mount(self) -> None:
        self.manager = build_manager(self._config)
        hooks = TextualUIHooks(
            update_frame=self._update_frame,
            handle_event=self._handle_event,
            request_exit=self.exit,
        )
        self.adapter = TextualEditorAdapter(self.manager, hooks)
        if self._filename:
            self.adapter.open(self._filename)
        self._fit_to_screen()
        # Status messages expire on a timer, not only on key presses.
        self.set_interval(1.0, self.adapter.refresh)

    def on_resize(self, event: events.Resize) -> None:
        del event
        self._fit_to_screen()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def action_request_quit(self) -> None:
        """Run ``:q`` so unsaved changes are still protected."""

        if self.adapter is None:
            self.exit()
            return
        for key in (":", "q"):
            self.adapter.handle_textual_key(key, text=key)
        self.adapter.handle_textual_key("ENTER")

    def _fit_to_screen(self) -> None:
        if not self.adapter:
            return
        # Two lines are reserved for the status and message bars.
        self.adapter.resize(max(1, self.size.height - 2), max(1, self.size.width))

    def _update_frame(self, frame: Frame) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(self._paint_rows(frame))
        if self._status_widget:
            self._status_widget.update(Text(frame.status, no_wrap=True))
        if self._message_widget:
            message = Text(frame.message, no_wrap=True)
            if frame.cursor[0] > len(frame.rows):
                message = self._with_cursor(message, frame.cursor[1])
            self._message_widget.update(message)

    def _paint_rows(self, frame: Frame) -> Text:
        row, col = frame.cursor
        text = Text(no_wrap=True, overflow="crop")
        for index, line in enumerate(frame.rows):
            if index:
                text.append("\n")
            painted = Text(line, no_wrap=True)
            if index == row:
                painted = self._with_cursor(painted, col)
            text.append_text(painted)
        return text

    @staticmethod
    def _with_cursor(line: Text, col: int) -> Text:
        if col >= len(line):
            line.append(" " * (col - len(line) + 1))
        line.stylize(_CURSOR_STYLE, col, col + 1)
        return line

    def _handle_event(self, name: str, payload: Any | None) -> None:
        del payload
        if name in {"command.refused", "command.error"}:
            self.bell()

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key == "ctrl+q":
            return None
        if key in _NAMED_KEYS:
            return (_NAMED_KEYS[key], None, ())
        if key.startswith("ctrl+"):
            return (key[len("ctrl+") :], None, ("CTRL",))
        if event.character and event.character.isprintable():
            return (event.character, event.character, ())
        return None


__all__ = ["ViEditApp", "build_manager"]
