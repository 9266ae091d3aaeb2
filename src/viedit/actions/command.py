"""Actions that evaluate Ex-style command lines."""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict, Optional, Tuple

from viedit.config import EditorMode
from viedit.modes.base_mode import ModeContext, ModeResult
from viedit.runtime import telemetry

CommandHandler = Callable[[ModeContext, Optional[str]], ModeResult]

NO_WRITE = "No write since last change (add ! to override)"
NO_FILENAME = "No filename"


def parse_command_line(text: str) -> Tuple[str, Optional[str]]:
    """Split a trimmed command line into its verb and optional argument."""

    parts = text.strip().split(None, 1)
    if not parts:
        return "", None
    verb = parts[0]
    argument = parts[1].lstrip() if len(parts) > 1 else ""
    return verb, argument or None


def evaluate_command_line(context: ModeContext, text: str) -> ModeResult:
    verb, argument = parse_command_line(text)
    context.bus.emit("command.submit", text.strip())
    if not verb:
        return ModeResult(
            consumed=True, switch_to=EditorMode.NORMAL, status="command_empty"
        )
    handler = _COMMAND_HANDLERS.get(verb)
    if handler is None:
        return _unknown_command(context, verb)
    with telemetry.span(
        "command::evaluate",
        component="command",
        metadata={"verb": verb, "argument": argument or ""},
    ):
        return handler(context, argument)


def _result(status: str, message: Optional[str] = None, *, quit: bool = False) -> ModeResult:
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status=status,
        message=message,
        quit=quit,
    )


def _refuse(context: ModeContext, verb: str) -> ModeResult:
    context.buffer.set_status(NO_WRITE)
    context.bus.emit("command.refused", verb)
    telemetry.record_event("command.refused", level="warning", data={"verb": verb})
    return _result("command_refused", NO_WRITE)


def _unknown_command(context: ModeContext, verb: str) -> ModeResult:
    message = f"Not implemented: {verb}"
    context.buffer.set_status(message)
    context.bus.emit("command.error", verb)
    return _result("command_error", message)


def _handle_quit(
    context: ModeContext, argument: Optional[str], *, force: bool = False
) -> ModeResult:
    del argument
    if context.buffer.document.dirty and not force:
        return _refuse(context, "q")
    context.bus.emit("command.quit", {"force": force})
    return _result("command_quit_force" if force else "command_quit", quit=True)


def _handle_write(context: ModeContext, argument: Optional[str]) -> ModeResult:
    saved = context.buffer.save(argument)
    context.bus.emit("command.write", {"ok": saved.ok, "message": saved.message})
    return _result("command_write" if saved.ok else "command_write_failed", saved.message)


def _handle_wq(context: ModeContext, argument: Optional[str]) -> ModeResult:
    saved = context.buffer.save(argument)
    context.bus.emit("command.write", {"ok": saved.ok, "message": saved.message})
    if not saved.ok:
        return _result("command_write_failed", saved.message)
    context.bus.emit("command.quit", {"force": False})
    return _result("command_wq", saved.message, quit=True)


def _handle_edit(
    context: ModeContext, argument: Optional[str], *, force: bool = False
) -> ModeResult:
    buffer = context.buffer
    if buffer.document.dirty and not force:
        return _refuse(context, "e")
    path = argument or buffer.filename
    if not path:
        buffer.set_status(NO_FILENAME)
        return _result("command_edit_failed", NO_FILENAME)
    try:
        buffer.load(path)
    except OSError as exc:
        message = exc.strerror or str(exc)
        buffer.set_status(message)
        return _result("command_edit_failed", message)
    context.bus.emit("command.edit", {"force": force, "path": path})
    return _result("command_edit_force" if force else "command_edit", buffer.status.text)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "q": _handle_quit,
    "q!": partial(_handle_quit, force=True),
    "w": _handle_write,
    "wq": _handle_wq,
    "e": _handle_edit,
    "e!": partial(_handle_edit, force=True),
}


__all__ = [
    "evaluate_command_line",
    "parse_command_line",
    "NO_WRITE",
    "NO_FILENAME",
]
