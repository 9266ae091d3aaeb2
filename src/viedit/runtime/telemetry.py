"""telelog wiring for the editor.

The terminal belongs to the editor while it runs, so console output stays off
unless ``VIEDIT_LOG_CONSOLE`` is set. ``VIEDIT_LOG_FILE`` keeps a log on disk,
``VIEDIT_LOG_LEVEL`` picks the threshold and ``VIEDIT_LOG_JSON`` switches the
format.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from typing import Any, Dict, Iterator, List, Optional

import telelog  # type: ignore[import]

ROOT_LOGGER = "viedit"
PRESETS = ("development", "quiet")

_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


def _setting(name: str) -> Optional[str]:
    return os.getenv(f"VIEDIT_{name}")


def _enabled(name: str) -> bool:
    return (_setting(name) or "").lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    return value if isinstance(value, str) else repr(value)


def _config_from_env(preset: Optional[str] = None) -> Any:
    config = telelog.Config()
    if preset == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
    elif preset == "quiet":
        config.with_min_level("WARNING")
        config.with_console_output(False)
    elif preset is None:
        config.with_min_level((_setting("LOG_LEVEL") or "INFO").upper())
        console = _enabled("LOG_CONSOLE")
        config.with_console_output(console)
        if console:
            config.with_colored_output(not _enabled("NO_COLOR"))
        config.with_json_format(_enabled("LOG_JSON"))
    else:
        raise ValueError(f"Unknown preset '{preset}', expected one of {PRESETS}")

    if _setting("LOG_FILE"):
        config.with_file_output(_setting("LOG_FILE"))
    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Install a telelog config (explicit, preset, or from the environment)."""

    global _config
    if config is not None and preset is not None:
        raise ValueError("Pass either `config` or `preset`, not both.")
    _config = config if config is not None else _config_from_env(preset)
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Cached ``telelog.Logger`` for ``name`` (default: the root editor logger)."""

    global _config
    name = name or ROOT_LOGGER
    if _config is None:
        _config = _config_from_env()
    if name not in _loggers:
        _loggers[name] = telelog.Logger.with_config(name, _config)
    return _loggers[name]


def _write(log: Any, level: str, message: str, fields: Dict[str, Any]) -> None:
    structured = getattr(log, f"{level}_with", None)
    if structured is not None:
        structured(message, [(str(k), _text(v)) for k, v in fields.items()])
    else:
        getattr(log, level)(f"{message} {fields}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` attached as key/value pairs."""

    _write(
        get_logger(logger_name),
        level.lower(),
        f"event::{name}",
        {"event": name, **(data or {})},
    )


class SpanHandle:
    """Lets the body of a ``span`` attach more context while it runs."""

    def __init__(self, log: Any) -> None:
        self._log = log
        self.keys: List[str] = []

    def add_metadata(self, key: str, value: Any) -> None:
        self._log.add_context(key, _text(value))
        self.keys.append(key)


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> Iterator[SpanHandle]:
    """Profile a block; ``component`` also tracks it (``True`` reuses ``name``).

    ``metadata`` is logger context for the duration of the block. A failing
    block logs ``span::fail`` before the exception propagates.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(log)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)

    with ExitStack() as stack:
        if component:
            stack.enter_context(
                log.track_component(name if component is True else component)
            )
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            _write(log, "error", "span::fail", {"span": name, "reason": str(exc)})
            raise
        finally:
            for key in handle.keys:
                log.remove_context(key)


__all__ = ["SpanHandle", "configure", "get_logger", "record_event", "span"]
