"""Editor configuration and mode constants."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

ENV_PREFIX = "VIEDIT_"

TAB_WIDTH = 8
STATUS_TIMEOUT = 5.0


class EditorMode(str, Enum):
    """Available editor modes."""

    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"
    # Declared for future extension; no key transition enters it.
    VISUAL = "visual"


DEFAULT_MODE_LABELS: Mapping[EditorMode, str] = {
    EditorMode.NORMAL: "NORMAL",
    EditorMode.INSERT: "INSERT",
    EditorMode.COMMAND: "COMMAND",
    EditorMode.VISUAL: "VISUAL",
}


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_int(name: str, fallback: int) -> int:
    value = _env(name)
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


def _env_float(name: str, fallback: float) -> float:
    value = _env(name)
    if value is None:
        return fallback
    try:
        parsed = float(value)
    except ValueError:
        return fallback
    return parsed if parsed >= 0 else fallback


@dataclass(slots=True)
class EditorConfig:
    """Tunables shared by the engine and the host adapter."""

    tab_width: int = TAB_WIDTH
    status_timeout: float = STATUS_TIMEOUT
    mode_labels: Mapping[EditorMode, str] = field(
        default_factory=lambda: dict(DEFAULT_MODE_LABELS)
    )

    def __post_init__(self) -> None:
        if self.tab_width <= 0:
            raise ValueError("tab_width must be positive")

    @classmethod
    def from_env(cls) -> "EditorConfig":
        return cls(
            tab_width=_env_int("TAB_WIDTH", TAB_WIDTH),
            status_timeout=_env_float("STATUS_TIMEOUT", STATUS_TIMEOUT),
        )

    def label_for(self, mode: EditorMode) -> str:
        return self.mode_labels.get(mode, mode.value.upper())


__all__ = [
    "EditorConfig",
    "EditorMode",
    "DEFAULT_MODE_LABELS",
    "TAB_WIDTH",
    "STATUS_TIMEOUT",
]
