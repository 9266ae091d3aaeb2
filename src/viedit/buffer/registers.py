"""Single transient yank register."""

from __future__ import annotations

from dataclasses import dataclass

CHARACTER = "character"
LINE = "line"


@dataclass(slots=True)
class RegisterValue:
    text: str
    type: str = CHARACTER  # character or line


class YankRegister:
    """Holds the text of the most recent delete, yank or change."""

    def __init__(self) -> None:
        self._value = RegisterValue(text="")

    def get(self) -> RegisterValue:
        return self._value

    def yank(self, text: str, *, register_type: str = CHARACTER) -> None:
        if register_type not in (CHARACTER, LINE):
            raise ValueError(f"Unknown register type '{register_type}'")
        self._value = RegisterValue(text=text, type=register_type)

    def is_empty(self) -> bool:
        return not self._value.text


__all__ = ["RegisterValue", "YankRegister", "CHARACTER", "LINE"]
