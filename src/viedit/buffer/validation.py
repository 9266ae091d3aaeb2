"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import Document
from .state import Position


class BufferValidationError(RuntimeError):
    """Raised when a caller hands the buffer an out-of-bounds position."""

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position = position


def ensure_position(document: Document, position: Position) -> Position:
    row, col = position
    if row < 0 or row >= document.row_count:
        raise BufferValidationError("Row out of range", position=position)
    if col < 0 or col > document.row_length(row):
        raise BufferValidationError("Column out of range", position=position)
    return position


def clamp_position(document: Document, row: int, col: int) -> Position:
    """Clamp to ``[0, row_count-1]`` x ``[0, len(row)]`` (origin when empty)."""

    max_row = max(0, document.row_count - 1)
    row = max(0, min(row, max_row))
    col = max(0, min(col, document.row_length(row)))
    return Position(row, col)


__all__ = ["BufferValidationError", "ensure_position", "clamp_position"]
