"""Cursor, render position and viewport state for a buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

from viedit.config import TAB_WIDTH

from .document import Document, render_column


class Position(NamedTuple):
    """Logical cursor; tuples compare in document order."""

    row: int
    col: int


@dataclass(slots=True)
class Viewport:
    """Top-left corner and size of the visible window into the document."""

    row_offset: int = 0
    col_offset: int = 0
    screen_rows: int = 24
    screen_cols: int = 80

    def resize(self, rows: int, cols: int) -> None:
        self.screen_rows = max(1, rows)
        self.screen_cols = max(1, cols)

    def scroll(self, ry: int, rx: int) -> None:
        if ry < self.row_offset:
            self.row_offset = ry
        if ry >= self.row_offset + self.screen_rows:
            self.row_offset = ry - self.screen_rows + 1
        if rx < self.col_offset:
            self.col_offset = rx
        if rx >= self.col_offset + self.screen_cols:
            self.col_offset = rx - self.screen_cols + 1

    def reset(self) -> None:
        self.row_offset = 0
        self.col_offset = 0


@dataclass(slots=True)
class BufferState:
    """Mutable cursor + viewport info tied to a Document."""

    cursor: Position = Position(0, 0)
    rx: int = 0
    ry: int = 0
    viewport: Viewport = field(default_factory=Viewport)

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = Position(row, col)

    def compute_render_position(
        self, document: Document, tab_width: int = TAB_WIDTH
    ) -> None:
        row, col = self.cursor
        self.ry = row
        self.rx = 0
        if row < document.row_count:
            self.rx = render_column(document.row(row).chars, col, tab_width)

    def scroll(self, document: Document, tab_width: int = TAB_WIDTH) -> None:
        """Recompute the render position and pull the viewport onto it."""

        self.compute_render_position(document, tab_width)
        self.viewport.scroll(self.ry, self.rx)


__all__ = ["Position", "Viewport", "BufferState"]
