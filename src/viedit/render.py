"""Compose a frame (render commands) from the engine state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from viedit import __version__
from viedit.buffer import Buffer
from viedit.config import EditorConfig, EditorMode

BANNER = f"viedit -- version {__version__}"
FILLER = "~"


@dataclass(slots=True)
class Frame:
    """Everything the host needs to paint one screen."""

    rows: List[str]
    status: str
    message: str
    cursor: Tuple[int, int]  # (screen row, screen column)


def _banner_row(screen_cols: int) -> str:
    message = BANNER[:screen_cols]
    padding = (screen_cols - len(message)) // 2
    if padding > 0:
        return FILLER + " " * (padding - 1) + message
    return message


def draw_rows(buffer: Buffer) -> List[str]:
    document = buffer.document
    viewport = buffer.state.viewport
    rows: List[str] = []
    for y in range(viewport.screen_rows):
        file_row = y + viewport.row_offset
        if document.row_count == 0:
            rows.append(
                _banner_row(viewport.screen_cols)
                if y == viewport.screen_rows // 3
                else FILLER
            )
        elif file_row >= document.row_count:
            rows.append(FILLER)
        else:
            render = document.row(file_row).render
            start = viewport.col_offset
            rows.append(render[start : start + viewport.screen_cols])
    return rows


def draw_status(buffer: Buffer, mode: EditorMode, config: EditorConfig) -> str:
    screen_cols = buffer.state.viewport.screen_cols
    name = (buffer.filename or "[No Name]")[:20]
    dirty = " [+]" if buffer.document.dirty else ""
    left = (
        f"{config.label_for(mode)} - {name}{dirty} - "
        f"{buffer.document.row_count} lines"
    )
    row, col = buffer.cursor
    right = f"{col + 1}:{row + 1}"
    left = left[:screen_cols]
    gap = screen_cols - len(left) - len(right)
    if gap < 0:
        return left.ljust(screen_cols)
    return left + " " * gap + right


def compose_frame(
    buffer: Buffer,
    mode: EditorMode,
    *,
    config: Optional[EditorConfig] = None,
    command_text: Optional[str] = None,
    now: Optional[float] = None,
) -> Frame:
    """Scroll the viewport onto the cursor, then describe the visible screen."""

    config = config or buffer.config
    buffer.scroll()
    viewport = buffer.state.viewport
    screen_cols = viewport.screen_cols

    if mode is EditorMode.COMMAND:
        message = f":{command_text or ''}"[:screen_cols]
        cursor = (viewport.screen_rows + 1, min(len(message), screen_cols - 1))
    else:
        now = buffer.now() if now is None else now
        message = ""
        if buffer.status.visible(now, config.status_timeout):
            message = buffer.status.text[:screen_cols]
        cursor = (
            buffer.state.ry - viewport.row_offset,
            buffer.state.rx - viewport.col_offset,
        )

    return Frame(
        rows=draw_rows(buffer),
        status=draw_status(buffer, mode, config),
        message=message,
        cursor=cursor,
    )


__all__ = ["Frame", "compose_frame", "draw_rows", "draw_status", "BANNER"]
