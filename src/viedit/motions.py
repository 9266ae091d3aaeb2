"""Motion table: key -> motion kind -> ``(document, position, count) -> position``."""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional

from viedit.buffer.document import Document
from viedit.buffer.state import Position
from viedit.buffer.validation import clamp_position


class Motion(str, Enum):
    LEFT = "h"
    RIGHT = "l"
    UP = "k"
    DOWN = "j"
    LINE_START = "_"
    LINE_END = "$"
    FIRST_LINE = "g"
    LAST_LINE = "G"
    # Word motions are declared but not implemented yet: vi treats w/b as
    # word (alphanumeric run) boundaries and W/B as WORD (whitespace
    # separated) boundaries. Until then they return the start position.
    WORD_FORWARD = "w"
    WORD_BACKWARD = "b"
    BIGWORD_FORWARD = "W"
    BIGWORD_BACKWARD = "B"


MOTION_KEYS: Mapping[str, Motion] = {motion.value: motion for motion in Motion}

# Host key names resolving to the same motions. PAGE_KEYS repeat their
# motion once per screen row.
HOST_KEYS: Mapping[str, Motion] = {
    "LEFT": Motion.LEFT,
    "RIGHT": Motion.RIGHT,
    "UP": Motion.UP,
    "DOWN": Motion.DOWN,
    "HOME": Motion.LINE_START,
    "END": Motion.LINE_END,
    "PAGEUP": Motion.UP,
    "PAGEDOWN": Motion.DOWN,
}
PAGE_KEYS = frozenset({"PAGEUP", "PAGEDOWN"})

UNIMPLEMENTED = frozenset(
    {
        Motion.WORD_FORWARD,
        Motion.WORD_BACKWARD,
        Motion.BIGWORD_FORWARD,
        Motion.BIGWORD_BACKWARD,
    }
)


def lookup(key: str) -> Optional[Motion]:
    return MOTION_KEYS.get(key) or HOST_KEYS.get(key)


def _down(document: Document, start: Position, count: int) -> Position:
    last_row = max(0, document.row_count - 1)
    row = start.row + max(0, min(count, last_row - start.row))
    return clamp_position(document, row, start.col)


def _up(document: Document, start: Position, count: int) -> Position:
    row = start.row - min(count, start.row)
    return clamp_position(document, row, start.col)


def evaluate(
    motion: Motion, document: Document, start: Position, count: int = 1
) -> Position:
    """Return where ``motion`` repeated ``count`` times ends; never mutates."""

    count = max(1, count)
    start = clamp_position(document, start.row, start.col)
    row, col = start

    if motion is Motion.LEFT:
        return Position(row, col - min(count, col))
    if motion is Motion.RIGHT:
        return Position(row, col + min(count, document.row_length(row) - col))
    if motion is Motion.UP:
        return _up(document, start, count)
    if motion is Motion.DOWN:
        return _down(document, start, count)
    if motion is Motion.LINE_START:
        return _down(document, Position(row, 0), count - 1)
    if motion is Motion.LINE_END:
        return _down(document, Position(row, document.row_length(row)), count - 1)
    if motion is Motion.FIRST_LINE:
        return clamp_position(document, 0, col)
    if motion is Motion.LAST_LINE:
        return clamp_position(document, document.row_count - 1, col)
    if motion in UNIMPLEMENTED:
        return start
    raise ValueError(f"Unknown motion {motion!r}")


__all__ = [
    "Motion",
    "MOTION_KEYS",
    "HOST_KEYS",
    "PAGE_KEYS",
    "UNIMPLEMENTED",
    "lookup",
    "evaluate",
]
