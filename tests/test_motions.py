from __future__ import annotations

import pytest

from viedit.buffer import Document, Position
from viedit.motions import HOST_KEYS, MOTION_KEYS, Motion, evaluate, lookup

LINES = ["hello", "hi", "", "world!"]


def make_document() -> Document:
    return Document(LINES)


def test_horizontal_motions_stop_at_row_edges() -> None:
    document = make_document()

    assert evaluate(Motion.LEFT, document, Position(0, 0)) == Position(0, 0)
    assert evaluate(Motion.LEFT, document, Position(0, 4), 2) == Position(0, 2)
    assert evaluate(Motion.RIGHT, document, Position(0, 0), 10) == Position(0, 5)


def test_vertical_motions_clamp_row_and_column() -> None:
    document = make_document()

    assert evaluate(Motion.DOWN, document, Position(0, 4)) == Position(1, 2)
    assert evaluate(Motion.DOWN, document, Position(0, 4), 10) == Position(3, 4)
    assert evaluate(Motion.UP, document, Position(0, 3)) == Position(0, 3)
    assert evaluate(Motion.UP, document, Position(3, 6), 2) == Position(1, 2)


def test_line_start_and_end_take_count_as_extra_rows() -> None:
    document = make_document()

    assert evaluate(Motion.LINE_START, document, Position(0, 3)) == Position(0, 0)
    assert evaluate(Motion.LINE_START, document, Position(0, 3), 2) == Position(1, 0)
    assert evaluate(Motion.LINE_END, document, Position(0, 0)) == Position(0, 5)
    assert evaluate(Motion.LINE_END, document, Position(0, 0), 2) == Position(1, 2)


def test_first_and_last_line_are_idempotent() -> None:
    document = make_document()
    start = Position(1, 1)

    first = evaluate(Motion.FIRST_LINE, document, start)
    last = evaluate(Motion.LAST_LINE, document, start)

    assert first == Position(0, 1)
    assert evaluate(Motion.FIRST_LINE, document, first) == first
    assert last == Position(3, 1)
    assert evaluate(Motion.LAST_LINE, document, last) == last


@pytest.mark.parametrize(
    "motion",
    [
        Motion.WORD_FORWARD,
        Motion.WORD_BACKWARD,
        Motion.BIGWORD_FORWARD,
        Motion.BIGWORD_BACKWARD,
    ],
)
def test_word_motions_stay_put(motion: Motion) -> None:
    assert evaluate(motion, make_document(), Position(0, 2), 3) == Position(0, 2)


@pytest.mark.parametrize("motion", list(Motion))
def test_every_motion_lands_inside_the_document(motion: Motion) -> None:
    document = make_document()
    for row, line in enumerate(LINES):
        for col in range(len(line) + 1):
            for count in (1, 3, 50):
                target = evaluate(motion, document, Position(row, col), count)
                assert 0 <= target.row < document.row_count
                assert 0 <= target.col <= document.row_length(target.row)
    assert list(document.lines()) == LINES
    assert document.dirty is False


@pytest.mark.parametrize("motion", list(Motion))
def test_motions_on_empty_document_return_origin(motion: Motion) -> None:
    assert evaluate(motion, Document(), Position(0, 0), 4) == Position(0, 0)


def test_lookup_covers_vi_and_host_keys() -> None:
    assert lookup("j") is Motion.DOWN
    assert lookup("$") is Motion.LINE_END
    assert lookup("HOME") is Motion.LINE_START
    assert lookup("PAGEDOWN") is Motion.DOWN
    assert lookup("z") is None
    assert set(MOTION_KEYS) == {m.value for m in Motion}
    assert set(HOST_KEYS.values()) <= set(Motion)
