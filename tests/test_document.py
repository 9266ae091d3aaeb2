from __future__ import annotations

from viedit.buffer import Document, Row, render_column, render_form


def test_render_expands_tabs_to_next_stop() -> None:
    assert render_form("\tab") == " " * 8 + "ab"
    assert render_form("abc\td") == "abc" + " " * 5 + "d"
    assert render_form("a\tb", tab_width=4) == "a   b"


def test_render_column_matches_render_form() -> None:
    chars = "x\ty\t\tz"
    for col in range(len(chars) + 1):
        assert render_column(chars, col) == len(render_form(chars[:col]))


def test_row_render_tracks_every_assignment() -> None:
    row = Row("ab")
    row.chars = "\tab"

    assert row.render == " " * 8 + "ab"
    assert len(row) == 3


def test_document_edits_keep_render_consistent() -> None:
    document = Document(["abc"])
    document.insert_char(0, 1, "\t")
    document.append_bytes(0, "\tz")
    document.delete_span(0, 0, 1)

    row = document.row(0)
    assert row.chars == "\tbc\tz"
    assert row.render == render_form(row.chars)
    assert document.dirty is True


def test_from_lines_strips_line_endings_and_clears_dirty() -> None:
    document = Document()
    document.insert_row(0, "scratch")

    document.from_lines([b"one\r\n", b"two\n", b"three"])

    assert document.lines() == ("one", "two", "three")
    assert document.dirty is False


def test_byte_stream_terminates_every_row() -> None:
    assert Document(["a", "", "b"]).to_byte_stream() == b"a\n\nb\n"
    assert Document().to_byte_stream() == b""


def test_undecodable_bytes_survive_a_round_trip() -> None:
    data = b"caf\xe9\n\xff\xfe\n"

    assert Document.from_bytes(data).to_byte_stream() == data


def test_out_of_range_edits_are_clamped_or_ignored() -> None:
    document = Document(["abc"])

    document.insert_char(0, 99, "!")
    assert document.row(0).chars == "abc!"

    document.dirty = False
    document.delete_char(0, 10)
    document.delete_row(5)
    assert document.lines() == ("abc!",)
    assert document.dirty is False

    document.insert_row(99, "tail")
    assert document.lines() == ("abc!", "tail")
    assert document.row_length(7) == 0


def test_bare_carriage_return_stays_inside_its_row() -> None:
    document = Document.from_bytes(b"a\rb\nc\n")

    assert document.lines() == ("a\rb", "c")
    assert document.to_byte_stream() == b"a\rb\nc\n"
    assert Document.from_bytes(b"").row_count == 0
