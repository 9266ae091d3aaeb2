"""Line buffer: rows of text plus their tab-expanded render form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence, Union

from viedit.config import TAB_WIDTH

ENCODING = "utf-8"
ERRORS = "surrogateescape"

LineInput = Union[bytes, bytearray, str]


def render_form(chars: str, tab_width: int = TAB_WIDTH) -> str:
    """Expand every tab in ``chars`` to the next multiple of ``tab_width``."""

    out: List[str] = []
    column = 0
    for char in chars:
        if char == "\t":
            out.append(" ")
            column += 1
            while column % tab_width:
                out.append(" ")
                column += 1
        else:
            out.append(char)
            column += 1
    return "".join(out)


def render_column(chars: str, col: int, tab_width: int = TAB_WIDTH) -> int:
    """Return the rendered column of character offset ``col``."""

    rx = 0
    for char in chars[:col]:
        if char == "\t":
            rx += (tab_width - 1) - (rx % tab_width)
        rx += 1
    return rx


@dataclass(slots=True)
class Row:
    """One line of the document.

    ``render`` is rebuilt on every assignment to ``chars`` so the two never
    disagree.
    """

    _chars: str = ""
    tab_width: int = TAB_WIDTH
    _render: str = field(default="", init=False, repr=False)

    def __post_init__(self) -> None:
        self._render = render_form(self._chars, self.tab_width)

    @property
    def chars(self) -> str:
        return self._chars

    @chars.setter
    def chars(self, value: str) -> None:
        self._chars = value
        self._render = render_form(value, self.tab_width)

    @property
    def render(self) -> str:
        return self._render

    def __len__(self) -> int:
        return len(self._chars)


def _decode(line: LineInput) -> str:
    if isinstance(line, (bytes, bytearray)):
        return bytes(line).decode(ENCODING, ERRORS)
    return line


class Document:
    """Ordered rows with a ``dirty`` flag tracking unsaved mutations."""

    def __init__(
        self, lines: Iterable[LineInput] = (), *, tab_width: int = TAB_WIDTH
    ) -> None:
        self.tab_width = tab_width
        self._rows: List[Row] = []
        self.dirty = False
        self.from_lines(lines)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def row(self, index: int) -> Row:
        return self._rows[index]

    def row_length(self, index: int) -> int:
        """Length of row ``index``, or 0 past the end of the document."""

        if 0 <= index < len(self._rows):
            return len(self._rows[index])
        return 0

    def lines(self) -> Sequence[str]:
        return tuple(row.chars for row in self._rows)

    def insert_row(self, at: int, text: str = "") -> None:
        at = max(0, min(at, len(self._rows)))
        self._rows.insert(at, Row(text, self.tab_width))
        self.dirty = True

    def delete_row(self, at: int) -> None:
        if at < 0 or at >= len(self._rows):
            return
        del self._rows[at]
        self.dirty = True

    def insert_char(self, row: int, at: int, char: str) -> None:
        target = self._rows[row]
        if at < 0 or at > len(target):
            at = len(target)
        target.chars = target.chars[:at] + char + target.chars[at:]
        self.dirty = True

    def delete_char(self, row: int, at: int) -> None:
        target = self._rows[row]
        if at < 0 or at >= len(target):
            return
        target.chars = target.chars[:at] + target.chars[at + 1 :]
        self.dirty = True

    def append_bytes(self, row: int, text: str) -> None:
        target = self._rows[row]
        target.chars = target.chars + text
        self.dirty = True

    def truncate_row(self, row: int, at: int) -> None:
        target = self._rows[row]
        at = max(0, min(at, len(target)))
        target.chars = target.chars[:at]
        self.dirty = True

    def delete_span(self, row: int, start: int, end: int) -> None:
        target = self._rows[row]
        start = max(0, min(start, len(target)))
        end = max(start, min(end, len(target)))
        if start == end:
            return
        target.chars = target.chars[:start] + target.chars[end:]
        self.dirty = True

    def to_byte_stream(self) -> bytes:
        """Serialize every row followed by ``\\n``; empty documents give ``b""``."""

        text = "".join(f"{row.chars}\n" for row in self._rows)
        return text.encode(ENCODING, ERRORS)

    def from_lines(self, lines: Iterable[LineInput]) -> None:
        """Replace the whole document, stripping trailing ``\\n``/``\\r``."""

        self._rows = [
            Row(_decode(line).rstrip("\r\n"), self.tab_width) for line in lines
        ]
        self.dirty = False

    @classmethod
    def from_bytes(cls, data: bytes, *, tab_width: int = TAB_WIDTH) -> "Document":
        """Split on ``\\n`` only, as ``readlines`` does; a bare ``\\r`` stays in its row."""

        lines = data.split(b"\n")
        if lines[-1] == b"":
            lines.pop()
        return cls(lines, tab_width=tab_width)


__all__ = ["Document", "Row", "render_form", "render_column"]
