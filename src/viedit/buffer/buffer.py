"""High-level buffer façade combining document, cursor state and register."""

from __future__ import annotations

import time
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Callable, ContextManager, Iterable, Optional

from viedit.config import EditorConfig
from viedit.persistence import FileStore, LineStore
from viedit.runtime import telemetry

from .document import Document, LineInput
from .registers import YankRegister
from .state import BufferState, Position
from .validation import clamp_position, ensure_position


@dataclass(slots=True)
class StatusMessage:
    text: str = ""
    time: float = 0.0

    def visible(self, now: float, timeout: float) -> bool:
        return bool(self.text) and now - self.time < timeout


@dataclass(slots=True)
class SaveResult:
    ok: bool
    message: str


class Buffer:
    def __init__(
        self,
        *,
        document: Optional[Document] = None,
        state: Optional[BufferState] = None,
        registers: Optional[YankRegister] = None,
        config: Optional[EditorConfig] = None,
        store: Optional[LineStore] = None,
        filename: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config if config is not None else EditorConfig()
        if document is None:
            document = Document(tab_width=self.config.tab_width)
        self.document = document
        self.state = state if state is not None else BufferState()
        self.registers = registers if registers is not None else YankRegister()
        self.store: LineStore = store if store is not None else FileStore()
        self.filename = filename
        self.status = StatusMessage()
        self._clock = clock

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[LineInput],
        *,
        config: Optional[EditorConfig] = None,
        store: Optional[LineStore] = None,
        filename: Optional[str] = None,
    ) -> "Buffer":
        buffer = cls(config=config, store=store, filename=filename)
        buffer.document.from_lines(lines)
        return buffer

    @property
    def cursor(self) -> Position:
        return self.state.cursor

    def set_status(self, text: str) -> None:
        self.status = StatusMessage(text=text, time=self._clock())

    def now(self) -> float:
        return self._clock()

    def clamp(self, row: int, col: int) -> Position:
        return clamp_position(self.document, row, col)

    def scroll(self) -> None:
        self.state.scroll(self.document, self.config.tab_width)

    def get_text_range(self, start: Position, end: Position) -> str:
        """Text in the half-open range ``[start, end)`` (order-insensitive)."""

        start = ensure_position(self.document, start)
        end = ensure_position(self.document, end)
        if start > end:
            start, end = end, start
        if start.row == end.row:
            return self.document.row(start.row).chars[start.col : end.col]
        parts = [self.document.row(start.row).chars[start.col :]]
        for row in range(start.row + 1, end.row):
            parts.append(self.document.row(row).chars)
        parts.append(self.document.row(end.row).chars[: end.col])
        return "\n".join(parts)

    def delete_range(self, start: Position, end: Position) -> str:
        """Remove ``[start, end)``, joining rows; return the removed text."""

        start = ensure_position(self.document, start)
        end = ensure_position(self.document, end)
        if start > end:
            start, end = end, start
        with Transaction(self, "delete_range"):
            text = self.get_text_range(start, end)
            document = self.document
            if start.row == end.row:
                document.delete_span(start.row, start.col, end.col)
            else:
                tail = document.row(end.row).chars[end.col :]
                document.truncate_row(start.row, start.col)
                document.append_bytes(start.row, tail)
                for _ in range(end.row - start.row):
                    document.delete_row(start.row + 1)
            self.state.set_cursor(*self.clamp(start.row, start.col))
        return text

    def delete_rows(self, first: int, count: int) -> str:
        """Remove ``count`` whole rows from ``first``; return them newline-terminated."""

        with Transaction(self, "delete_rows"):
            last = min(first + count, self.document.row_count)
            removed = [self.document.row(row).chars for row in range(first, last)]
            for _ in removed:
                self.document.delete_row(first)
            self.state.set_cursor(*self.clamp(first, 0))
        return "".join(f"{line}\n" for line in removed)

    def insert_text(self, at: Position, text: str) -> Position:
        """Insert possibly multi-line ``text`` at ``at``; return the end position."""

        with Transaction(self, "insert_text"):
            document = self.document
            if at.row >= document.row_count:
                document.insert_row(document.row_count, "")
                at = Position(document.row_count - 1, 0)
            pieces = text.split("\n")
            tail = document.row(at.row).chars[at.col :]
            document.truncate_row(at.row, at.col)
            document.append_bytes(at.row, pieces[0])
            row = at.row
            for piece in pieces[1:]:
                row += 1
                document.insert_row(row, piece)
            end = Position(row, document.row_length(row))
            document.append_bytes(row, tail)
        return end

    def insert_rows(self, at: int, lines: Iterable[str]) -> None:
        with Transaction(self, "insert_rows"):
            for offset, line in enumerate(lines):
                self.document.insert_row(at + offset, line)

    def load(self, path: str) -> None:
        """Replace the document with ``path``'s content (empty if missing)."""

        with telemetry.span(
            "buffer::load", component="buffer", metadata={"path": path}
        ) as handle:
            try:
                lines = self.store.read_lines(path)
            except FileNotFoundError:
                self.document.from_lines(())
                self.set_status(f'"{path}" [New File]')
                handle.add_metadata("new_file", True)
            else:
                self.document.from_lines(lines)
                size = sum(len(line) for line in lines)
                self.set_status(f'"{path}" {len(lines)}L, {size}B')
            self.filename = path
            self.state.set_cursor(0, 0)
            self.state.viewport.reset()
        telemetry.record_event(
            "buffer.load", data={"path": path, "rows": self.document.row_count}
        )

    def save(self, path: Optional[str] = None) -> SaveResult:
        target = path or self.filename
        if not target:
            self.set_status("No filename")
            return SaveResult(ok=False, message="No filename")
        data = self.document.to_byte_stream()
        with telemetry.span(
            "buffer::save", component="buffer", metadata={"path": target}
        ):
            try:
                written = self.store.write_bytes(target, data)
            except OSError as exc:
                message = exc.strerror or str(exc)
                self.set_status(message)
                telemetry.record_event(
                    "buffer.save_failed",
                    level="warning",
                    data={"path": target, "error": message},
                )
                return SaveResult(ok=False, message=message)
        self.filename = target
        self.document.dirty = False
        message = f'"{target}" {self.document.row_count}L, {written}B written'
        self.set_status(message)
        telemetry.record_event("buffer.save", data={"path": target, "bytes": written})
        return SaveResult(ok=True, message=message)


class Transaction(AbstractContextManager["Transaction"]):
    """Groups one logical edit under a telemetry span."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"file": self.buffer.filename or "[No Name]"},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "SaveResult", "StatusMessage", "Transaction"]
