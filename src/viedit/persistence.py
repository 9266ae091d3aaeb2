"""File-system collaborator: read a file as lines, write a byte stream."""

from __future__ import annotations

import os
from typing import List, Protocol


class LineStore(Protocol):
    """What the buffer needs from persistence."""

    def read_lines(self, path: str) -> List[bytes]:
        """Return the file's lines; raise ``FileNotFoundError`` for a new file."""
        ...

    def write_bytes(self, path: str, data: bytes) -> int:
        """Replace the file's content with ``data``; return bytes written."""
        ...


class FileStore:
    """Plain-file implementation of :class:`LineStore`."""

    def __init__(self, *, mode: int = 0o644) -> None:
        self.mode = mode

    def read_lines(self, path: str) -> List[bytes]:
        with open(path, "rb") as handle:
            return handle.readlines()

    def write_bytes(self, path: str, data: bytes) -> int:
        fd = os.open(path, os.O_RDWR | os.O_CREAT, self.mode)
        with os.fdopen(fd, "wb") as handle:
            handle.truncate(len(data))
            written = handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        return written


__all__ = ["LineStore", "FileStore"]
