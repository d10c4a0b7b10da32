"""A simulated disk backed by an image file."""

from __future__ import annotations

import os
from pathlib import Path

from .buf import Buf
from .fs import BSIZE, DSIZE, IMGPATH


class DiskDriver:
    """Reads and writes whole blocks of an image file."""

    def __init__(self, path: str | os.PathLike[str] = IMGPATH, size: int = DSIZE) -> None:
        self.path = Path(path)
        if not self.path.exists():
            self._create(size)

    def _create(self, size: int) -> None:
        with open(self.path, "wb") as f:
            f.write(bytes(size))

    @staticmethod
    def _offset(b: Buf) -> int:
        if b.blockno < 0:
            raise ValueError(f"buffer has no block assigned: {b.blockno}")
        return b.blockno * BSIZE

    def read(self, b: Buf) -> None:
        """Fill ``b.data`` from its block on disk."""
        offset = self._offset(b)
        with open(self.path, "rb") as f:
            f.seek(offset)
            chunk = f.read(BSIZE)
        b.data[: len(chunk)] = chunk

    def write(self, b: Buf) -> None:
        """Store ``b.data`` at its block on disk."""
        offset = self._offset(b)
        with open(self.path, "r+b") as f:
            f.seek(offset)
            f.write(bytes(b.data[:BSIZE]))

    def rw(self, b: Buf, write: bool) -> None:
        """Write ``b`` when ``write`` is true, otherwise read it."""
        if write:
            self.write(b)
        else:
            self.read(b)