"""Block reads and writes through the buffer cache."""

from __future__ import annotations

import os

from .bcache import Bcache
from .buf import Buf
from .disk import DiskDriver
from .errors import PanicError
from .fs import DSIZE, IMGPATH, NBUF


class Buffer:
    """Owns a pool of buffers, their cache and the disk behind them."""

    def __init__(
        self,
        path: str | os.PathLike[str] = IMGPATH,
        size: int = DSIZE,
        nbuf: int = NBUF,
    ) -> None:
        self._bufs = [Buf() for _ in range(nbuf)]
        self._cache = Bcache(self._bufs)
        self._disk = DiskDriver(path, size)

    def read(self, blockno: int) -> Buf:
        """Return a locked buffer holding the contents of ``blockno``."""
        b = self._cache.get(blockno)
        if not b.valid:
            self._disk.read(b)
            b.valid = True
        return b

    def write(self, b: Buf) -> None:
        """Write ``b`` to disk; the caller must hold its lock."""
        if not b.lock.holding():
            raise PanicError("Buffer::bwrite: lock")
        self._disk.write(b)

    def release(self, b: Buf) -> None:
        """Release a buffer obtained from :meth:`read`."""
        if not b.lock.holding():
            raise PanicError("Buffer::brelse: lock")
        self._cache.release(b)

    def pin(self, b: Buf) -> None:
        if not b.lock.holding():
            raise PanicError("Buffer::bpin: lock")
        self._cache.pin(b)

    def unpin(self, b: Buf) -> None:
        if not b.lock.holding():
            raise PanicError("Buffer::bunpin: lock")
        self._cache.unpin(b)