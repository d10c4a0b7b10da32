"""Write-ahead log that groups block writes into atomic transactions."""

from __future__ import annotations

import struct

from .buf import Buf
from .buffer import Buffer
from .errors import PanicError
from .fs import Superblock
from .sleeplock import SleepLock


class Logger:
    """Records modified blocks and commits them through an on-disk log.

    The log occupies ``sb.nlog`` blocks from ``sb.logstart``: a header
    block holding the count and block numbers, followed by the copies.
    """

    def __init__(self, sb: Superblock, buffer: Buffer | None = None) -> None:
        self._lock = SleepLock()
        self.start = sb.logstart
        self.size = sb.nlog
        self.outstanding = 0
        self._blocks: list[int] = []
        self._bf = buffer if buffer is not None else Buffer()

    @property
    def pending(self) -> tuple[int, ...]:
        """Block numbers recorded in the current transaction."""
        return tuple(self._blocks)

    def _require_lock(self, where: str) -> None:
        if not self._lock.holding():
            raise PanicError(f"Logger::{where}: lock")

    def _write_trans(self) -> None:
        self._require_lock("writeTrans")
        for slot, blockno in enumerate(self._blocks, start=self.start + 1):
            src = self._bf.read(blockno)
            dst = self._bf.read(slot)
            dst.data[:] = src.data
            self._bf.write(dst)
            self._bf.release(src)
            self._bf.release(dst)

    def _write_head(self) -> None:
        self._require_lock("writeHead")
        b = self._bf.read(self.start)
        count = len(self._blocks)
        struct.pack_into(f"<I{count}I", b.data, 0, count, *self._blocks)
        self._bf.write(b)
        self._bf.release(b)

    def _install_trans(self, recovering: bool) -> None:
        for slot, blockno in enumerate(self._blocks, start=self.start + 1):
            src = self._bf.read(slot)
            dst = self._bf.read(blockno)
            dst.data[:] = src.data
            self._bf.write(dst)
            if not recovering:
                self._bf.unpin(dst)
            self._bf.release(dst)
            self._bf.release(src)

    def begin_op(self) -> None:
        with self._lock:
            self.outstanding += 1

    def write(self, b: Buf) -> None:
        """Record ``b`` in the transaction without writing it to disk."""
        if not b.lock.holding():
            raise PanicError("Logger.write: lock")
        with self._lock:
            if len(self._blocks) >= self.size - 1:
                raise PanicError("Logger.write: too much operation")
            if b.blockno not in self._blocks:
                self._blocks.append(b.blockno)
                self._bf.pin(b)

    def read(self, blockno: int) -> Buf:
        return self._bf.read(blockno)

    def release(self, b: Buf) -> None:
        self._bf.release(b)

    def end_op(self) -> None:
        """Commit: copy to the log, write the header, install, clear the log."""
        with self._lock:
            self._write_trans()
            self._write_head()
            self._install_trans(recovering=False)
            self._blocks.clear()
            self._write_head()