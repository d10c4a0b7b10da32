"""A fixed pool of block buffers ordered by reference count."""

from __future__ import annotations

import threading
from collections.abc import Iterable

from .buf import Buf
from .errors import PanicError


class Bcache:
    """Buffer cache: a min-heap of slots keyed by reference count.

    A map from block number to heap position finds cached blocks. When a
    block is not cached, the slot at the top of the heap is reused if no
    one refers to it.
    """

    def __init__(self, bufs: Iterable[Buf]) -> None:
        self._lock = threading.Lock()
        self._heap: list[Buf] = list(bufs)
        self._index: dict[int, int] = {}
        with self._lock:
            for position, b in enumerate(self._heap):
                if b.valid:
                    if b.blockno in self._index:
                        raise PanicError("Bcache: imap")
                    self._index[b.blockno] = position
            for position in reversed(range(len(self._heap) // 2)):
                self._sift_down(position)

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, blockno: object) -> bool:
        return blockno in self._index

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        for position in (i, j):
            blockno = heap[position].blockno
            if blockno in self._index:
                self._index[blockno] = position

    def _sift_up(self, position: int) -> None:
        heap = self._heap
        while position > 0:
            parent = (position - 1) // 2
            if heap[position].refcnt >= heap[parent].refcnt:
                break
            self._swap(position, parent)
            position = parent

    def _sift_down(self, position: int) -> None:
        heap = self._heap
        size = len(heap)
        while True:
            smallest = position
            for child in (2 * position + 1, 2 * position + 2):
                if child < size and heap[child].refcnt < heap[smallest].refcnt:
                    smallest = child
            if smallest == position:
                return
            self._swap(position, smallest)
            position = smallest

    def get(self, blockno: int) -> Buf:
        """Return the locked buffer for ``blockno``, claiming a free slot if needed."""
        with self._lock:
            position = self._index.get(blockno)
            if position is not None:
                b = self._heap[position]
                if not b.valid:
                    raise PanicError("bget: valid")
                b.refcnt += 1
                self._sift_down(position)
            else:
                if not self._heap or self._heap[0].refcnt:
                    raise PanicError("not enough buf")
                b = self._heap[0]
                b.valid = False
                b.refcnt = 1
                b.blockno = blockno
                self._index[blockno] = 0
                self._sift_down(0)
        b.lock.acquire()
        return b

    def release(self, b: Buf) -> None:
        """Drop one reference to ``b`` and unlock it; free the slot at zero."""
        if not b.lock.holding():
            raise PanicError("Bcache::brelease: lock")
        if b.refcnt <= 0:
            raise PanicError("Bcache::brelease: refcnt")
        with self._lock:
            position = self._index.get(b.blockno)
            if position is None:
                raise PanicError(f"Bcache::brelease: imap ({b})")
            b.refcnt -= 1
            self._sift_up(position)
            if b.refcnt == 0:
                del self._index[b.blockno]
                b.blockno = -1
                b.valid = False
        b.lock.release()

    def pin(self, b: Buf) -> None:
        """Add a reference so the slot stays cached after release."""
        if not b.lock.holding():
            raise PanicError("Bcache::bpin: lock")
        with self._lock:
            position = self._index.get(b.blockno)
            if position is None:
                raise PanicError("Bcache::bpin: imap")
            b.refcnt += 1
            self._sift_down(position)

    def unpin(self, b: Buf) -> None:
        """Remove a reference added by :meth:`pin`."""
        if not b.lock.holding():
            raise PanicError("Bcache::bunpin: lock")
        with self._lock:
            position = self._index.get(b.blockno)
            if position is None:
                raise PanicError("Bcache::bunpin: imap")
            if b.refcnt <= 1:
                raise PanicError("Bcache::bunpin: refcnt")
            b.refcnt -= 1
            self._sift_up(position)