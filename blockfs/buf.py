"""In-memory copy of one disk block."""

from __future__ import annotations

from dataclasses import dataclass, field

from .fs import BSIZE
from .sleeplock import SleepLock


@dataclass(eq=False)
class Buf:
    """A cache slot: block number, reference count, validity and data."""

    blockno: int = -1  # -1 means no block assigned
    refcnt: int = 0
    valid: bool = False
    data: bytearray = field(default_factory=lambda: bytearray(BSIZE))
    lock: SleepLock = field(default_factory=SleepLock, repr=False)

    def __str__(self) -> str:
        text = bytes(self.data).split(b"\0", 1)[0].decode("latin-1")
        return (
            f"blockno = {self.blockno}, refcnt = {self.refcnt}, "
            f"valid = {int(self.valid)}, data = {text}, "
            f"locked={int(self.lock.holding())}"
        )