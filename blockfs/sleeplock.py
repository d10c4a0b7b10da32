"""A lock that also reports whether it is currently held."""

from __future__ import annotations

import threading


class SleepLock:
    """A blocking mutual-exclusion lock with a ``holding`` query."""

    def __init__(self) -> None:
        self._mutex = threading.Lock()
        self._locked = False

    def acquire(self) -> None:
        self._mutex.acquire()
        self._locked = True

    def release(self) -> None:
        if not self._locked:
            raise RuntimeError("release of an unheld SleepLock")
        self._locked = False
        self._mutex.release()

    def holding(self) -> bool:
        return self._locked

    def __enter__(self) -> "SleepLock":
        self.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()