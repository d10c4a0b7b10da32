"""Errors raised when the block layer detects a broken invariant."""


class PanicError(RuntimeError):
    """An unrecoverable inconsistency in the file system's internal state."""

    def __init__(self, message: str) -> None:
        super().__init__(f"panic: {message}")
        self.reason = message