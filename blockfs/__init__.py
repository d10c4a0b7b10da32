"""Simulated block disk with a reference-counted buffer cache and a write-ahead log."""

__version__ = "0.1.0"

__all__ = ["bcache", "buf", "buffer", "disk", "errors", "fs", "log", "sleeplock"]