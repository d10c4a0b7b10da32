"""On-disk layout constants and the superblock."""

from __future__ import annotations

import struct
from dataclasses import astuple, dataclass
from typing import ClassVar

BSIZE = 1024  # block size
DSIZE = 8 * 1024 * 1024  # disk size
MAXOPBLOCKS = 10  # max # of blocks any FS op writes
LOGSIZE = MAXOPBLOCKS * 3  # max data blocks in on-disk log
NBUF = MAXOPBLOCKS * 3  # size of disk block cache

FSMAGIC = 0x10203040

IMGPATH = "./img/fs.img"

# Disk layout:
# [ boot block | super block | log | inode blocks | free bit map | data blocks ]


@dataclass
class Superblock:
    """Describes the disk layout; built by mkfs."""

    magic: int = 0  # must be FSMAGIC
    size: int = 0  # size of file system image
    nblocks: int = 0  # number of data blocks
    ninodes: int = 0  # number of inodes
    nlog: int = 0  # number of log blocks
    logstart: int = 0  # block number of first log block
    inodestart: int = 0  # block number of first inode block
    bmapstart: int = 0  # block number of first free map block

    _FORMAT: ClassVar[struct.Struct] = struct.Struct("<8I")

    def pack(self) -> bytes:
        """Encode as eight little-endian unsigned 32-bit integers."""
        try:
            return self._FORMAT.pack(*astuple(self))
        except struct.error as exc:
            raise ValueError(f"superblock field out of range: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> "Superblock":
        """Decode a superblock from the start of ``data``."""
        if len(data) < cls._FORMAT.size:
            raise ValueError("not enough bytes for a superblock")
        return cls(*cls._FORMAT.unpack_from(data))


def init_superblock() -> Superblock:
    """Return the superblock mkfs writes for a fresh image."""
    return Superblock(
        magic=FSMAGIC,
        size=DSIZE,
        nblocks=DSIZE // BSIZE,
        ninodes=0,
        nlog=LOGSIZE,
        logstart=2,
        inodestart=0,
        bmapstart=0,
    )