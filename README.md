# blockfs

blockfs is the lower layers of a small filesystem, running on a disk that is simulated by an image file.

## Layers

- **`blockfs.disk.DiskDriver(path, size)`** reads and writes whole 1024-byte blocks of an image file. The default path is `./img/fs.img` and the default size is 8 MiB. If the file does not exist, it is created and filled with zeros. The directory that holds it is not created. `read(b)` and `write(b)` move `b.data` to and from block `b.blockno`. `rw(b, write)` chooses between the two. A buffer whose `blockno` is negative raises `ValueError`.
- **`blockfs.buf.Buf`** holds one cached block. Its fields are `blockno` (`-1` when no block is assigned), `refcnt`, `valid`, `data` (a 1024-byte `bytearray`) and `lock`.
- **`blockfs.bcache.Bcache(bufs)`** is a fixed pool of `Buf` slots. The pool is kept as a min-heap ordered by reference count, and a map from block number to heap position sits beside it.
  - `get(blockno)` returns the slot locked, with its count raised. If the block is already cached, that slot is returned. Otherwise the top-of-heap slot is claimed, provided no one refers to it.
  - `release(b)` drops a reference and unlocks the slot. When the count reaches zero, the slot is forgotten, so it can be reused.
  - `pin(b)` adds a reference, and `unpin(b)` removes one.
- **`blockfs.buffer.Buffer(path, size, nbuf)`** joins a pool of `nbuf` buffers (30 by default), a `Bcache` over them and a `DiskDriver`. Its methods are:
  - `read(blockno)` returns a locked buffer. The block is loaded from disk when the buffer is not yet valid.
  - `write(b)` stores the buffer on disk.
  - `release(b)` releases the buffer.
  - `pin(b)` and `unpin(b)` forward to the cache.
- **`blockfs.log.Logger(sb, buffer=None)`** is a write-ahead log placed at `sb.logstart`, with `sb.nlog` blocks.
  - `begin_op()` starts an operation.
  - `write(b)` records a block in the current transaction and pins it. The block is not written to disk at this point.
  - `read` and `release` pass straight through to the buffer layer.
  - `end_op()` commits, in four steps:
    1. It copies the recorded blocks into the log area.
    2. It writes the log header: a little-endian count followed by the block numbers.
    3. It installs the blocks at their home locations and unpins them.
    4. It writes an empty header.
  - `pending` shows the block numbers that are currently recorded.
- **`blockfs.fs`** holds the layout constants `BSIZE`, `DSIZE`, `LOGSIZE`, `NBUF`, `FSMAGIC` and `IMGPATH`. It also holds the `Superblock` dataclass, which has `pack()` and `unpack()` methods that use eight little-endian 32-bit fields. `init_superblock()` returns the superblock values for a fresh image.
- **`blockfs.sleeplock.SleepLock`** is a lock with `acquire()`, `release()` and `holding()`. It can also be used as a context manager.

Broken invariants raise `blockfs.errors.PanicError`. Examples are:

- releasing or writing a buffer whose lock you do not hold;
- asking for a block when every slot is referenced;
- recording more than `nlog - 1` blocks in one transaction.

## Installation

```
pip install .
```

## Example

```python
from blockfs.buffer import Buffer
from blockfs.fs import Superblock, FSMAGIC, DSIZE, BSIZE, LOGSIZE
from blockfs.log import Logger

buffer = Buffer(path="fs.img")          # created, zero-filled, if missing
b = buffer.read(3)
b.data[:2] = b"hi"
buffer.write(b)
buffer.release(b)

sb = Superblock(FSMAGIC, DSIZE, DSIZE // BSIZE, 0, LOGSIZE, 2, 2 + LOGSIZE, 3 + LOGSIZE)
logger = Logger(sb, buffer)
logger.begin_op()
b = logger.read(50)
b.data[:5] = b"hello"
logger.write(b)       # record the block in the transaction
logger.release(b)
logger.end_op()       # copy to log, commit header, install, clear
```

## What it does not do

The package stops at blocks and the log. It has no inodes, directories, files or free-block bitmap, and it has no command-line tool. `init_superblock()` only computes values: nothing writes a superblock or formats an image. A `Logger` does not recover a committed transaction left in the log when it starts. A buffer released to a reference count of zero is dropped from the cache, so the next read of that block goes to disk again.

## Running the tests

```
pip install .[test]
pytest
```