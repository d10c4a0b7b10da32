import pytest

from blockfs.buf import Buf
from blockfs.buffer import Buffer
from blockfs.disk import DiskDriver
from blockfs.errors import PanicError
from blockfs.fs import BSIZE

NBLOCKS = 128


def cstr(data):
    return bytes(data).split(b"\0", 1)[0].decode()


def put(b, text):
    raw = text.encode() + b"\0"
    b.data[: len(raw)] = raw


@pytest.fixture
def image(tmp_path):
    return tmp_path / "fs.img"


@pytest.fixture
def buffer(image):
    return Buffer(image, NBLOCKS * BSIZE)


def test_write_then_read_back(buffer):
    for i in range(100):
        b = buffer.read(i)
        assert b.blockno == i
        assert b.valid
        put(b, f"woaigiegie{i}")
        buffer.write(b)
        buffer.release(b)
        again = buffer.read(i)
        assert cstr(again.data) == f"woaigiegie{i}"
        buffer.release(again)


def test_fresh_image_reads_zeros(buffer):
    b = buffer.read(10)
    assert bytes(b.data) == bytes(BSIZE)
    buffer.release(b)


def test_write_reaches_disk(buffer, image):
    b = buffer.read(3)
    put(b, "on disk")
    buffer.write(b)
    buffer.release(b)
    probe = Buf(blockno=3)
    DiskDriver(image).read(probe)
    assert cstr(probe.data) == "on disk"


def test_write_requires_lock(buffer):
    b = buffer.read(1)
    b.lock.release()
    with pytest.raises(PanicError, match="bwrite"):
        buffer.write(b)


def test_release_requires_lock(buffer):
    with pytest.raises(PanicError, match="brelse"):
        buffer.release(Buf(blockno=1))


def test_pin_and_unpin(buffer):
    b = buffer.read(9)
    buffer.pin(b)
    assert b.refcnt == 2
    buffer.unpin(b)
    assert b.refcnt == 1
    buffer.release(b)
    assert b.refcnt == 0


def test_pin_requires_lock(buffer):
    with pytest.raises(PanicError, match="bpin"):
        buffer.pin(Buf(blockno=2))