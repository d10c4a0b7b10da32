import pytest

from blockfs.bcache import Bcache
from blockfs.buf import Buf
from blockfs.errors import PanicError
from blockfs.fs import NBUF


@pytest.fixture
def cache():
    return Bcache([Buf() for _ in range(NBUF)])


def test_build_has_all_slots(cache):
    assert len(cache) == NBUF
    assert 0 not in cache


def test_get_release_cycle(cache):
    for i in range(100):
        blockno = i % 30
        b = cache.get(blockno)
        assert (b.refcnt, b.valid, b.blockno) == (1, False, blockno)
        assert b.lock.holding()
        assert blockno in cache
        cache.release(b)
        assert b.refcnt == 0
        assert b.blockno == -1
        assert not b.lock.holding()
        assert blockno not in cache


def test_runs_out_of_buffers(cache):
    held = [cache.get(n) for n in range(NBUF)]
    assert len({id(b) for b in held}) == NBUF
    with pytest.raises(PanicError, match="not enough buf"):
        cache.get(NBUF)


def test_cached_block_is_shared():
    b = Buf(blockno=3, refcnt=1, valid=True)
    cache = Bcache([b, Buf(), Buf()])
    got = cache.get(3)
    assert got is b
    assert got.refcnt == 2


def test_duplicate_valid_blocks_panic():
    with pytest.raises(PanicError):
        Bcache([Buf(blockno=1, valid=True), Buf(blockno=1, valid=True)])


def test_get_of_invalid_cached_block_panics(cache):
    cache.get(5)
    with pytest.raises(PanicError, match="bget: valid"):
        cache.get(5)


def test_release_requires_lock(cache):
    b = cache.get(2)
    b.lock.release()
    with pytest.raises(PanicError, match="lock"):
        cache.release(b)


def test_release_requires_reference():
    b = Buf()
    b.lock.acquire()
    with pytest.raises(PanicError, match="refcnt"):
        Bcache([b]).release(b)


def test_pin_keeps_block_cached(cache):
    b = cache.get(7)
    b.valid = True
    cache.pin(b)
    assert b.refcnt == 2
    cache.release(b)
    assert b.refcnt == 1
    assert 7 in cache
    again = cache.get(7)
    assert again is b
    cache.unpin(again)
    assert again.refcnt == 1
    cache.release(again)
    assert 7 not in cache


def test_unpin_to_zero_panics(cache):
    b = cache.get(4)
    with pytest.raises(PanicError, match="refcnt"):
        cache.unpin(b)


def test_free_slot_reused_when_others_pinned(cache):
    held = [cache.get(n) for n in range(NBUF - 1)]
    last = cache.get(100)
    assert last not in held
    assert last.blockno == 100