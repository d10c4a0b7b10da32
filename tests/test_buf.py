from blockfs.buf import Buf
from blockfs.fs import BSIZE


def test_new_buf_is_unassigned():
    b = Buf()
    assert b.blockno == -1
    assert b.refcnt == 0
    assert b.valid is False
    assert len(b.data) == BSIZE
    assert not any(b.data)
    assert b.lock.holding() is False


def test_bufs_do_not_share_data_or_locks():
    a, b = Buf(), Buf()
    a.data[0] = 7
    a.lock.acquire()
    assert b.data[0] == 0
    assert b.lock.holding() is False
    a.lock.release()


def test_str_shows_fields_and_text_up_to_nul():
    b = Buf(blockno=3, refcnt=2, valid=True)
    b.data[:5] = b"hello"
    b.data[6:9] = b"xyz"
    b.lock.acquire()
    text = str(b)
    b.lock.release()
    assert text == "blockno = 3, refcnt = 2, valid = 1, data = hello, locked=1"


def test_bufs_compare_by_identity():
    a, b = Buf(), Buf()
    assert (a == b) is False
    assert a == a