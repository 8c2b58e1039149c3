import threading

import pytest

from htradiance.work import ProcWork


def test_empty_work_has_no_chunk():
    work = ProcWork()
    assert len(work) == 0
    assert work.get_chunk() is None


def test_chunks_come_back_in_insertion_order():
    work = ProcWork()
    added = [5, 0, 12, 3]
    for ichunk in added:
        work.add_chunk(ichunk)
    got = [work.get_chunk() for _ in added]
    assert got == added
    assert work.get_chunk() is None


def test_len_counts_consumed_chunks_until_reset():
    work = ProcWork()
    for ichunk in range(4):
        work.add_chunk(ichunk)
    work.get_chunk()
    work.get_chunk()
    assert len(work) == 4


def test_reset_clears_and_restarts():
    work = ProcWork()
    work.add_chunk(1)
    work.add_chunk(2)
    assert work.get_chunk() == 1
    work.reset()
    assert len(work) == 0
    assert work.get_chunk() is None
    work.add_chunk(7)
    assert work.get_chunk() == 7


def test_chunks_added_after_exhaustion_are_served():
    work = ProcWork()
    work.add_chunk(3)
    assert work.get_chunk() == 3
    assert work.get_chunk() is None
    work.add_chunk(9)
    assert work.get_chunk() == 9


@pytest.mark.parametrize("bad", [-1, 2**64 - 1, 2**64])
def test_invalid_chunk_index_is_rejected(bad):
    work = ProcWork()
    with pytest.raises(ValueError):
        work.add_chunk(bad)
    assert len(work) == 0


def test_concurrent_consumers_share_chunks_without_duplicates():
    work = ProcWork()
    nchunks = 2000
    for ichunk in range(nchunks):
        work.add_chunk(ichunk)

    results: list[list[int]] = [[] for _ in range(8)]

    def consume(out):
        while (ichunk := work.get_chunk()) is not None:
            out.append(ichunk)

    threads = [threading.Thread(target=consume, args=(out,)) for out in results]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert work.get_chunk() is None
    assert len(work) == nchunks

    everything = [c for out in results for c in out]
    assert len(everything) == nchunks
    assert sorted(everything) == list(range(nchunks))
    for out in results:
        assert out == sorted(out)


def test_concurrent_producers_register_every_chunk():
    work = ProcWork()

    def produce(base):
        for i in range(250):
            work.add_chunk(base * 1000 + i)

    threads = [threading.Thread(target=produce, args=(b,)) for b in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(work) == 1000
    got = set()
    while (ichunk := work.get_chunk()) is not None:
        got.add(ichunk)
    assert got == {b * 1000 + i for b in range(4) for i in range(250)}