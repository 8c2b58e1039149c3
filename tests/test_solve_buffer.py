import threading

import pytest

from htradiance.solve_buffer import CHUNK_SIZE, SolveItemArgs, chunk_count, solve_buffer


@pytest.mark.parametrize(
    "nitems, expected",
    [(0, 0), (1, 1), (32, 1), (33, 2), (96, 3)],
)
def test_chunk_count(nitems, expected):
    assert chunk_count(nitems) == expected


def test_chunk_count_negative():
    with pytest.raises(ValueError):
        chunk_count(-1)


def test_results_in_item_order():
    result = solve_buffer(lambda a: a.item_id * 2, 100, nthreads=4)
    assert result == [i * 2 for i in range(100)]


def test_context_and_realisations_forwarded():
    ctx = object()
    seen = solve_buffer(lambda a: (a.context, a.nrealisations), 40, 7, ctx, 2)
    assert all(c is ctx and n == 7 for c, n in seen)


def test_thread_ids_in_range():
    ids = solve_buffer(lambda a: a.ithread, 200, nthreads=3)
    assert all(0 <= i < 3 for i in ids)


def test_result_independent_of_thread_count():
    def item(a: SolveItemArgs):
        return a.rng.random()

    one = solve_buffer(item, 150, nthreads=1, seed=11)
    many = solve_buffer(item, 150, nthreads=5, seed=11)
    assert one == many


def test_seed_changes_results():
    def item(a):
        return a.rng.random()

    assert solve_buffer(item, 10, nthreads=1, seed=1) != solve_buffer(item, 10, nthreads=1, seed=2)


def test_rng_shared_within_chunk_only():
    rngs = solve_buffer(lambda a: a.rng, CHUNK_SIZE + 1, nthreads=1)
    assert rngs[0] is rngs[CHUNK_SIZE - 1]
    assert rngs[0] is not rngs[CHUNK_SIZE]


def test_each_item_solved_once():
    counts = {}
    lock = threading.Lock()

    def item(a):
        with lock:
            counts[a.item_id] = counts.get(a.item_id, 0) + 1
        return a.item_id

    result = solve_buffer(item, 97, nthreads=4)
    assert result == list(range(97))
    assert sorted(counts) == list(range(97))
    assert set(counts.values()) == {1}


def test_zero_realisations_rejected():
    with pytest.raises(ValueError):
        solve_buffer(lambda a: 0, 10, 0)


def test_zero_items_rejected():
    with pytest.raises(ValueError):
        solve_buffer(lambda a: 0, 0)


def test_zero_threads_rejected():
    with pytest.raises(ValueError):
        solve_buffer(lambda a: 0, 10, nthreads=0)


def test_non_callable_rejected():
    with pytest.raises(TypeError):
        solve_buffer(None, 10)


def test_item_error_propagates():
    def item(a):
        if a.item_id == 50:
            raise RuntimeError("boom")
        return 0

    with pytest.raises(RuntimeError, match="boom"):
        solve_buffer(item, 100, nthreads=2)