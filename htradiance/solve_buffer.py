"""Parallel Monte Carlo estimation of a one-dimensional buffer of items."""

from __future__ import annotations

import logging
import os
import random
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from .work import ProcWork

__all__ = ["CHUNK_SIZE", "SolveItemArgs", "SolveItem", "chunk_count", "solve_buffer"]

logger = logging.getLogger(__name__)

CHUNK_SIZE = 32  # Number of items in one chunk


@dataclass(frozen=True)
class SolveItemArgs:
    """What the item solver receives for one item."""

    rng: random.Random  # Random number generator shared by the items of a chunk
    item_id: int  # Index of the item
    nrealisations: int  # Number of realisations to estimate the item
    ithread: int  # Id of the thread solving the item
    context: Any = None  # User defined data


SolveItem = Callable[[SolveItemArgs], Any]


def chunk_count(nitems: int) -> int:
    """Number of chunks needed to hold ``nitems`` items."""
    if nitems < 0:
        raise ValueError(f"number of items must be non negative, got {nitems}")
    return (nitems + CHUNK_SIZE - 1) // CHUNK_SIZE


def _chunk_rng(seed: int, ichunk: int) -> random.Random:
    # One independent, reproducible stream per chunk, whatever thread solves it
    return random.Random(f"{seed}:{ichunk}")


class _Progress:
    """Thread-safe progress report in percent of solved chunks."""

    def __init__(self, nchunks: int) -> None:
        self._lock = threading.Lock()
        self._nchunks = nchunks
        self._solved = 0
        self._reported = 0

    def chunk_done(self) -> None:
        with self._lock:
            self._solved += 1
            pcent = int(self._solved * 100.0 / self._nchunks + 0.5)
            if pcent > self._reported:
                self._reported = pcent
                logger.debug("Rendering: %3d%%", pcent)


def solve_buffer(
    solve_item: SolveItem,
    nitems: int,
    nrealisations: int = 1,
    context: Any = None,
    nthreads: int | None = None,
    seed: int = 0,
) -> list[Any]:
    """Solve ``nitems`` items in parallel and return their values in order.

    Items are grouped in chunks of CHUNK_SIZE; threads pull chunks from a
    shared work list and solve every item of a chunk with one random number
    generator derived from ``seed`` and the chunk index, so that results do
    not depend on the number of threads. ``solve_item`` is called with a
    SolveItemArgs and returns the value of the item. Any exception it raises
    stops the computation and is re-raised.
    """
    if not callable(solve_item):
        raise TypeError("solve_item must be callable")
    if nrealisations <= 0:
        raise ValueError(f"number of realisations must be positive, got {nrealisations}")
    if nitems <= 0:
        raise ValueError(f"number of items must be positive, got {nitems}")
    if nthreads is None:
        nthreads = os.cpu_count() or 1
    if nthreads <= 0:
        raise ValueError(f"number of threads must be positive, got {nthreads}")

    nchunks = chunk_count(nitems)
    work = ProcWork()
    for ichunk in range(nchunks):
        work.add_chunk(ichunk)

    results: list[Any] = [None] * nitems
    progress = _Progress(nchunks)
    abort = threading.Event()
    nthreads = min(nthreads, nchunks)

    def worker(ithread: int) -> None:
        while not abort.is_set():
            ichunk = work.get_chunk()
            if ichunk is None:
                return  # No more work
            rng = _chunk_rng(seed, ichunk)
            first = ichunk * CHUNK_SIZE
            try:
                for item_id in range(first, min(first + CHUNK_SIZE, nitems)):
                    results[item_id] = solve_item(
                        SolveItemArgs(
                            rng=rng,
                            item_id=item_id,
                            nrealisations=nrealisations,
                            ithread=ithread,
                            context=context,
                        )
                    )
            except BaseException:
                abort.set()
                raise
            progress.chunk_done()

    with ThreadPoolExecutor(max_workers=nthreads) as pool:
        futures = [pool.submit(worker, ithread) for ithread in range(nthreads)]
    for future in futures:
        future.result()

    return results