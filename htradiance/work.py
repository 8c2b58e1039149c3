"""Thread-safe list of chunks a process has to solve."""

from __future__ import annotations

import threading

__all__ = ["ProcWork"]

_UINT64_MAX = 2**64 - 1


class ProcWork:
    """Ordered, thread-safe queue of chunk indices assigned to a process.

    Chunks are handed out in the order they were added. Chunks already handed
    out still count in ``len()`` until ``reset()`` is called.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._chunks: list[int] = []
        self._index = 0

    def add_chunk(self, ichunk: int) -> None:
        """Register the chunk ``ichunk`` as work to do."""
        ichunk = int(ichunk)
        if not 0 <= ichunk < _UINT64_MAX:
            raise ValueError(f"invalid chunk index {ichunk}")
        with self._lock:
            self._chunks.append(ichunk)

    def get_chunk(self) -> int | None:
        """Return the index of the next chunk to process, or None if none is left."""
        with self._lock:
            if self._index >= len(self._chunks):
                return None
            ichunk = self._chunks[self._index]
            self._index += 1
            return ichunk

    def reset(self) -> None:
        """Forget every registered chunk."""
        with self._lock:
            self._chunks.clear()
            self._index = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._chunks)