"""In-process serialisation points for read-modify-write sequences.

The row store has no transactions, so sequence-ID allocation and stock
updates are serialised per key inside this process. Other processes writing
to the same store are not covered.
"""
from __future__ import annotations

from contextlib import ExitStack, contextmanager
from threading import Lock, RLock
from typing import Iterator


class KeyedLock:
    """Hand out one re-entrant lock per key."""

    def __init__(self) -> None:
        self._guard = Lock()
        self._locks: dict[str, RLock] = {}

    def _lock_for(self, key: str) -> RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = RLock()
            return lock

    @contextmanager
    def hold(self, *keys: str) -> Iterator[None]:
        """Acquire the locks for ``keys`` in sorted order to avoid deadlocks."""

        with ExitStack() as stack:
            for key in sorted(set(keys)):
                stack.enter_context(self._lock_for(key))
            yield


TABLE_LOCKS = KeyedLock()
MATERIAL_LOCKS = KeyedLock()

__all__ = ["KeyedLock", "MATERIAL_LOCKS", "TABLE_LOCKS"]
