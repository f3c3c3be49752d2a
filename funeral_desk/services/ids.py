"""Sequential, type-prefixed record identifiers such as ``P25-001``."""
from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Iterator

from funeral_desk.core.clock import Clock, local_now
from funeral_desk.repositories import TableRepository

from .locks import TABLE_LOCKS

SEQUENCE_WIDTH = 3


def format_id(prefix: str, moment: datetime, sequence: int, *, stamp_format: str = "%y") -> str:
    """Build ``<prefix><stamp>-<sequence>`` with a zero-padded sequence."""

    return f"{prefix}{moment.strftime(stamp_format)}-{sequence:0{SEQUENCE_WIDTH}d}"


class IdGenerator:
    """Derive the next identifier from a table's data-row count.

    The sequence is ``row count + 1``. Should that ID already be present
    (rows keyed by hand, for instance) the sequence moves forward until it
    is unused.
    """

    def __init__(self, now: Clock | None = None) -> None:
        self._now = now or local_now

    def next_ids(
        self,
        repository: TableRepository,
        prefix: str,
        count: int = 1,
        *,
        stamp_format: str = "%y",
    ) -> list[str]:
        rows = repository.all()
        taken = {row[repository.key] for row in rows}
        moment = self._now()
        sequence = len(rows)
        allocated: list[str] = []
        while len(allocated) < count:
            sequence += 1
            candidate = format_id(prefix, moment, sequence, stamp_format=stamp_format)
            if candidate in taken:
                continue
            taken.add(candidate)
            allocated.append(candidate)
        return allocated

    def next_id(
        self, repository: TableRepository, prefix: str, *, stamp_format: str = "%y"
    ) -> str:
        return self.next_ids(repository, prefix, stamp_format=stamp_format)[0]

    @contextmanager
    def allocate(
        self, repository: TableRepository, prefix: str, *, stamp_format: str = "%y"
    ) -> Iterator[str]:
        """Hold the table lock while the caller appends the row for the new ID."""

        with TABLE_LOCKS.hold(repository.table):
            yield self.next_id(repository, prefix, stamp_format=stamp_format)


__all__ = ["IdGenerator", "SEQUENCE_WIDTH", "format_id"]
