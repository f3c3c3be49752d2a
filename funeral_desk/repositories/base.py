"""Shared helpers for row-store repositories."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Iterator, Mapping

from funeral_desk.store import FIRST_DATA_ROW, TabularStore


@dataclass(frozen=True)
class StoredRow:
    """A data row together with its 1-based position in the table."""

    row_number: int
    values: dict[str, str]

    def __getitem__(self, column: str) -> str:
        return self.values[column]


class TableRepository:
    """Map a table's positional cells to named fields.

    Columns come from the repository definition rather than the stored header
    so a mislabelled header never shifts fields. The header row is always
    skipped.
    """

    table: ClassVar[str]
    columns: ClassVar[tuple[str, ...]]
    key: ClassVar[str]

    def __init__(self, store: TabularStore) -> None:
        self._store = store

    def _to_record(self, row: list[str]) -> dict[str, str]:
        return {
            column: (row[index] if index < len(row) and row[index] is not None else "")
            for index, column in enumerate(self.columns)
        }

    def stored_rows(self) -> Iterator[StoredRow]:
        """Yield data rows with their row numbers, header skipped."""

        rows = self._store.get_rows(self.table)
        for offset, row in enumerate(rows[1:]):
            yield StoredRow(FIRST_DATA_ROW + offset, self._to_record(row))

    def all(self) -> list[dict[str, str]]:
        """Return every data row as a column-keyed dict, in stored order."""

        return [row.values for row in self.stored_rows()]

    def where(self, **criteria: str) -> list[dict[str, str]]:
        return [
            row
            for row in self.all()
            if all(row.get(column) == value for column, value in criteria.items())
        ]

    def count(self) -> int:
        """Return the number of data rows (header excluded)."""

        return max(len(self._store.get_rows(self.table)) - 1, 0)

    def find(self, key_value: str) -> StoredRow | None:
        """Locate the first row whose key column equals ``key_value``."""

        for row in self.stored_rows():
            if row.values[self.key] == key_value:
                return row
        return None

    def exists(self, key_value: str) -> bool:
        return self.find(key_value) is not None

    def insert(self, record: Mapping[str, Any]) -> None:
        """Append ``record`` as a new row laid out in column order."""

        unknown = set(record) - set(self.columns)
        if unknown:
            raise KeyError(f"{self.table} has no column(s): {', '.join(sorted(unknown))}")
        self._store.append_row(self.table, [record.get(column, "") for column in self.columns])

    def update_fields(self, row_number: int, values: Mapping[str, Any]) -> None:
        """Overwrite several cells of an already located row."""

        self._store.update_cell(self.table, row_number, dict(values))

    def update_field(self, key_value: str, column: str, value: Any) -> bool:
        """Overwrite one cell of the row keyed by ``key_value``.

        Returns ``False`` when no such row exists.
        """
        row = self.find(key_value)
        if row is None:
            return False
        self.update_fields(row.row_number, {column: value})
        return True
