"""Row-oriented store interface.

The store behaves like a spreadsheet: every read returns a matrix of strings
whose first row is the header, appends add a row at the bottom, and updates
address a row by its 1-based number (the header is row 1).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Mapping, Sequence

from funeral_desk.core.formatting import plain_decimal

HEADER_ROW = 1
FIRST_DATA_ROW = 2


def to_cell(value: object) -> str:
    """Convert a Python value into the text stored in a cell."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (Decimal, int)):
        return plain_decimal(value)
    if isinstance(value, float):
        return plain_decimal(Decimal(str(value)))
    return str(value)


class TabularStore(ABC):
    """Minimal read/append/update contract over named tables."""

    @abstractmethod
    def get_rows(self, table: str) -> list[list[str]]:
        """Return every row of ``table``; row 0 is the header."""

    @abstractmethod
    def append_row(self, table: str, values: Sequence[object]) -> None:
        """Append one row; values are matched to columns by position."""

    @abstractmethod
    def update_cell(self, table: str, row_number: int, values: Mapping[str, object]) -> None:
        """Overwrite the named cells of row ``row_number``."""


__all__ = ["FIRST_DATA_ROW", "HEADER_ROW", "TabularStore", "to_cell"]
