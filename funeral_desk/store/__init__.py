"""Tabular row store used as the system's database."""

from .base import FIRST_DATA_ROW, HEADER_ROW, TabularStore, to_cell
from .sql import SqlTabularStore

__all__ = ["FIRST_DATA_ROW", "HEADER_ROW", "SqlTabularStore", "TabularStore", "to_cell"]
