"""Base declarative class for SQLAlchemy models."""
from __future__ import annotations

from sqlalchemy import Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

ROW_KEY = "row_id"


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""

    pass


class SheetRow(Base):
    """Abstract base for a row-store table.

    ``row_id`` only records insertion order so reads come back in the order
    rows were appended; it is never exposed as a cell. Every other column is a
    text cell.
    """

    __abstract__ = True

    row_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
