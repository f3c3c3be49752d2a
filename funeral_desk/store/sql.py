"""SQLAlchemy implementation of the tabular store."""
from __future__ import annotations

from typing import Mapping, Sequence

from sqlalchemy import MetaData, Table, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from funeral_desk.core.errors import StoreError
from funeral_desk.core.logger import get_logger
from funeral_desk.models import ROW_KEY, Base

from .base import FIRST_DATA_ROW, TabularStore, to_cell

LOGGER = get_logger(__name__)


class SqlTabularStore(TabularStore):
    """Store each table as rows of text cells in a relational database."""

    def __init__(self, engine: Engine, metadata: MetaData | None = None) -> None:
        self._engine = engine
        self._metadata = metadata or Base.metadata

    @property
    def engine(self) -> Engine:
        return self._engine

    def create_tables(self) -> None:
        """Create any missing tables."""

        try:
            self._metadata.create_all(self._engine)
        except SQLAlchemyError as exc:
            raise StoreError("Could not create tables", cause=exc) from exc

    def _table(self, name: str) -> Table:
        table = self._metadata.tables.get(name)
        if table is None:
            raise StoreError(f"Unknown table {name!r}")
        return table

    @staticmethod
    def _cell_columns(table: Table) -> list[str]:
        return [column.name for column in table.columns if column.name != ROW_KEY]

    def get_rows(self, table: str) -> list[list[str]]:
        target = self._table(table)
        names = self._cell_columns(target)
        statement = select(*(target.c[name] for name in names)).order_by(target.c[ROW_KEY])
        try:
            with self._engine.connect() as connection:
                records = connection.execute(statement).all()
        except SQLAlchemyError as exc:
            LOGGER.error("Read from %s failed: %s", table, exc)
            raise StoreError(f"Read failed: {table}", cause=exc) from exc
        rows = [list(names)]
        rows.extend([value if value is not None else "" for value in record] for record in records)
        return rows

    def append_row(self, table: str, values: Sequence[object]) -> None:
        target = self._table(table)
        names = self._cell_columns(target)
        if len(values) > len(names):
            raise StoreError(
                f"Write failed: {table} has {len(names)} columns, got {len(values)} values"
            )
        cells = {name: "" for name in names}
        cells.update({name: to_cell(value) for name, value in zip(names, values)})
        try:
            with self._engine.begin() as connection:
                connection.execute(target.insert().values(**cells))
        except SQLAlchemyError as exc:
            LOGGER.error("Append to %s failed: %s", table, exc)
            raise StoreError(f"Write failed: {table}", cause=exc) from exc

    def update_cell(self, table: str, row_number: int, values: Mapping[str, object]) -> None:
        target = self._table(table)
        names = set(self._cell_columns(target))
        unknown = sorted(set(values) - names)
        if unknown:
            raise StoreError(f"Update failed: {table} has no column(s) {', '.join(unknown)}")
        if row_number < FIRST_DATA_ROW:
            raise StoreError(f"Update failed: row {row_number} of {table} is not a data row")
        if not values:
            return

        locate = (
            select(target.c[ROW_KEY])
            .order_by(target.c[ROW_KEY])
            .offset(row_number - FIRST_DATA_ROW)
            .limit(1)
        )
        try:
            with self._engine.begin() as connection:
                row_key = connection.execute(locate).scalar_one_or_none()
                if row_key is None:
                    raise StoreError(f"Update failed: {table} has no row {row_number}")
                connection.execute(
                    update(target)
                    .where(target.c[ROW_KEY] == row_key)
                    .values({name: to_cell(value) for name, value in values.items()})
                )
        except SQLAlchemyError as exc:
            LOGGER.error("Update of %s row %s failed: %s", table, row_number, exc)
            raise StoreError(f"Update failed: {table}", cause=exc) from exc


__all__ = ["SqlTabularStore"]
