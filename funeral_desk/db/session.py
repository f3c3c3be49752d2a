"""Transactional session scope for maintenance scripts."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from .engine import create_sync_engine


@contextmanager
def session_scope(url: str | None = None, **kwargs) -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on error."""

    engine = create_sync_engine(url, **kwargs)
    try:
        with Session(engine, expire_on_commit=False) as session, session.begin():
            yield session
    finally:
        engine.dispose()
