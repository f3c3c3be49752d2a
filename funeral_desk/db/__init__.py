"""Database helpers for the SQL-backed store and scripts."""

from .engine import create_sync_engine
from .session import session_scope

__all__ = [
    "create_sync_engine",
    "session_scope",
]
