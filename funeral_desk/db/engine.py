"""Database engine factories."""
from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from funeral_desk.core.config import get_settings
from funeral_desk.core.logger import get_logger

LOGGER = get_logger(__name__)


def create_sync_engine(url: str | None = None, **kwargs) -> Engine:
    """Create a synchronous SQLAlchemy engine using configured defaults."""

    settings = get_settings()
    resolved_url = url or settings.database.url

    options = dict(kwargs)
    options.setdefault("echo", settings.database.echo)
    if resolved_url.startswith("sqlite"):
        # Sync endpoints run in a threadpool, so connections cross threads.
        connect_args = dict(options.pop("connect_args", {}))
        connect_args.setdefault("check_same_thread", False)
        options["connect_args"] = connect_args

    masked_url = make_url(resolved_url).render_as_string(hide_password=True)
    LOGGER.debug("Creating SQLAlchemy engine for %s", masked_url)
    return create_engine(resolved_url, future=True, **options)
