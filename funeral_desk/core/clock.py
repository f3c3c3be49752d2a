"""Business-timezone clock used for timestamps and ID year stamps."""
from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Callable

from .config import get_settings

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

Clock = Callable[[], datetime]


def local_now(zone: tzinfo | None = None) -> datetime:
    """Return the current time in the configured business timezone."""

    return datetime.now(tz=zone or get_settings().tzinfo)


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT)


__all__ = ["Clock", "TIMESTAMP_FORMAT", "format_timestamp", "local_now"]
