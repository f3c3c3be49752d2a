"""Field checks shared by the record services."""
from __future__ import annotations

from datetime import date

from funeral_desk.core.errors import NotFoundError, ValidationError
from funeral_desk.repositories import TableRepository


def require_text(value: str | None, field: str, message: str | None = None) -> str:
    """Return ``value`` stripped, or raise when it is blank."""

    text = (value or "").strip()
    if not text:
        raise ValidationError(field, message or f"{field} is required.")
    return text


def parse_iso_date(value: str | date | None, field: str) -> date:
    if isinstance(value, date):
        return value
    text = require_text(value, field)
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(field, f"{field} must be a date in YYYY-MM-DD format.") from exc


def ensure_exists(repository: TableRepository, key_value: str, label: str) -> None:
    """Raise ``NotFoundError`` when no row is keyed by ``key_value``."""

    if not repository.exists(key_value):
        raise NotFoundError(f"{label} {key_value} does not exist.")
