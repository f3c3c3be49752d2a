"""Service implementation for shift and leave applications."""
from __future__ import annotations

from datetime import date

from funeral_desk.core.clock import Clock, local_now
from funeral_desk.core.errors import ValidationError
from funeral_desk.core.logger import get_logger
from funeral_desk.core.security import AuthenticatedUser
from funeral_desk.repositories import ScheduleRepository
from funeral_desk.schemas.schedule import ScheduleEntry
from funeral_desk.store import TabularStore

from .ids import IdGenerator
from .validation import parse_iso_date, require_text

LOGGER = get_logger(__name__)

SCHEDULE_PREFIX = "L"
SHIFT_TYPES = ("Leave", "On duty", "Standby", "Annual leave")


class ScheduleService:
    def __init__(self, store: TabularStore, *, now: Clock | None = None) -> None:
        self._entries = ScheduleRepository(store)
        self._ids = IdGenerator(now or local_now)

    def list_entries(
        self, start_date: str | date | None = None, end_date: str | date | None = None
    ) -> list[ScheduleEntry]:
        """Return schedule rows, filtered inclusively when both bounds are given.

        Rows whose stored date cannot be parsed are left out of a filtered
        listing.
        """
        rows = self._entries.all()
        if not start_date or not end_date:
            return [ScheduleEntry(**row) for row in rows]

        start = parse_iso_date(start_date, "start_date")
        end = parse_iso_date(end_date, "end_date")
        if start > end:
            raise ValidationError("end_date", "end_date must not be before start_date.")

        selected: list[ScheduleEntry] = []
        for row in rows:
            try:
                day = date.fromisoformat(row["date"].strip())
            except ValueError:
                LOGGER.debug("Skipping schedule row %s with date %r", row["log_id"], row["date"])
                continue
            if start <= day <= end:
                selected.append(ScheduleEntry(**row))
        return selected

    def apply(self, staff: AuthenticatedUser, day: str | date, shift_type: str) -> str:
        """Record a shift/leave application for ``staff`` and return its log id."""

        applied_for = parse_iso_date(day, "date")
        shift_type = require_text(shift_type, "shift_type", "Shift type is required.")
        if shift_type not in SHIFT_TYPES:
            raise ValidationError(
                "shift_type", f"Shift type must be one of: {', '.join(SHIFT_TYPES)}."
            )

        with self._ids.allocate(self._entries, SCHEDULE_PREFIX) as log_id:
            self._entries.insert(
                {
                    "log_id": log_id,
                    "staff_id": staff.staff_id,
                    "date": applied_for.isoformat(),
                    "shift_type": shift_type,
                    "applied_by": staff.name,
                }
            )
        LOGGER.info("%s applied for %s on %s", staff.staff_id, shift_type, applied_for)
        return log_id
