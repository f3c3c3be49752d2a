"""Service implementation for follow-up reminders and memorial dates."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from funeral_desk.core.clock import Clock, local_now
from funeral_desk.core.errors import NotFoundError, ValidationError
from funeral_desk.core.logger import get_logger
from funeral_desk.core.security import AuthenticatedUser
from funeral_desk.repositories import CaseRepository, ReminderRepository
from funeral_desk.schemas.reminders import DateCalculation, ReminderRecord
from funeral_desk.store import TabularStore

from .ids import IdGenerator
from .validation import ensure_exists, parse_iso_date, require_text

LOGGER = get_logger(__name__)

REMINDER_PREFIX = "R"
STATUS_PENDING = "Pending"
STATUS_COMPLETED = "Completed"
STATUS_DISMISSED = "Dismissed"
REMINDER_STATUSES = (STATUS_PENDING, STATUS_COMPLETED, STATUS_DISMISSED)
CLOSED_STATUSES = frozenset({STATUS_COMPLETED, STATUS_DISMISSED})
DEFAULT_CATEGORY = "Manual follow-up"


@dataclass(frozen=True, slots=True)
class MemorialOffset:
    label: str
    days: int = 0
    years: int = 0


# The day of death counts as day one, hence 48 and 99.
MEMORIAL_OFFSETS: dict[str, MemorialOffset] = {
    "forty_nine_days": MemorialOffset("49th day", days=48),
    "hundred_days": MemorialOffset("100th day", days=99),
    "first_anniversary": MemorialOffset("First anniversary", years=1),
    "third_anniversary": MemorialOffset("Third anniversary", years=3),
}


def add_years(start: date, years: int) -> date:
    """Shift ``start`` by whole years; Feb 29 lands on Feb 28 in common years."""

    try:
        return start.replace(year=start.year + years)
    except ValueError:
        return start.replace(year=start.year + years, day=28)


def memorial_date(start: date, kind: str) -> date:
    offset = MEMORIAL_OFFSETS.get(kind)
    if offset is None:
        raise ValidationError("type", f"Unknown calculation type: {kind}.")
    result = start + timedelta(days=offset.days)
    if offset.years:
        result = add_years(result, offset.years)
    return result


class ReminderService:
    def __init__(self, store: TabularStore, *, now: Clock | None = None) -> None:
        self._cases = CaseRepository(store)
        self._reminders = ReminderRepository(store)
        self._now = now or local_now
        self._ids = IdGenerator(self._now)

    def list_reminders(
        self, case_id: str | None = None, *, include_closed: bool = False
    ) -> list[ReminderRecord]:
        """Return reminders, optionally for one case; closed ones only on request."""

        records: list[ReminderRecord] = []
        for row in self._reminders.all():
            if case_id and row["case_id"] != case_id:
                continue
            if not include_closed and row["status"] in CLOSED_STATUSES:
                continue
            records.append(ReminderRecord(**row))
        return records

    def pending_on(self, day: date) -> list[ReminderRecord]:
        stamp = day.isoformat()
        return [
            record
            for record in self.list_reminders()
            if record.status == STATUS_PENDING and record.reminder_date == stamp
        ]

    def create_reminder(
        self,
        case_id: str,
        reminder_date: str | date,
        content: str,
        created_by: AuthenticatedUser,
        category: str | None = None,
    ) -> str:
        case_id = require_text(case_id, "case_id", "Case ID is required.")
        when = parse_iso_date(reminder_date, "reminder_date")
        content = require_text(content, "content", "Reminder content is required.")
        ensure_exists(self._cases, case_id, "Case")

        with self._ids.allocate(self._reminders, REMINDER_PREFIX) as reminder_id:
            self._reminders.insert(
                {
                    "reminder_id": reminder_id,
                    "case_id": case_id,
                    "reminder_date": when.isoformat(),
                    "category": (category or "").strip() or DEFAULT_CATEGORY,
                    "content": content,
                    "status": STATUS_PENDING,
                    "created_by": created_by.name or created_by.staff_id,
                }
            )
        LOGGER.info("Reminder %s set for %s on %s", reminder_id, case_id, when)
        return reminder_id

    def set_status(self, reminder_id: str, status: str) -> str:
        status = require_text(status, "status", "Status is required.")
        if status not in REMINDER_STATUSES:
            raise ValidationError(
                "status", f"Status must be one of: {', '.join(REMINDER_STATUSES)}."
            )
        if not self._reminders.update_field(reminder_id, "status", status):
            raise NotFoundError(f"Reminder {reminder_id} does not exist.")
        LOGGER.info("Reminder %s marked %s", reminder_id, status)
        return status

    def calculate_date(self, start_date: str | date, kind: str) -> DateCalculation:
        """Offset ``start_date`` by the memorial interval named by ``kind``."""

        start = parse_iso_date(start_date, "start_date")
        kind = require_text(kind, "type", "Calculation type is required.")
        result = memorial_date(start, kind)
        return DateCalculation(
            message="Date calculated.",
            start_date=start,
            type=kind,
            label=MEMORIAL_OFFSETS[kind].label,
            result_date=result,
        )
