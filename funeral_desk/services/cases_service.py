"""Service implementation for case intake."""
from __future__ import annotations

from funeral_desk.core.clock import Clock, format_timestamp, local_now
from funeral_desk.core.logger import get_logger
from funeral_desk.repositories import CaseRepository
from funeral_desk.schemas.cases import CaseRecord
from funeral_desk.store import TabularStore

from .ids import IdGenerator
from .validation import require_text

LOGGER = get_logger(__name__)

CASE_PREFIX = "P"
NEW_CASE_STATUS = "New"


class CasesService:
    """Open new cases and list the case overview."""

    def __init__(self, store: TabularStore, *, now: Clock | None = None) -> None:
        self._cases = CaseRepository(store)
        self._now = now or local_now
        self._ids = IdGenerator(self._now)

    def list_cases(self) -> list[CaseRecord]:
        """Return all cases, most recently created first."""

        return [CaseRecord(**row) for row in reversed(self._cases.all())]

    def create_case(self, informer: str, staff: str) -> str:
        """Register a new case and return its generated id (e.g. ``P25-001``)."""

        informer = require_text(informer, "informer", "Informer is required.")
        staff = require_text(staff, "staff", "Assigned staff is required.")

        with self._ids.allocate(self._cases, CASE_PREFIX) as case_id:
            self._cases.insert(
                {
                    "case_id": case_id,
                    "report_date": format_timestamp(self._now()),
                    "informer": informer,
                    "staff": staff,
                    "status": NEW_CASE_STATUS,
                }
            )
        LOGGER.info("Case %s opened for %s", case_id, informer)
        return case_id
