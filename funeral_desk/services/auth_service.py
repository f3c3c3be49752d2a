"""Staff credential checks against the staff table."""
from __future__ import annotations

from funeral_desk.core.logger import get_logger
from funeral_desk.core.security import AuthenticatedUser
from funeral_desk.repositories import StaffRepository
from funeral_desk.store import TabularStore

LOGGER = get_logger(__name__)

ACTIVE_STATUS = "Active"


class AuthService:
    def __init__(self, store: TabularStore) -> None:
        self._staff = StaffRepository(store)

    def authenticate(self, username: str, password: str) -> AuthenticatedUser | None:
        """Return the matching active staff member, or ``None``.

        ``username`` may be the staff e-mail (case-insensitive) or the
        staff id. Passwords are stored and compared as plain text.
        """
        login = (username or "").strip()
        if not login:
            return None
        email = login.lower()

        for row in self._staff.all():
            if row["status"] != ACTIVE_STATUS:
                continue
            if row["email"].strip().lower() != email and row["staff_id"] != login:
                continue
            if row["password"] != password:
                continue
            return AuthenticatedUser(staff_id=row["staff_id"], name=row["name"], role=row["role"])

        LOGGER.info("Rejected login for %s", login)
        return None
