"""FastAPI routers for the funeral desk API."""

from .admin import router as admin_router
from .auth import router as auth_router
from .cases import router as cases_router
from .contracts import router as contracts_router
from .inventory import router as inventory_router
from .notify import router as notify_router
from .payments import router as payments_router
from .procurement import router as procurement_router
from .reminders import router as reminders_router
from .reports import router as reports_router
from .schedule import router as schedule_router

__all__ = [
    "admin_router",
    "auth_router",
    "cases_router",
    "contracts_router",
    "inventory_router",
    "notify_router",
    "payments_router",
    "procurement_router",
    "reminders_router",
    "reports_router",
    "schedule_router",
]
