"""Row-store tables for the funeral desk domain."""
from __future__ import annotations

from .base import ROW_KEY, Base, SheetRow
from .records import (
    Case,
    Contract,
    InventoryLog,
    Material,
    Payment,
    ProcurementLog,
    Reminder,
    ScheduleLog,
    Staff,
    Vendor,
)

__all__ = [
    "ROW_KEY",
    "Base",
    "SheetRow",
    "Case",
    "Contract",
    "InventoryLog",
    "Material",
    "Payment",
    "ProcurementLog",
    "Reminder",
    "ScheduleLog",
    "Staff",
    "Vendor",
]
