"""Repositories mapping row-store tables to named records."""

from .base import StoredRow, TableRepository
from .records import (
    CaseRepository,
    ContractRepository,
    InventoryLogRepository,
    MaterialRepository,
    PaymentRepository,
    ProcurementRepository,
    ReminderRepository,
    ScheduleRepository,
    StaffRepository,
    VendorRepository,
)

__all__ = [
    "StoredRow",
    "TableRepository",
    "CaseRepository",
    "ContractRepository",
    "InventoryLogRepository",
    "MaterialRepository",
    "PaymentRepository",
    "ProcurementRepository",
    "ReminderRepository",
    "ScheduleRepository",
    "StaffRepository",
    "VendorRepository",
]
