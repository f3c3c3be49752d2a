"""Row-store tables for the funeral desk domain.

Cells are stored as text, mirroring the spreadsheet the system grew out of.
Column order is significant: it is the order cells are read and appended.
"""
from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import SheetRow


def _cell(length: int = 255) -> Mapped[str]:
    return mapped_column(String(length), nullable=False, default="", server_default="")


class Staff(SheetRow):
    """Staff roster used for login lookups."""

    __tablename__ = "staff"

    staff_id: Mapped[str] = _cell(32)
    name: Mapped[str] = _cell(128)
    email: Mapped[str] = _cell(255)
    password: Mapped[str] = _cell(255)
    role: Mapped[str] = _cell(64)
    status: Mapped[str] = _cell(32)


class Case(SheetRow):
    """A single funeral-service engagement."""

    __tablename__ = "cases"

    case_id: Mapped[str] = _cell(32)
    report_date: Mapped[str] = _cell(32)
    informer: Mapped[str] = _cell(255)
    staff: Mapped[str] = _cell(128)
    status: Mapped[str] = _cell(64)


class Contract(SheetRow):
    """Itemised service contract; several may exist for one case."""

    __tablename__ = "contracts"

    case_id: Mapped[str] = _cell(32)
    items: Mapped[str] = _cell(2000)
    total_fee: Mapped[str] = _cell(32)
    contract_status: Mapped[str] = _cell(64)
    signer: Mapped[str] = _cell(255)
    signed_at: Mapped[str] = _cell(32)


class ScheduleLog(SheetRow):
    """One shift or leave application."""

    __tablename__ = "schedule_logs"

    log_id: Mapped[str] = _cell(32)
    staff_id: Mapped[str] = _cell(32)
    date: Mapped[str] = _cell(10)
    shift_type: Mapped[str] = _cell(32)
    applied_by: Mapped[str] = _cell(32)


class Reminder(SheetRow):
    """Follow-up task attached to a case."""

    __tablename__ = "reminders"

    reminder_id: Mapped[str] = _cell(32)
    case_id: Mapped[str] = _cell(32)
    reminder_date: Mapped[str] = _cell(10)
    category: Mapped[str] = _cell(64)
    content: Mapped[str] = _cell(2000)
    status: Mapped[str] = _cell(32)
    created_by: Mapped[str] = _cell(32)


class InventoryLog(SheetRow):
    """Consumption of a material by a case, with the unit cost locked in."""

    __tablename__ = "inventory_logs"

    log_id: Mapped[str] = _cell(32)
    case_id: Mapped[str] = _cell(32)
    material_id: Mapped[str] = _cell(32)
    quantity: Mapped[str] = _cell(32)
    cost_per_unit: Mapped[str] = _cell(32)
    total_cost: Mapped[str] = _cell(32)
    transaction_date: Mapped[str] = _cell(32)
    staff_id: Mapped[str] = _cell(32)


class Material(SheetRow):
    """Material master: standing cost and stock of one consumable."""

    __tablename__ = "materials"

    material_id: Mapped[str] = _cell(32)
    name: Mapped[str] = _cell(128)
    unit: Mapped[str] = _cell(32)
    current_cost: Mapped[str] = _cell(32)
    current_stock: Mapped[str] = _cell(32)


class Payment(SheetRow):
    """Append-only payment ledger entry."""

    __tablename__ = "payments"

    payment_id: Mapped[str] = _cell(32)
    case_id: Mapped[str] = _cell(32)
    amount: Mapped[str] = _cell(32)
    type: Mapped[str] = _cell(64)
    payment_method: Mapped[str] = _cell(64)
    status: Mapped[str] = _cell(32)
    transaction_date: Mapped[str] = _cell(32)
    recorded_by: Mapped[str] = _cell(32)


class Vendor(SheetRow):
    """Supplier reference data."""

    __tablename__ = "vendors"

    vendor_id: Mapped[str] = _cell(32)
    name: Mapped[str] = _cell(255)
    contact_person: Mapped[str] = _cell(128)
    phone: Mapped[str] = _cell(64)
    service_type: Mapped[str] = _cell(128)


class ProcurementLog(SheetRow):
    """Restock purchase; drives master stock and last-in cost."""

    __tablename__ = "procurement_logs"

    procurement_id: Mapped[str] = _cell(32)
    date: Mapped[str] = _cell(32)
    vendor_id: Mapped[str] = _cell(32)
    material_id: Mapped[str] = _cell(32)
    quantity: Mapped[str] = _cell(32)
    unit_cost: Mapped[str] = _cell(32)
    total_cost: Mapped[str] = _cell(32)
    staff_id: Mapped[str] = _cell(32)
