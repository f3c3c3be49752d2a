"""Repositories for each row-store table."""
from __future__ import annotations

from .base import TableRepository


class StaffRepository(TableRepository):
    table = "staff"
    columns = ("staff_id", "name", "email", "password", "role", "status")
    key = "staff_id"


class CaseRepository(TableRepository):
    table = "cases"
    columns = ("case_id", "report_date", "informer", "staff", "status")
    key = "case_id"


class ContractRepository(TableRepository):
    table = "contracts"
    columns = ("case_id", "items", "total_fee", "contract_status", "signer", "signed_at")
    key = "case_id"


class ScheduleRepository(TableRepository):
    table = "schedule_logs"
    columns = ("log_id", "staff_id", "date", "shift_type", "applied_by")
    key = "log_id"


class ReminderRepository(TableRepository):
    table = "reminders"
    columns = (
        "reminder_id",
        "case_id",
        "reminder_date",
        "category",
        "content",
        "status",
        "created_by",
    )
    key = "reminder_id"


class InventoryLogRepository(TableRepository):
    table = "inventory_logs"
    columns = (
        "log_id",
        "case_id",
        "material_id",
        "quantity",
        "cost_per_unit",
        "total_cost",
        "transaction_date",
        "staff_id",
    )
    key = "log_id"


class MaterialRepository(TableRepository):
    table = "materials"
    columns = ("material_id", "name", "unit", "current_cost", "current_stock")
    key = "material_id"


class PaymentRepository(TableRepository):
    table = "payments"
    columns = (
        "payment_id",
        "case_id",
        "amount",
        "type",
        "payment_method",
        "status",
        "transaction_date",
        "recorded_by",
    )
    key = "payment_id"


class VendorRepository(TableRepository):
    table = "vendors"
    columns = ("vendor_id", "name", "contact_person", "phone", "service_type")
    key = "vendor_id"


class ProcurementRepository(TableRepository):
    table = "procurement_logs"
    columns = (
        "procurement_id",
        "date",
        "vendor_id",
        "material_id",
        "quantity",
        "unit_cost",
        "total_cost",
        "staff_id",
    )
    key = "procurement_id"
