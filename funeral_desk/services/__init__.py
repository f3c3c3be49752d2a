"""Service layer entrypoints for domain logic."""

from .auth_service import AuthService
from .cases_service import CasesService
from .contracts_service import ContractsService
from .inventory_service import InventoryService
from .notify_service import LinePushClient, NotifyService
from .payment_service import PaymentService
from .procurement_service import ProcurementService
from .reminder_service import ReminderService
from .report_service import ContractPolicy, ReportService
from .schedule_service import ScheduleService
from .vendor_service import VendorService

__all__ = [
    "AuthService",
    "CasesService",
    "ContractPolicy",
    "ContractsService",
    "InventoryService",
    "LinePushClient",
    "NotifyService",
    "PaymentService",
    "ProcurementService",
    "ReminderService",
    "ReportService",
    "ScheduleService",
    "VendorService",
]
