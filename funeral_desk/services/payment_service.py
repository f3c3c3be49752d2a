"""Service implementation for the payment ledger."""
from __future__ import annotations

from decimal import Decimal

from funeral_desk.core.clock import Clock, format_timestamp, local_now
from funeral_desk.core.errors import ValidationError
from funeral_desk.core.formatting import parse_decimal
from funeral_desk.core.logger import get_logger
from funeral_desk.core.security import AuthenticatedUser
from funeral_desk.repositories import CaseRepository, PaymentRepository
from funeral_desk.schemas.payments import PaymentCreated, PaymentRecord
from funeral_desk.store import TabularStore

from .ids import IdGenerator
from .validation import ensure_exists, require_text

LOGGER = get_logger(__name__)

PAYMENT_PREFIX = "PYL"
PAYMENT_SUCCEEDED = "Succeeded"


class PaymentService:
    def __init__(self, store: TabularStore, *, now: Clock | None = None) -> None:
        self._cases = CaseRepository(store)
        self._payments = PaymentRepository(store)
        self._now = now or local_now
        self._ids = IdGenerator(self._now)

    def record(
        self,
        case_id: str,
        amount: Decimal | str,
        payment_type: str,
        payment_method: str,
        recorded_by: AuthenticatedUser,
    ) -> PaymentCreated:
        """Append a successful payment against ``case_id``."""

        case_id = require_text(case_id, "case_id", "Case ID is required.")
        value = parse_decimal(amount)
        if value <= 0:
            raise ValidationError("amount", "Amount must be a positive number.")
        payment_type = require_text(payment_type, "type", "Payment type is required.")
        payment_method = require_text(payment_method, "payment_method", "Payment method is required.")
        ensure_exists(self._cases, case_id, "Case")

        with self._ids.allocate(self._payments, PAYMENT_PREFIX) as payment_id:
            self._payments.insert(
                {
                    "payment_id": payment_id,
                    "case_id": case_id,
                    "amount": value,
                    "type": payment_type,
                    "payment_method": payment_method,
                    "status": PAYMENT_SUCCEEDED,
                    "transaction_date": format_timestamp(self._now()),
                    "recorded_by": recorded_by.staff_id,
                }
            )
        LOGGER.info("Payment %s of %s recorded for %s", payment_id, value, case_id)
        return PaymentCreated(message="Payment recorded.", payment_id=payment_id, amount=value)

    def list_for_case(self, case_id: str) -> list[PaymentRecord]:
        return [
            PaymentRecord(**{**row, "amount": parse_decimal(row["amount"])})
            for row in self._payments.where(case_id=case_id)
        ]
