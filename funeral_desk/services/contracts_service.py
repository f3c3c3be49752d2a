"""Service implementation for service contracts."""
from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from funeral_desk.core.clock import Clock, format_timestamp, local_now
from funeral_desk.core.errors import ValidationError
from funeral_desk.core.formatting import parse_decimal, plain_decimal
from funeral_desk.core.logger import get_logger
from funeral_desk.core.security import AuthenticatedUser
from funeral_desk.repositories import CaseRepository, ContractRepository
from funeral_desk.schemas.contracts import ContractCreated, ContractItem, ContractRecord
from funeral_desk.store import TabularStore

from .locks import TABLE_LOCKS
from .validation import ensure_exists, require_text

LOGGER = get_logger(__name__)

DEFAULT_CONTRACT_STATUS = "Pending signature"


def describe_items(items: Sequence[ContractItem], currency_symbol: str = "NT$") -> tuple[Decimal, str]:
    """Return the contract total and its ``"desc (NT$x); ..."`` summary."""

    total = Decimal("0")
    parts: list[str] = []
    for item in items:
        subtotal = item.price * item.quantity
        total += subtotal
        parts.append(f"{item.description} ({currency_symbol}{plain_decimal(subtotal)})")
    return total, "; ".join(parts)


def signer_label(user: AuthenticatedUser) -> str:
    return f"{user.name} ({user.staff_id})"


class ContractsService:
    def __init__(
        self,
        store: TabularStore,
        *,
        now: Clock | None = None,
        currency_symbol: str = "NT$",
    ) -> None:
        self._cases = CaseRepository(store)
        self._contracts = ContractRepository(store)
        self._now = now or local_now
        self._currency_symbol = currency_symbol

    def create_contract(
        self,
        case_id: str,
        items: Sequence[ContractItem],
        signer: AuthenticatedUser,
        contract_status: str | None = None,
    ) -> ContractCreated:
        """Price the items and append a contract row for ``case_id``.

        A case may accumulate several contract rows; the report decides
        which one counts.
        """
        case_id = require_text(case_id, "case_id", "Case ID is required.")
        if not items:
            raise ValidationError("items", "At least one contract item is required.")
        ensure_exists(self._cases, case_id, "Case")

        total_fee, summary = describe_items(items, self._currency_symbol)
        status = (contract_status or "").strip() or DEFAULT_CONTRACT_STATUS

        with TABLE_LOCKS.hold(self._contracts.table):
            self._contracts.insert(
                {
                    "case_id": case_id,
                    "items": summary,
                    "total_fee": total_fee,
                    "contract_status": status,
                    "signer": signer_label(signer),
                    "signed_at": format_timestamp(self._now()),
                }
            )
        LOGGER.info("Contract for %s recorded: %s", case_id, plain_decimal(total_fee))
        return ContractCreated(
            message="Contract created.",
            case_id=case_id,
            total_fee=total_fee,
            summary=summary,
        )

    def list_contracts(self, case_id: str) -> list[ContractRecord]:
        return [
            ContractRecord(**{**row, "total_fee": parse_decimal(row["total_fee"])})
            for row in self._contracts.where(case_id=case_id)
        ]
