"""Per-case financial report built by joining four tables in memory.

Each case is joined by ``case_id`` with:

* its contract (fee and status),
* the sum of its payments (collected amount),
* the sum of its consumption-log costs (material cost).

From those the report derives ``outstanding = contract_fee - collected``,
``net_profit = contract_fee - material_cost`` and ``profit_margin =
net_profit / contract_fee * 100`` (0 when there is no fee).

The four tables are read one after another without a snapshot, so a write
landing between two reads can produce a report that mixes before and after
states. Aggregation itself never writes and is repeatable.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable, Mapping

from funeral_desk.core.errors import AggregationError, NotFoundError, StoreError
from funeral_desk.core.formatting import parse_decimal
from funeral_desk.core.logger import get_logger, timeit
from funeral_desk.repositories import (
    CaseRepository,
    ContractRepository,
    InventoryLogRepository,
    PaymentRepository,
)
from funeral_desk.schemas.reports import CaseFinancials
from funeral_desk.store import TabularStore

LOGGER = get_logger(__name__)

NO_CONTRACT_STATUS = "No contract"
UNSIGNED_STATUS = "Unsigned"
_ZERO = Decimal("0")
_HUNDRED = Decimal("100")

Row = Mapping[str, str]


class ContractPolicy(str, Enum):
    """Which contract row represents a case that has several."""

    FIRST = "first"
    LATEST = "latest"


@dataclass(frozen=True, slots=True)
class ContractTerms:
    total_fee: Decimal
    contract_status: str


@dataclass(frozen=True, slots=True)
class ReportSources:
    """Raw rows of the four joined tables, header already skipped."""

    cases: list[dict[str, str]]
    contracts: list[dict[str, str]]
    payments: list[dict[str, str]]
    inventory_logs: list[dict[str, str]]


def _contract_map(rows: Iterable[Row], policy: ContractPolicy) -> dict[str, ContractTerms]:
    contracts: dict[str, ContractTerms] = {}
    for row in rows:
        case_id = row["case_id"]
        if policy is ContractPolicy.FIRST and case_id in contracts:
            continue
        contracts[case_id] = ContractTerms(
            total_fee=parse_decimal(row["total_fee"]),
            contract_status=row["contract_status"] or UNSIGNED_STATUS,
        )
    return contracts


def _sum_by_case(rows: Iterable[Row], column: str) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = defaultdict(lambda: _ZERO)
    for row in rows:
        totals[row["case_id"]] += parse_decimal(row[column])
    return dict(totals)


def profit_margin(contract_fee: Decimal, net_profit: Decimal) -> Decimal:
    """Return net profit as a percentage of the fee, or 0 without a fee."""

    if contract_fee > 0:
        return net_profit / contract_fee * _HUNDRED
    return _ZERO


def aggregate_cases(
    sources: ReportSources, policy: ContractPolicy = ContractPolicy.FIRST
) -> list[CaseFinancials]:
    """Join the source tables into one record per case, in case-list order."""

    contracts = _contract_map(sources.contracts, policy)
    collected_by_case = _sum_by_case(sources.payments, "amount")
    cost_by_case = _sum_by_case(sources.inventory_logs, "total_cost")

    results: list[CaseFinancials] = []
    for case in sources.cases:
        case_id = case["case_id"]
        terms = contracts.get(case_id)
        contract_fee = terms.total_fee if terms else _ZERO
        material_cost = cost_by_case.get(case_id, _ZERO)
        collected = collected_by_case.get(case_id, _ZERO)
        net_profit = contract_fee - material_cost

        results.append(
            CaseFinancials(
                case_id=case_id,
                report_date=case["report_date"],
                informer=case["informer"],
                staff=case["staff"],
                status=case["status"],
                contract_status=terms.contract_status if terms else NO_CONTRACT_STATUS,
                contract_fee=contract_fee,
                material_cost=material_cost,
                collected=collected,
                outstanding=contract_fee - collected,
                net_profit=net_profit,
                profit_margin=profit_margin(contract_fee, net_profit),
            )
        )
    return results


def filter_by_case_id(records: Iterable[CaseFinancials], needle: str) -> list[CaseFinancials]:
    """Case-insensitive substring match on ``case_id``."""

    target = needle.strip().upper()
    return [record for record in records if target in record.case_id.upper()]


class ReportService:
    """Service producing the aggregated case report."""

    def __init__(
        self,
        store: TabularStore,
        *,
        policy: ContractPolicy | str = ContractPolicy.FIRST,
    ) -> None:
        self._cases = CaseRepository(store)
        self._contracts = ContractRepository(store)
        self._payments = PaymentRepository(store)
        self._inventory_logs = InventoryLogRepository(store)
        self._policy = ContractPolicy(policy)

    def load_sources(self) -> ReportSources:
        """Read the four tables in full; any failed read aborts the report."""

        try:
            return ReportSources(
                cases=self._cases.all(),
                contracts=self._contracts.all(),
                payments=self._payments.all(),
                inventory_logs=self._inventory_logs.all(),
            )
        except StoreError as exc:
            LOGGER.error("Report aggregation failed: %s", exc.details or exc.message)
            raise AggregationError(exc) from exc

    def _aggregate(self) -> list[CaseFinancials]:
        with timeit("Case report aggregation", logger=LOGGER, unit="cases") as timer:
            sources = self.load_sources()
            timer.set_total(len(sources.cases))
            return aggregate_cases(sources, self._policy)

    def all_cases(self) -> list[CaseFinancials]:
        """Return every case, most recently created first."""

        return list(reversed(self._aggregate()))

    def query(self, case_id: str | None = None) -> list[CaseFinancials]:
        """Return cases whose id contains ``case_id``; raise when none match."""

        records = self.all_cases()
        if case_id and case_id.strip():
            records = filter_by_case_id(records, case_id)
        if not records:
            raise NotFoundError("No cases match the query.")
        return records


__all__ = [
    "ContractPolicy",
    "ContractTerms",
    "NO_CONTRACT_STATUS",
    "ReportService",
    "ReportSources",
    "aggregate_cases",
    "filter_by_case_id",
    "profit_margin",
]
