"""Tests for the per-case financial report aggregation."""
from __future__ import annotations

from decimal import Decimal

import pytest

from funeral_desk.core.errors import AggregationError, NotFoundError, StoreError
from funeral_desk.services.report_service import (
    NO_CONTRACT_STATUS,
    ContractPolicy,
    ReportService,
    ReportSources,
    aggregate_cases,
    filter_by_case_id,
)
from funeral_desk.store import SqlTabularStore


def _case(case_id: str, informer: str = "Mrs. Lee") -> list[str]:
    return [case_id, "2025-01-05 09:00:00", informer, "Lin Mei", "New"]


def _contract(case_id: str, fee: str, status: str = "Signed") -> list[str]:
    return [case_id, "Package A (NT$50000)", fee, status, "Lin Mei (S002)", "2025-01-05 10:00:00"]


def _payment(payment_id: str, case_id: str, amount: str) -> list[str]:
    return [payment_id, case_id, amount, "Deposit", "Cash", "Succeeded", "2025-01-06 10:00:00", "S002"]


def _usage(log_id: str, case_id: str, total: str) -> list[str]:
    return [log_id, case_id, "M01", "1", total, total, "2025-01-06 11:00:00", "S002"]


@pytest.fixture()
def report_store(store):
    store.append_row("cases", _case("P25-001"))
    store.append_row("contracts", _contract("P25-001", "50000"))
    store.append_row("payments", _payment("PYL25-001", "P25-001", "20000"))
    store.append_row("payments", _payment("PYL25-002", "P25-001", "10000"))
    store.append_row("inventory_logs", _usage("J25-001", "P25-001", "8000"))
    return store


def test_case_figures_match_worked_example(report_store) -> None:
    [record] = ReportService(report_store).all_cases()

    assert record.case_id == "P25-001"
    assert record.contract_fee == Decimal("50000")
    assert record.collected == Decimal("30000")
    assert record.outstanding == Decimal("20000")
    assert record.material_cost == Decimal("8000")
    assert record.net_profit == Decimal("42000")
    assert record.contract_status == "Signed"

    dumped = record.model_dump()
    assert dumped["profit_margin"] == "84.00%"
    assert dumped["collected"] == "30000"


def test_case_without_contract_has_zero_margin(store) -> None:
    store.append_row("cases", _case("P25-001"))
    store.append_row("inventory_logs", _usage("J25-001", "P25-001", "1200"))

    [record] = ReportService(store).all_cases()

    assert record.contract_fee == Decimal("0")
    assert record.contract_status == NO_CONTRACT_STATUS
    assert record.net_profit == Decimal("-1200")
    assert record.profit_margin == Decimal("0")
    assert record.outstanding == Decimal("0")


def test_overpayment_gives_negative_outstanding(store) -> None:
    store.append_row("cases", _case("P25-001"))
    store.append_row("contracts", _contract("P25-001", "1000"))
    store.append_row("payments", _payment("PYL25-001", "P25-001", "1500"))

    [record] = ReportService(store).all_cases()
    assert record.outstanding == Decimal("-500")


def test_net_profit_is_exact_and_only_margin_display_is_rounded(store) -> None:
    store.append_row("cases", _case("P25-001"))
    store.append_row("contracts", _contract("P25-001", "3"))
    store.append_row("inventory_logs", _usage("J25-001", "P25-001", "2"))

    [record] = ReportService(store).all_cases()

    assert record.net_profit == Decimal("1")
    assert record.profit_margin != Decimal("33.33")
    assert record.model_dump()["profit_margin"] == "33.33%"


def test_unparsable_cells_count_as_zero(store) -> None:
    store.append_row("cases", _case("P25-001"))
    store.append_row("contracts", _contract("P25-001", "n/a"))
    store.append_row("payments", _payment("PYL25-001", "P25-001", ""))

    [record] = ReportService(store).all_cases()
    assert record.contract_fee == Decimal("0")
    assert record.collected == Decimal("0")


def test_dangling_rows_are_ignored(report_store) -> None:
    report_store.append_row("payments", _payment("PYL25-003", "P99-001", "999"))

    [record] = ReportService(report_store).all_cases()
    assert record.collected == Decimal("30000")


def test_first_contract_wins_by_default_and_latest_is_configurable(store) -> None:
    store.append_row("cases", _case("P25-001"))
    store.append_row("contracts", _contract("P25-001", "50000", "Signed"))
    store.append_row("contracts", _contract("P25-001", "65000", "Amended"))

    [first] = ReportService(store).all_cases()
    [latest] = ReportService(store, policy="latest").all_cases()

    assert first.contract_fee == Decimal("50000")
    assert latest.contract_fee == Decimal("65000")
    assert latest.contract_status == "Amended"


def test_blank_contract_status_reads_as_unsigned(store) -> None:
    store.append_row("cases", _case("P25-001"))
    store.append_row("contracts", _contract("P25-001", "100", ""))

    [record] = ReportService(store).all_cases()
    assert record.contract_status == "Unsigned"


def test_all_cases_lists_newest_first(store) -> None:
    for case_id in ("P25-001", "P25-002", "P25-003"):
        store.append_row("cases", _case(case_id))

    ids = [record.case_id for record in ReportService(store).all_cases()]
    assert ids == ["P25-003", "P25-002", "P25-001"]


def test_aggregation_is_idempotent(report_store) -> None:
    service = ReportService(report_store)
    assert service.all_cases() == service.all_cases()


def test_query_matches_case_insensitive_substring(store) -> None:
    for case_id in ("p25-001", "P25-100", "P24-007"):
        store.append_row("cases", _case(case_id))

    matches = ReportService(store).query("P25")
    assert sorted(record.case_id for record in matches) == ["P25-100", "p25-001"]


def test_query_with_blank_filter_returns_everything(store) -> None:
    store.append_row("cases", _case("P25-001"))
    store.append_row("cases", _case("P25-002"))

    assert len(ReportService(store).query("  ")) == 2
    assert len(ReportService(store).query(None)) == 2


def test_query_without_matches_raises_not_found(report_store) -> None:
    with pytest.raises(NotFoundError):
        ReportService(report_store).query("X99")


def test_query_on_empty_store_raises_not_found(store) -> None:
    with pytest.raises(NotFoundError):
        ReportService(store).query()


class _BrokenPaymentsStore(SqlTabularStore):
    def get_rows(self, table: str) -> list[list[str]]:
        if table == "payments":
            raise StoreError("Read failed: payments", cause=RuntimeError("quota exceeded"))
        return super().get_rows(table)


def test_store_failure_aborts_aggregation(engine) -> None:
    store = _BrokenPaymentsStore(engine)
    store.create_tables()
    store.append_row("cases", _case("P25-001"))

    with pytest.raises(AggregationError) as exc_info:
        ReportService(store).all_cases()

    assert exc_info.value.message == "Aggregation failed"
    assert "quota exceeded" in exc_info.value.details


def test_aggregate_cases_works_on_plain_rows() -> None:
    sources = ReportSources(
        cases=[{"case_id": "P25-001", "report_date": "", "informer": "", "staff": "", "status": "New"}],
        contracts=[{"case_id": "P25-001", "total_fee": "200", "contract_status": "Signed"}],
        payments=[],
        inventory_logs=[{"case_id": "P25-001", "total_cost": "50"}],
    )

    [record] = aggregate_cases(sources, ContractPolicy.FIRST)
    assert record.net_profit == Decimal("150")
    assert record.profit_margin == Decimal("75")
    assert filter_by_case_id([record], "p25") == [record]


def test_oversized_amounts_render_without_failing(store) -> None:
    store.append_row("cases", _case("P25-001"))
    store.append_row("cases", _case("P25-002"))
    store.append_row("contracts", _contract("P25-001", "1e30"))
    store.append_row("contracts", _contract("P25-002", "0.0001"))
    store.append_row("inventory_logs", _usage("J25-001", "P25-002", "1e30"))

    newest, oldest = (record.model_dump(mode="json") for record in ReportService(store).all_cases())

    assert oldest["contract_fee"] == "1" + "0" * 30
    assert oldest["profit_margin"] == "100.00%"
    assert newest["profit_margin"].endswith("%")
    assert newest["net_profit"].startswith("-")
