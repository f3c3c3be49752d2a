"""Tests for the SQL-backed tabular store and repositories."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from funeral_desk.core.errors import StoreError
from funeral_desk.repositories import CaseRepository, MaterialRepository, ProcurementRepository
from funeral_desk.services.ids import IdGenerator, format_id
from funeral_desk.store import to_cell


def test_get_rows_returns_header_first(store) -> None:
    rows = store.get_rows("cases")
    assert rows == [["case_id", "report_date", "informer", "staff", "status"]]


def test_append_row_pads_missing_cells_and_keeps_order(store) -> None:
    store.append_row("cases", ["P25-001", "2025-01-01 09:00:00", "Mrs. Lee"])
    store.append_row("cases", ["P25-002", "2025-01-02 09:00:00", "Mr. Ho", "Lin", "New"])

    rows = store.get_rows("cases")
    assert rows[1] == ["P25-001", "2025-01-01 09:00:00", "Mrs. Lee", "", ""]
    assert rows[2][0] == "P25-002"


def test_append_row_rejects_extra_values(store) -> None:
    with pytest.raises(StoreError):
        store.append_row("vendors", ["V", "n", "c", "p", "s", "extra"])


def test_update_cell_addresses_rows_from_header(store) -> None:
    store.append_row("materials", ["M01", "Incense", "box", "100", "50"])
    store.append_row("materials", ["M02", "Candles", "pair", "80", "10"])

    store.update_cell("materials", 3, {"current_stock": 7})

    rows = store.get_rows("materials")
    assert rows[1][4] == "50"
    assert rows[2][4] == "7"


@pytest.mark.parametrize("row_number", [0, 1, 5])
def test_update_cell_rejects_non_data_rows(store, row_number: int) -> None:
    store.append_row("materials", ["M01", "Incense", "box", "100", "50"])
    with pytest.raises(StoreError):
        store.update_cell("materials", row_number, {"current_stock": 1})


def test_update_cell_rejects_unknown_columns(store) -> None:
    store.append_row("materials", ["M01", "Incense", "box", "100", "50"])
    with pytest.raises(StoreError):
        store.update_cell("materials", 2, {"price": 1})


def test_unknown_table_is_a_store_error(store) -> None:
    with pytest.raises(StoreError):
        store.get_rows("ledger")


def test_to_cell_renders_numbers_without_noise() -> None:
    assert to_cell(Decimal("500.00")) == "500"
    assert to_cell(Decimal("12.50")) == "12.50"
    assert to_cell(3) == "3"
    assert to_cell(None) == ""
    assert to_cell(Decimal("1e30")) == "1" + "0" * 30
    assert to_cell(Decimal("-1.5E+29")) == "-15" + "0" * 28


def test_repository_find_insert_and_update_field(store) -> None:
    cases = CaseRepository(store)
    cases.insert({"case_id": "P25-001", "informer": "Mrs. Lee", "status": "New"})

    found = cases.find("P25-001")
    assert found is not None
    assert found.row_number == 2
    assert found["informer"] == "Mrs. Lee"
    assert found["staff"] == ""

    assert cases.update_field("P25-001", "status", "Closed") is True
    assert cases.find("P25-001")["status"] == "Closed"
    assert cases.update_field("P25-999", "status", "Closed") is False
    assert cases.count() == 1


def test_repository_insert_rejects_unknown_columns(store) -> None:
    with pytest.raises(KeyError):
        MaterialRepository(store).insert({"material_id": "M01", "price": "1"})


def test_format_id_pads_sequence() -> None:
    moment = datetime(2025, 3, 15)
    assert format_id("P", moment, 1) == "P25-001"
    assert format_id("PYL", moment, 12) == "PYL25-012"
    assert format_id("PR", moment, 3, stamp_format="%y%m") == "PR2503-003"
    assert format_id("J", moment, 1000) == "J25-1000"


def test_id_generator_uses_row_count_and_skips_taken_ids(store, clock) -> None:
    cases = CaseRepository(store)
    generator = IdGenerator(clock)
    assert generator.next_id(cases, "P") == "P25-001"

    cases.insert({"case_id": "P25-002"})
    assert generator.next_id(cases, "P") == "P25-003"
    assert generator.next_ids(cases, "P", 2) == ["P25-003", "P25-004"]


def test_id_generator_month_stamp(store, clock) -> None:
    generator = IdGenerator(clock)
    assert generator.next_id(ProcurementRepository(store), "PR", stamp_format="%y%m") == "PR2503-001"
