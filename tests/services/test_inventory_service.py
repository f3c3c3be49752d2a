"""Tests for material consumption and master maintenance."""
from __future__ import annotations

from decimal import Decimal

import pytest

from funeral_desk.core.errors import NotFoundError, ValidationError
from funeral_desk.repositories import InventoryLogRepository, MaterialRepository
from funeral_desk.schemas.inventory import ConsumeItem, MaterialCreate, MaterialUpdate
from funeral_desk.services import InventoryService


@pytest.fixture()
def inventory_store(seeded_store):
    seeded_store.append_row("cases", ["P25-001", "2025-03-01 09:00:00", "Mrs. Lee", "Lin Mei", "New"])
    return seeded_store


@pytest.fixture()
def service(inventory_store, clock) -> InventoryService:
    return InventoryService(inventory_store, now=clock)


def test_consume_locks_cost_and_decrements_stock(service, inventory_store, staff_user) -> None:
    result = service.consume("P25-001", [ConsumeItem(material_id="M01", quantity=5)], staff_user)

    assert result.total_cost == Decimal("500")
    assert result.log_ids == ["J25-001"]

    [log] = InventoryLogRepository(inventory_store).all()
    assert log["cost_per_unit"] == "100"
    assert log["total_cost"] == "500"
    assert log["quantity"] == "5"
    assert log["staff_id"] == "S002"
    assert log["transaction_date"] == "2025-03-15 10:30:00"
    assert MaterialRepository(inventory_store).find("M01")["current_stock"] == "45"


def test_later_cost_change_leaves_written_log_untouched(service, inventory_store, staff_user) -> None:
    service.consume("P25-001", [ConsumeItem(material_id="M01", quantity=5)], staff_user)
    service.update_material(MaterialUpdate(material_id="M01", current_cost=Decimal("120")))

    [log] = service.list_logs("P25-001")
    assert log.cost_per_unit == Decimal("100")
    assert log.total_cost == Decimal("500")
    assert service.list_materials()[0].current_cost == Decimal("120")


def test_consume_checks_every_material_before_writing(service, inventory_store, staff_user) -> None:
    items = [
        ConsumeItem(material_id="M01", quantity=1),
        ConsumeItem(material_id="M99", quantity=1),
    ]
    with pytest.raises(NotFoundError):
        service.consume("P25-001", items, staff_user)

    assert InventoryLogRepository(inventory_store).count() == 0
    assert MaterialRepository(inventory_store).find("M01")["current_stock"] == "50"


def test_consume_unknown_case_is_not_found(service, staff_user) -> None:
    with pytest.raises(NotFoundError):
        service.consume("P25-404", [ConsumeItem(material_id="M01", quantity=1)], staff_user)


def test_consume_gives_each_item_its_own_log_id(service, inventory_store, staff_user) -> None:
    items = [
        ConsumeItem(material_id="M01", quantity=2),
        ConsumeItem(material_id="M02", quantity=1),
        ConsumeItem(material_id="M01", quantity=3),
    ]
    result = service.consume("P25-001", items, staff_user)

    assert result.log_ids == ["J25-001", "J25-002", "J25-003"]
    assert result.total_cost == Decimal("580")
    materials = MaterialRepository(inventory_store)
    assert materials.find("M01")["current_stock"] == "45"
    assert materials.find("M02")["current_stock"] == "9"


def test_consume_skips_non_positive_quantities(service, inventory_store, staff_user) -> None:
    items = [
        ConsumeItem(material_id="M01", quantity=0),
        ConsumeItem(material_id="M02", quantity=-2),
        ConsumeItem(material_id="M02", quantity=1),
    ]
    result = service.consume("P25-001", items, staff_user)

    assert len(result.log_ids) == 1
    assert MaterialRepository(inventory_store).find("M01")["current_stock"] == "50"


def test_consume_requires_items(service, staff_user) -> None:
    with pytest.raises(ValidationError) as exc_info:
        service.consume("P25-001", [], staff_user)
    assert exc_info.value.field == "items"


def test_stock_may_go_negative(service, inventory_store, staff_user) -> None:
    service.consume("P25-001", [ConsumeItem(material_id="M02", quantity=12)], staff_user)
    assert MaterialRepository(inventory_store).find("M02")["current_stock"] == "-2"


def test_update_material_only_overwrites_supplied_fields(service, inventory_store) -> None:
    result = service.update_material(MaterialUpdate(material_id="M02", current_stock=40))

    row = MaterialRepository(inventory_store).find("M02")
    assert row["current_stock"] == "40"
    assert row["current_cost"] == "80"
    assert row["name"] == "Candles"
    assert result.updated_cost == Decimal("80")


def test_update_unknown_material_is_not_found(service) -> None:
    with pytest.raises(NotFoundError):
        service.update_material(MaterialUpdate(material_id="M77", name="Ghost"))


def test_add_material_rejects_duplicates(service) -> None:
    created = service.add_material(
        MaterialCreate(material_id="M03", name="Lotus lamps", unit="piece", current_cost=Decimal("60"))
    )
    assert created.current_stock == 0
    assert [material.material_id for material in service.list_materials()] == ["M01", "M02", "M03"]

    with pytest.raises(ValidationError):
        service.add_material(MaterialCreate(material_id="M03", name="Again"))


def test_consume_with_no_positive_quantity_is_rejected(service, inventory_store, staff_user) -> None:
    items = [ConsumeItem(material_id="M01", quantity=0), ConsumeItem(material_id="M02", quantity=-3)]

    with pytest.raises(ValidationError) as exc_info:
        service.consume("P25-001", items, staff_user)

    assert exc_info.value.field == "items"
    assert InventoryLogRepository(inventory_store).count() == 0
    assert MaterialRepository(inventory_store).find("M02")["current_stock"] == "10"
