"""Service implementation for consumable materials.

Consumption locks the master's current unit cost into each log row at write
time, so later price changes never rewrite history. Stock is decremented on
the master row; it may go negative (a warning is logged) because physical
stock is reconciled by hand.
"""
from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Sequence

from funeral_desk.core.clock import Clock, format_timestamp, local_now
from funeral_desk.core.errors import NotFoundError, ValidationError
from funeral_desk.core.formatting import parse_decimal, parse_int
from funeral_desk.core.logger import get_logger
from funeral_desk.core.security import AuthenticatedUser
from funeral_desk.repositories import (
    CaseRepository,
    InventoryLogRepository,
    MaterialRepository,
    StoredRow,
)
from funeral_desk.schemas.inventory import (
    ConsumeItem,
    ConsumeResult,
    InventoryLogRecord,
    MaterialCreate,
    MaterialRecord,
    MaterialUpdate,
    MaterialUpdated,
)
from funeral_desk.store import TabularStore

from .ids import IdGenerator
from .locks import MATERIAL_LOCKS, TABLE_LOCKS
from .validation import ensure_exists, require_text

LOGGER = get_logger(__name__)

CONSUMPTION_PREFIX = "J"


def _material_record(row: dict[str, str]) -> MaterialRecord:
    return MaterialRecord(
        material_id=row["material_id"],
        name=row["name"],
        unit=row["unit"],
        current_cost=parse_decimal(row["current_cost"]),
        current_stock=parse_int(row["current_stock"]),
    )


def _log_record(row: dict[str, str]) -> InventoryLogRecord:
    return InventoryLogRecord(
        log_id=row["log_id"],
        case_id=row["case_id"],
        material_id=row["material_id"],
        quantity=parse_int(row["quantity"]),
        cost_per_unit=parse_decimal(row["cost_per_unit"]),
        total_cost=parse_decimal(row["total_cost"]),
        transaction_date=row["transaction_date"],
        staff_id=row["staff_id"],
    )


class InventoryService:
    def __init__(self, store: TabularStore, *, now: Clock | None = None) -> None:
        self._cases = CaseRepository(store)
        self._materials = MaterialRepository(store)
        self._logs = InventoryLogRepository(store)
        self._now = now or local_now
        self._ids = IdGenerator(self._now)

    def list_materials(self) -> list[MaterialRecord]:
        return [_material_record(row) for row in self._materials.all()]

    def list_logs(self, case_id: str | None = None) -> list[InventoryLogRecord]:
        rows = self._logs.where(case_id=case_id) if case_id else self._logs.all()
        return [_log_record(row) for row in rows]

    def consume(
        self, case_id: str, items: Sequence[ConsumeItem], staff: AuthenticatedUser
    ) -> ConsumeResult:
        """Write one consumption log per item and decrement master stock.

        Every referenced material is checked before anything is written.
        Items with a non-positive quantity are skipped.
        """
        case_id = require_text(case_id, "case_id", "Case ID is required.")
        if not items:
            raise ValidationError("items", "At least one item is required.")
        ensure_exists(self._cases, case_id, "Case")

        wanted = [item for item in items if item.quantity > 0]
        if not wanted:
            raise ValidationError("items", "At least one item needs a positive quantity.")
        if len(wanted) < len(items):
            LOGGER.debug("Skipping %d item(s) with non-positive quantity", len(items) - len(wanted))
        material_ids = [item.material_id for item in wanted]

        with MATERIAL_LOCKS.hold(*material_ids), TABLE_LOCKS.hold(self._logs.table):
            masters: dict[str, StoredRow] = {}
            for material_id in material_ids:
                if material_id in masters:
                    continue
                row = self._materials.find(material_id)
                if row is None:
                    raise NotFoundError(f"Material {material_id} does not exist.")
                masters[material_id] = row

            log_ids = self._ids.next_ids(self._logs, CONSUMPTION_PREFIX, len(wanted))
            stamp = format_timestamp(self._now())
            used: dict[str, int] = defaultdict(int)
            total_cost = Decimal("0")

            for log_id, item in zip(log_ids, wanted):
                cost_per_unit = parse_decimal(masters[item.material_id]["current_cost"])
                line_cost = cost_per_unit * item.quantity
                self._logs.insert(
                    {
                        "log_id": log_id,
                        "case_id": case_id,
                        "material_id": item.material_id,
                        "quantity": item.quantity,
                        "cost_per_unit": cost_per_unit,
                        "total_cost": line_cost,
                        "transaction_date": stamp,
                        "staff_id": staff.staff_id,
                    }
                )
                used[item.material_id] += item.quantity
                total_cost += line_cost

            for material_id, quantity in used.items():
                master = masters[material_id]
                remaining = parse_int(master["current_stock"]) - quantity
                if remaining < 0:
                    LOGGER.warning("Stock of %s is now negative (%d)", material_id, remaining)
                self._materials.update_fields(master.row_number, {"current_stock": remaining})

        LOGGER.info("Case %s consumed %d item(s), cost %s", case_id, len(log_ids), total_cost)
        return ConsumeResult(
            message="Consumption recorded.",
            case_id=case_id,
            log_ids=log_ids,
            total_cost=total_cost,
        )

    def update_material(self, update: MaterialUpdate) -> MaterialUpdated:
        """Overwrite only the supplied fields of a material master row."""

        changes = update.model_dump(exclude={"material_id"}, exclude_none=True)
        with MATERIAL_LOCKS.hold(update.material_id):
            row = self._materials.find(update.material_id)
            if row is None:
                raise NotFoundError(f"Material {update.material_id} does not exist.")
            if changes:
                self._materials.update_fields(row.row_number, changes)

        updated_cost = changes.get("current_cost", parse_decimal(row["current_cost"]))
        LOGGER.info("Material %s updated: %s", update.material_id, ", ".join(sorted(changes)) or "no changes")
        return MaterialUpdated(
            message="Material updated.",
            material_id=update.material_id,
            updated_cost=updated_cost,
        )

    def add_material(self, material: MaterialCreate) -> MaterialRecord:
        material_id = require_text(material.material_id, "material_id", "Material ID is required.")
        name = require_text(material.name, "name", "Material name is required.")
        with TABLE_LOCKS.hold(self._materials.table):
            if self._materials.exists(material_id):
                raise ValidationError("material_id", f"Material {material_id} already exists.")
            self._materials.insert(
                {
                    "material_id": material_id,
                    "name": name,
                    "unit": material.unit.strip(),
                    "current_cost": material.current_cost,
                    "current_stock": material.current_stock,
                }
            )
        LOGGER.info("Material %s added", material_id)
        return MaterialRecord(
            material_id=material_id,
            name=name,
            unit=material.unit.strip(),
            current_cost=material.current_cost,
            current_stock=material.current_stock,
        )
