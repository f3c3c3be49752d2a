"""Service implementation for restocking purchases.

A restock applies last-in pricing: the master's ``current_cost`` becomes the
purchase unit cost and ``current_stock`` grows by the purchased quantity.
"""
from __future__ import annotations

from decimal import Decimal

from funeral_desk.core.clock import Clock, format_timestamp, local_now
from funeral_desk.core.errors import NotFoundError, ValidationError
from funeral_desk.core.formatting import parse_decimal, parse_int
from funeral_desk.core.logger import get_logger
from funeral_desk.core.security import AuthenticatedUser
from funeral_desk.repositories import MaterialRepository, ProcurementRepository, VendorRepository
from funeral_desk.schemas.procurement import ProcurementRecord, RestockResult
from funeral_desk.store import TabularStore

from .ids import IdGenerator
from .locks import MATERIAL_LOCKS
from .validation import ensure_exists, require_text

LOGGER = get_logger(__name__)

PROCUREMENT_PREFIX = "PR"
PROCUREMENT_STAMP = "%y%m"


def _procurement_record(row: dict[str, str]) -> ProcurementRecord:
    return ProcurementRecord(
        procurement_id=row["procurement_id"],
        date=row["date"],
        vendor_id=row["vendor_id"],
        material_id=row["material_id"],
        quantity=parse_int(row["quantity"]),
        unit_cost=parse_decimal(row["unit_cost"]),
        total_cost=parse_decimal(row["total_cost"]),
        staff_id=row["staff_id"],
    )


class ProcurementService:
    def __init__(self, store: TabularStore, *, now: Clock | None = None) -> None:
        self._vendors = VendorRepository(store)
        self._materials = MaterialRepository(store)
        self._procurements = ProcurementRepository(store)
        self._now = now or local_now
        self._ids = IdGenerator(self._now)

    def restock(
        self,
        vendor_id: str,
        material_id: str,
        quantity: int,
        unit_cost: Decimal | str,
        staff: AuthenticatedUser,
    ) -> RestockResult:
        vendor_id = require_text(vendor_id, "vendor_id", "Vendor ID is required.")
        material_id = require_text(material_id, "material_id", "Material ID is required.")
        if quantity <= 0:
            raise ValidationError("quantity", "Quantity must be greater than zero.")
        cost = parse_decimal(unit_cost)
        if cost < 0:
            raise ValidationError("unit_cost", "Unit cost must not be negative.")
        ensure_exists(self._vendors, vendor_id, "Vendor")

        with MATERIAL_LOCKS.hold(material_id):
            master = self._materials.find(material_id)
            if master is None:
                raise NotFoundError(f"Material {material_id} does not exist.")

            with self._ids.allocate(
                self._procurements, PROCUREMENT_PREFIX, stamp_format=PROCUREMENT_STAMP
            ) as procurement_id:
                self._procurements.insert(
                    {
                        "procurement_id": procurement_id,
                        "date": format_timestamp(self._now()),
                        "vendor_id": vendor_id,
                        "material_id": material_id,
                        "quantity": quantity,
                        "unit_cost": cost,
                        "total_cost": cost * quantity,
                        "staff_id": staff.staff_id,
                    }
                )

            new_stock = parse_int(master["current_stock"]) + quantity
            self._materials.update_fields(
                master.row_number, {"current_cost": cost, "current_stock": new_stock}
            )

        LOGGER.info(
            "Restocked %s x%d from %s at %s (%s)", material_id, quantity, vendor_id, cost, procurement_id
        )
        return RestockResult(
            message="Restock recorded.",
            procurement_id=procurement_id,
            new_stock=new_stock,
            new_cost=cost,
        )

    def history(self) -> list[ProcurementRecord]:
        """Return purchase logs, most recent first."""

        return [_procurement_record(row) for row in reversed(self._procurements.all())]
