"""Service implementation for vendor reference data."""
from __future__ import annotations

from funeral_desk.core.clock import Clock, local_now
from funeral_desk.core.logger import get_logger
from funeral_desk.repositories import VendorRepository
from funeral_desk.schemas.vendors import VendorRecord
from funeral_desk.store import TabularStore

from .ids import IdGenerator
from .validation import require_text

LOGGER = get_logger(__name__)

VENDOR_PREFIX = "V"


class VendorService:
    def __init__(self, store: TabularStore, *, now: Clock | None = None) -> None:
        self._vendors = VendorRepository(store)
        self._ids = IdGenerator(now or local_now)

    def list_vendors(self) -> list[VendorRecord]:
        return [VendorRecord(**row) for row in self._vendors.all()]

    def add_vendor(
        self, name: str, contact_person: str, phone: str = "", service_type: str = ""
    ) -> str:
        name = require_text(name, "name", "Vendor name is required.")
        contact_person = require_text(
            contact_person, "contact_person", "Contact person is required."
        )
        with self._ids.allocate(self._vendors, VENDOR_PREFIX) as vendor_id:
            self._vendors.insert(
                {
                    "vendor_id": vendor_id,
                    "name": name,
                    "contact_person": contact_person,
                    "phone": (phone or "").strip(),
                    "service_type": (service_type or "").strip(),
                }
            )
        LOGGER.info("Vendor %s added: %s", vendor_id, name)
        return vendor_id
