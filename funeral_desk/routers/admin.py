"""Administrator-only maintenance of master and reference data.

The role check is mounted once on the router, so every route below requires
the administrator role.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from funeral_desk.core.security import require_admin_user
from funeral_desk.schemas.common import DataList
from funeral_desk.schemas.inventory import MaterialCreate, MaterialRecord, MaterialUpdate, MaterialUpdated
from funeral_desk.schemas.vendors import VendorCreate, VendorCreated, VendorRecord
from funeral_desk.services import InventoryService, VendorService

from .dependencies import get_inventory_service, get_vendor_service

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin_user)])


@router.get("/inventory/master", response_model=DataList[MaterialRecord])
def list_materials(
    service: InventoryService = Depends(get_inventory_service),
) -> DataList[MaterialRecord]:
    return DataList[MaterialRecord](data=service.list_materials())


@router.put("/inventory/master", response_model=MaterialUpdated)
def update_material(
    payload: MaterialUpdate, service: InventoryService = Depends(get_inventory_service)
) -> MaterialUpdated:
    return service.update_material(payload)


@router.post(
    "/inventory/master", response_model=MaterialRecord, status_code=status.HTTP_201_CREATED
)
def add_material(
    payload: MaterialCreate, service: InventoryService = Depends(get_inventory_service)
) -> MaterialRecord:
    return service.add_material(payload)


@router.get("/vendors", response_model=DataList[VendorRecord])
def list_vendors(service: VendorService = Depends(get_vendor_service)) -> DataList[VendorRecord]:
    return DataList[VendorRecord](data=service.list_vendors())


@router.post("/vendors", response_model=VendorCreated, status_code=status.HTTP_201_CREATED)
def add_vendor(
    payload: VendorCreate, service: VendorService = Depends(get_vendor_service)
) -> VendorCreated:
    vendor_id = service.add_vendor(
        payload.name, payload.contact_person, payload.phone, payload.service_type
    )
    return VendorCreated(message="Vendor added.", vendor_id=vendor_id)


__all__ = ["router"]
