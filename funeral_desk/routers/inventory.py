"""Routes for material consumption."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from funeral_desk.core.security import AuthenticatedUser, get_authenticated_user
from funeral_desk.schemas.common import DataList
from funeral_desk.schemas.inventory import (
    ConsumeRequest,
    ConsumeResult,
    InventoryLogRecord,
    MaterialRecord,
)
from funeral_desk.services import InventoryService

from .dependencies import get_inventory_service

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get("/master", response_model=DataList[MaterialRecord])
def list_materials(
    service: InventoryService = Depends(get_inventory_service),
) -> DataList[MaterialRecord]:
    return DataList[MaterialRecord](data=service.list_materials())


@router.post("/consume", response_model=ConsumeResult, status_code=status.HTTP_201_CREATED)
def consume(
    payload: ConsumeRequest,
    user: AuthenticatedUser = Depends(get_authenticated_user),
    service: InventoryService = Depends(get_inventory_service),
) -> ConsumeResult:
    return service.consume(payload.case_id, payload.items, user)


@router.get("/logs", response_model=DataList[InventoryLogRecord])
def list_logs(
    case_id: str | None = Query(default=None),
    service: InventoryService = Depends(get_inventory_service),
) -> DataList[InventoryLogRecord]:
    return DataList[InventoryLogRecord](data=service.list_logs(case_id))


__all__ = ["router"]
