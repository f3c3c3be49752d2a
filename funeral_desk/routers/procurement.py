"""Routes for restocking purchases."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from funeral_desk.core.security import AuthenticatedUser, get_authenticated_user
from funeral_desk.schemas.common import DataList
from funeral_desk.schemas.procurement import ProcurementRecord, RestockRequest, RestockResult
from funeral_desk.services import ProcurementService

from .dependencies import get_procurement_service

router = APIRouter(prefix="/procurement", tags=["procurement"])


@router.post("/restock", response_model=RestockResult, status_code=status.HTTP_201_CREATED)
def restock(
    payload: RestockRequest,
    user: AuthenticatedUser = Depends(get_authenticated_user),
    service: ProcurementService = Depends(get_procurement_service),
) -> RestockResult:
    return service.restock(
        payload.vendor_id, payload.material_id, payload.quantity, payload.unit_cost, user
    )


@router.get("/history", response_model=DataList[ProcurementRecord])
def history(
    service: ProcurementService = Depends(get_procurement_service),
) -> DataList[ProcurementRecord]:
    return DataList[ProcurementRecord](data=service.history())


__all__ = ["router"]
