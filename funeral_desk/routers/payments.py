"""Routes for the payment ledger."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from funeral_desk.core.security import AuthenticatedUser, get_authenticated_user
from funeral_desk.schemas.common import DataList
from funeral_desk.schemas.payments import PaymentCreate, PaymentCreated, PaymentRecord
from funeral_desk.services import PaymentService

from .dependencies import get_payment_service

router = APIRouter(prefix="/payment", tags=["payments"])


@router.post("/record", response_model=PaymentCreated, status_code=status.HTTP_201_CREATED)
def record_payment(
    payload: PaymentCreate,
    user: AuthenticatedUser = Depends(get_authenticated_user),
    service: PaymentService = Depends(get_payment_service),
) -> PaymentCreated:
    return service.record(
        payload.case_id, payload.amount, payload.type, payload.payment_method, user
    )


@router.get("/case/{case_id}", response_model=DataList[PaymentRecord])
def payments_for_case(
    case_id: str, service: PaymentService = Depends(get_payment_service)
) -> DataList[PaymentRecord]:
    return DataList[PaymentRecord](data=service.list_for_case(case_id))


__all__ = ["router"]
