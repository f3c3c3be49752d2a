"""Routes for service contracts."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from funeral_desk.core.security import AuthenticatedUser, get_authenticated_user
from funeral_desk.schemas.common import DataList
from funeral_desk.schemas.contracts import ContractCreate, ContractCreated, ContractRecord
from funeral_desk.services import ContractsService

from .dependencies import get_contracts_service

router = APIRouter(prefix="/contracts", tags=["contracts"])


@router.post("/add", response_model=ContractCreated, status_code=status.HTTP_201_CREATED)
def add_contract(
    payload: ContractCreate,
    user: AuthenticatedUser = Depends(get_authenticated_user),
    service: ContractsService = Depends(get_contracts_service),
) -> ContractCreated:
    return service.create_contract(
        payload.case_id, payload.items, user, contract_status=payload.contract_status
    )


@router.get("/case/{case_id}", response_model=DataList[ContractRecord])
def contracts_for_case(
    case_id: str, service: ContractsService = Depends(get_contracts_service)
) -> DataList[ContractRecord]:
    return DataList[ContractRecord](data=service.list_contracts(case_id))


__all__ = ["router"]
