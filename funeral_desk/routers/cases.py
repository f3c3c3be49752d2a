"""Routes for case intake."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from funeral_desk.schemas.cases import CaseCreate, CaseCreated, CaseList
from funeral_desk.services import CasesService

from .dependencies import get_cases_service

router = APIRouter(prefix="/cases", tags=["cases"])


@router.get("", response_model=CaseList)
def list_cases(service: CasesService = Depends(get_cases_service)) -> CaseList:
    return CaseList(cases=service.list_cases())


@router.post("/add", response_model=CaseCreated, status_code=status.HTTP_201_CREATED)
def add_case(
    payload: CaseCreate, service: CasesService = Depends(get_cases_service)
) -> CaseCreated:
    case_id = service.create_case(payload.informer, payload.staff)
    return CaseCreated(message="Case created.", case_id=case_id, informer=payload.informer)


__all__ = ["router"]
