"""Routes exposing the aggregated per-case financial report."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from funeral_desk.schemas.common import DataList
from funeral_desk.schemas.reports import CaseFinancials
from funeral_desk.services import ReportService

from .dependencies import get_report_service

router = APIRouter(prefix="/report", tags=["reports"])


@router.get("/cases", response_model=DataList[CaseFinancials])
def all_cases(service: ReportService = Depends(get_report_service)) -> DataList[CaseFinancials]:
    """Every case with its financial figures, newest first."""

    return DataList[CaseFinancials](data=service.all_cases())


@router.get("/query", response_model=DataList[CaseFinancials])
def query_cases(
    case_id: str | None = Query(default=None),
    service: ReportService = Depends(get_report_service),
) -> DataList[CaseFinancials]:
    """Cases whose id contains ``case_id``, case-insensitively; 404 when none match."""

    return DataList[CaseFinancials](data=service.query(case_id))


__all__ = ["router"]
