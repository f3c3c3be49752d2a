"""Routes for shift and leave applications."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from funeral_desk.core.security import AuthenticatedUser, get_authenticated_user
from funeral_desk.schemas.common import DataList
from funeral_desk.schemas.schedule import ScheduleApply, ScheduleCreated, ScheduleEntry
from funeral_desk.services import ScheduleService

from .dependencies import get_schedule_service

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.get("", response_model=DataList[ScheduleEntry])
def list_schedule(
    start_date: str | None = Query(default=None),
    end_date: str | None = Query(default=None),
    service: ScheduleService = Depends(get_schedule_service),
) -> DataList[ScheduleEntry]:
    return DataList[ScheduleEntry](data=service.list_entries(start_date, end_date))


@router.post("/apply", response_model=ScheduleCreated, status_code=status.HTTP_201_CREATED)
def apply_shift(
    payload: ScheduleApply,
    user: AuthenticatedUser = Depends(get_authenticated_user),
    service: ScheduleService = Depends(get_schedule_service),
) -> ScheduleCreated:
    log_id = service.apply(user, payload.date, payload.shift_type)
    return ScheduleCreated(message="Application recorded.", log_id=log_id)


__all__ = ["router"]
