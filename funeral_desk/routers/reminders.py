"""Routes for reminders and the memorial date calculator."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from funeral_desk.core.security import AuthenticatedUser, get_authenticated_user
from funeral_desk.schemas.common import DataList
from funeral_desk.schemas.reminders import (
    DateCalculation,
    DateCalculationRequest,
    ReminderCreate,
    ReminderCreated,
    ReminderRecord,
    ReminderStatusChanged,
    ReminderStatusUpdate,
)
from funeral_desk.services import ReminderService

from .dependencies import get_reminder_service

router = APIRouter(prefix="/reminder", tags=["reminders"])


@router.get("", response_model=DataList[ReminderRecord])
def list_reminders(
    case_id: str | None = Query(default=None),
    include_closed: bool = Query(default=False),
    service: ReminderService = Depends(get_reminder_service),
) -> DataList[ReminderRecord]:
    reminders = service.list_reminders(case_id, include_closed=include_closed)
    return DataList[ReminderRecord](data=reminders)


@router.post("/add", response_model=ReminderCreated, status_code=status.HTTP_201_CREATED)
def add_reminder(
    payload: ReminderCreate,
    user: AuthenticatedUser = Depends(get_authenticated_user),
    service: ReminderService = Depends(get_reminder_service),
) -> ReminderCreated:
    reminder_id = service.create_reminder(
        payload.case_id,
        payload.reminder_date,
        payload.content,
        user,
        category=payload.category,
    )
    return ReminderCreated(message="Reminder created.", reminder_id=reminder_id)


@router.post("/calculate-date", response_model=DateCalculation)
def calculate_date(
    payload: DateCalculationRequest,
    service: ReminderService = Depends(get_reminder_service),
) -> DateCalculation:
    return service.calculate_date(payload.start_date, payload.type)


@router.post("/{reminder_id}/status", response_model=ReminderStatusChanged)
def change_status(
    reminder_id: str,
    payload: ReminderStatusUpdate,
    service: ReminderService = Depends(get_reminder_service),
) -> ReminderStatusChanged:
    new_status = service.set_status(reminder_id, payload.status)
    return ReminderStatusChanged(
        message="Reminder updated.", reminder_id=reminder_id, status=new_status
    )


__all__ = ["router"]
