"""Schemas for reminders and the memorial date calculator."""
from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field


class ReminderRecord(BaseModel):
    reminder_id: str
    case_id: str
    reminder_date: str
    category: str
    content: str
    status: str
    created_by: str


class ReminderCreate(BaseModel):
    case_id: str = Field(min_length=1)
    reminder_date: date
    content: str = Field(min_length=1)
    category: str | None = None


class ReminderCreated(BaseModel):
    message: str
    reminder_id: str


class ReminderStatusUpdate(BaseModel):
    status: str = Field(min_length=1)


class ReminderStatusChanged(BaseModel):
    message: str
    reminder_id: str
    status: str


class DateCalculationRequest(BaseModel):
    start_date: date
    type: str = Field(min_length=1)


class DateCalculation(BaseModel):
    """Result of offsetting a start date by a memorial interval."""

    message: str
    start_date: date
    type: str
    label: str
    result_date: date
