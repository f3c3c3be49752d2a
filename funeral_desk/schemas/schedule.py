"""Schemas for shift and leave applications."""
from __future__ import annotations

from datetime import date as Date

from pydantic import BaseModel, Field


class ScheduleEntry(BaseModel):
    log_id: str
    staff_id: str
    date: str
    shift_type: str
    applied_by: str


class ScheduleApply(BaseModel):
    date: Date
    shift_type: str = Field(min_length=1)


class ScheduleCreated(BaseModel):
    message: str
    log_id: str
