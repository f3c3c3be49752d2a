"""Schemas for case intake."""
from __future__ import annotations

from pydantic import BaseModel, Field


class CaseRecord(BaseModel):
    """One row of the case overview."""

    case_id: str
    report_date: str
    informer: str
    staff: str
    status: str


class CaseCreate(BaseModel):
    informer: str = Field(min_length=1)
    staff: str = Field(min_length=1)


class CaseList(BaseModel):
    message: str = ""
    cases: list[CaseRecord]


class CaseCreated(BaseModel):
    message: str
    case_id: str
    informer: str
