"""Schemas for the reminder push digest."""
from __future__ import annotations

from pydantic import BaseModel


class DigestResult(BaseModel):
    message: str
    date: str
    sent: int
