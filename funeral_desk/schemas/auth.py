"""Schemas for the login exchange."""
from __future__ import annotations

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = ""


class StaffProfile(BaseModel):
    """Public profile of the signed-in staff member."""

    staff_id: str
    name: str
    role: str


class LoginResponse(BaseModel):
    message: str
    token: str
    user: StaffProfile
