"""Schemas for vendor reference data."""
from __future__ import annotations

from pydantic import BaseModel, Field


class VendorRecord(BaseModel):
    vendor_id: str
    name: str
    contact_person: str
    phone: str
    service_type: str


class VendorCreate(BaseModel):
    name: str = Field(min_length=1)
    contact_person: str = Field(min_length=1)
    phone: str = ""
    service_type: str = ""


class VendorCreated(BaseModel):
    message: str
    vendor_id: str
