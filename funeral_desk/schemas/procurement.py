"""Schemas for restocking purchases."""
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, field_serializer

from funeral_desk.core.formatting import plain_decimal


class RestockRequest(BaseModel):
    vendor_id: str = Field(min_length=1)
    material_id: str = Field(min_length=1)
    quantity: int
    unit_cost: Decimal


class RestockResult(BaseModel):
    message: str
    procurement_id: str
    new_stock: int
    new_cost: Decimal

    @field_serializer("new_cost")
    def _serialize_cost(self, value: Decimal) -> str:
        return plain_decimal(value)


class ProcurementRecord(BaseModel):
    procurement_id: str
    date: str
    vendor_id: str
    material_id: str
    quantity: int
    unit_cost: Decimal
    total_cost: Decimal
    staff_id: str

    @field_serializer("unit_cost", "total_cost")
    def _serialize_amount(self, value: Decimal) -> str:
        return plain_decimal(value)
