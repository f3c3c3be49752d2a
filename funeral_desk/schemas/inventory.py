"""Schemas for the material master and consumption logs."""
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, field_serializer

from funeral_desk.core.formatting import plain_decimal


class MaterialRecord(BaseModel):
    """Material master row with numeric cells parsed."""

    material_id: str
    name: str
    unit: str
    current_cost: Decimal = Decimal("0")
    current_stock: int = 0

    @field_serializer("current_cost")
    def _serialize_cost(self, value: Decimal) -> str:
        return plain_decimal(value)


class ConsumeItem(BaseModel):
    material_id: str = Field(min_length=1)
    quantity: int


class ConsumeRequest(BaseModel):
    case_id: str = Field(min_length=1)
    items: list[ConsumeItem]


class ConsumeResult(BaseModel):
    message: str
    case_id: str
    log_ids: list[str]
    total_cost: Decimal

    @field_serializer("total_cost")
    def _serialize_total(self, value: Decimal) -> str:
        return plain_decimal(value)


class InventoryLogRecord(BaseModel):
    log_id: str
    case_id: str
    material_id: str
    quantity: int
    cost_per_unit: Decimal
    total_cost: Decimal
    transaction_date: str
    staff_id: str

    @field_serializer("cost_per_unit", "total_cost")
    def _serialize_amount(self, value: Decimal) -> str:
        return plain_decimal(value)


class MaterialUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    material_id: str = Field(min_length=1)
    name: str | None = None
    unit: str | None = None
    current_cost: Decimal | None = Field(default=None, ge=0)
    current_stock: int | None = None


class MaterialCreate(BaseModel):
    material_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    unit: str = ""
    current_cost: Decimal = Field(default=Decimal("0"), ge=0)
    current_stock: int = 0


class MaterialUpdated(BaseModel):
    message: str
    material_id: str
    updated_cost: Decimal

    @field_serializer("updated_cost")
    def _serialize_cost(self, value: Decimal) -> str:
        return plain_decimal(value)
