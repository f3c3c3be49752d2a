"""Schemas for service contracts."""
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, field_serializer

from funeral_desk.core.formatting import plain_decimal


class ContractItem(BaseModel):
    """A single billed service line."""

    description: str = Field(min_length=1)
    price: Decimal = Field(default=Decimal("0"), ge=0)
    quantity: int = Field(default=1, ge=1)


class ContractCreate(BaseModel):
    case_id: str = Field(min_length=1)
    items: list[ContractItem]
    contract_status: str | None = None


class ContractRecord(BaseModel):
    case_id: str
    items: str
    total_fee: Decimal = Decimal("0")
    contract_status: str
    signer: str
    signed_at: str

    @field_serializer("total_fee")
    def _serialize_total_fee(self, value: Decimal) -> str:
        return plain_decimal(value)


class ContractCreated(BaseModel):
    message: str
    case_id: str
    total_fee: Decimal
    summary: str

    @field_serializer("total_fee")
    def _serialize_total_fee(self, value: Decimal) -> str:
        return plain_decimal(value)
