"""Schemas for the payment ledger."""
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, field_serializer

from funeral_desk.core.formatting import plain_decimal


class PaymentCreate(BaseModel):
    case_id: str = Field(min_length=1)
    amount: Decimal
    type: str = Field(min_length=1)
    payment_method: str = Field(min_length=1)


class PaymentRecord(BaseModel):
    payment_id: str
    case_id: str
    amount: Decimal
    type: str
    payment_method: str
    status: str
    transaction_date: str
    recorded_by: str

    @field_serializer("amount")
    def _serialize_amount(self, value: Decimal) -> str:
        return plain_decimal(value)


class PaymentCreated(BaseModel):
    message: str
    payment_id: str
    amount: Decimal

    @field_serializer("amount")
    def _serialize_amount(self, value: Decimal) -> str:
        return plain_decimal(value)
