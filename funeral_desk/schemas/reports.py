"""Schemas for the per-case financial report."""
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, field_serializer

from funeral_desk.core.formatting import format_percentage, plain_decimal


class CaseFinancials(BaseModel):
    """One case joined with its contract, payments and material costs."""

    case_id: str
    report_date: str
    informer: str
    staff: str
    status: str
    contract_status: str
    contract_fee: Decimal = Decimal("0")
    material_cost: Decimal = Decimal("0")
    collected: Decimal = Decimal("0")
    outstanding: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")
    profit_margin: Decimal = Decimal("0")

    @field_serializer(
        "contract_fee",
        "material_cost",
        "collected",
        "outstanding",
        "net_profit",
    )
    def _serialize_decimal(self, value: Decimal) -> str:
        return plain_decimal(value)

    @field_serializer("profit_margin")
    def _serialize_margin(self, value: Decimal) -> str:
        return format_percentage(value)
