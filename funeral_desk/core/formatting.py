"""Helpers for parsing and formatting numeric cell values."""

from __future__ import annotations
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

_CENT = Decimal("0.01")


def parse_decimal(value: object) -> Decimal:
    """Read a numeric cell leniently; blank or unparsable cells count as zero."""

    if isinstance(value, Decimal):
        return value
    if value is None:
        return Decimal(0)
    text = str(value).strip().replace(",", "")
    if not text:
        return Decimal(0)
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return Decimal(0)
    if not parsed.is_finite():
        return Decimal(0)
    return parsed


def parse_int(value: object) -> int:
    """Read an integer cell leniently, truncating any fractional part."""

    return int(parse_decimal(value))


def plain_decimal(value: Decimal | int) -> str:
    """Render a decimal without exponent notation or redundant zeros.

    ``Decimal("500.00")`` becomes ``"500"``, ``Decimal("12.50")`` stays
    ``"12.50"`` and ``Decimal("1E+30")`` is written out in full.
    """
    d = Decimal(value)
    if d == d.to_integral_value():
        return format(d.to_integral_value(), "f")
    return format(d, "f")


def round_percentage(value: Decimal) -> Decimal:
    # Widen precision so quantizing very large margins cannot overflow the context.
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def format_percentage(value: Decimal) -> str:
    """Format a percentage with exactly two decimals, e.g. ``"84.00%"``."""

    return f"{round_percentage(value):f}%"
