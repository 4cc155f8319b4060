"""Decimal helpers for currency arithmetic.

Cash, prices and portfolio values are carried as ``Decimal`` and rounded
to the currency unit after every monetary operation, half-to-even, so
long simulations do not drift.
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, ROUND_HALF_EVEN, Decimal
from typing import Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal(0)
ONE = Decimal(1)
HUNDRED = Decimal(100)

# The default market quotes in whole currency units (no sub-unit prices).
CURRENCY_UNIT = Decimal(1)


def to_decimal(value: Number) -> Decimal:
    """Coerce a number to ``Decimal`` without binary float artefacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round_money(value: Number, unit: Decimal = CURRENCY_UNIT) -> Decimal:
    """Round to the currency unit using banker's rounding."""
    return to_decimal(value).quantize(unit, rounding=ROUND_HALF_EVEN)


def floor_shares(value: Number) -> int:
    """Whole shares only: floor towards negative infinity."""
    return int(to_decimal(value).to_integral_value(rounding=ROUND_FLOOR))
