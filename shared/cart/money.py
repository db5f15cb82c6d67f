"""Decimal helpers for cart money math"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Number) -> Decimal:
    """
    Convert a numeric value to Decimal without binary float artefacts.

    Floats go through str() so that 15.5 becomes Decimal("15.5") rather
    than its exact binary expansion.
    """
    if isinstance(value, bool) or value is None:
        raise TypeError(f"Expected a number, got {value!r}")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = str(value)
    if not isinstance(value, (int, str)):
        raise TypeError(f"Expected a number, got {type(value).__name__}")

    try:
        return Decimal(value)
    except InvalidOperation:
        raise ValueError(f"Not a number: {value!r}") from None


def round2(value: Number) -> Decimal:
    """Round to cents, half up"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(value: Number) -> int:
    """Amount in integer minor units (what payment providers expect)"""
    return int((round2(value) * 100).to_integral_value())
