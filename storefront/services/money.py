"""
Decimal helpers for prices.

The API serialises prices either as JSON numbers or as strings ("9.99").
Both are normalised to Decimal before any arithmetic.
"""
from decimal import Decimal, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal, None]


def to_decimal(value: Number) -> Decimal:
    """
    Convert a wire price to Decimal.

    None and unparseable values become Decimal("0").
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            # Go through str so 9.99 stays 9.99 and not 9.9900000000000002131628...
            return Decimal(str(value))
        if isinstance(value, str):
            return Decimal(value.strip())
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def to_float(value: Number) -> float:
    """Float for JSON payloads only; never for arithmetic."""
    return float(to_decimal(value))


def multiply(value: Number, factor: Number) -> Decimal:
    return to_decimal(value) * to_decimal(factor)
