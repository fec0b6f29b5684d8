"""
Money helpers.

Amounts travel through the calculator as unrounded Decimals. Ledger columns keep
six decimals; rounding to cents happens only when a value is shown to a user.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Union
from app.core.config import settings

CENT = Decimal("0.01")
STORAGE_PRECISION = Decimal("0.000001")  # Scale of ledger columns, well below display precision

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without going through binary float repr."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize_cents(value: Number) -> Decimal:
    """Round to minor units (half up) for display."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def quantize_storage(value: Number) -> Decimal:
    """Round to the ledger column scale for storage."""
    return to_decimal(value).quantize(STORAGE_PRECISION, rounding=ROUND_HALF_UP)


def within_tolerance(actual: Number, expected: Number, tolerance: Number = None) -> bool:
    """True when |actual - expected| <= tolerance."""
    if tolerance is None:
        tolerance = settings.SPLIT_TOLERANCE
    return abs(to_decimal(actual) - to_decimal(expected)) <= to_decimal(tolerance)


def format_amount(value: Number, currency: str = None) -> str:
    """Format an amount for display, e.g. '30.00 USD'."""
    currency = currency or settings.DEFAULT_CURRENCY
    return f"{quantize_cents(value):.2f} {currency}"
