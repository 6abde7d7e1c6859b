"""Helpers for Decimal money arithmetic.

Amounts are accumulated as Decimal at full precision and rounded to cents
only when a value leaves the aggregation (ROUND_HALF_UP, so 50.005 -> 50.01).
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, JSON or tests (None counts as zero).

    Returns:
        Decimal: Normalized numeric value.

    Raises:
        ValueError: If the value is not numeric.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        # str() keeps floats like 0.1 from dragging in binary noise
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Not a numeric amount: {value!r}") from e


def to_cents(value) -> Decimal:
    """Round an amount to two decimal places using ROUND_HALF_UP."""
    return coerce_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def to_display(value) -> float:
    """Convert an amount to a 2dp JSON number for the serialization boundary."""
    return float(to_cents(value))


__all__ = ["CENTS", "ZERO", "coerce_decimal", "to_cents", "to_display"]
