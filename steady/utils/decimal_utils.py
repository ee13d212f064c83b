"""Helpers for Decimal normalization."""

from decimal import Decimal, InvalidOperation


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Values that cannot be read as a finite number (None, empty or
    non-numeric strings, NaN, infinities) become zero so they never
    poison a sum.

    Args:
        value: Raw numeric value from SQL, forms or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    return result if result.is_finite() else Decimal("0")


def coerce_amount(value) -> Decimal:
    """Normalize a monetary amount, clamping negatives to zero.

    Args:
        value: Raw amount value.

    Returns:
        Decimal: Non-negative amount.
    """
    amount = coerce_decimal(value)
    return amount if amount > 0 else Decimal("0")


__all__ = ["coerce_decimal", "coerce_amount"]
