"""Helpers for matching record dates against a reference month."""

from datetime import date


def period_key(value: date) -> tuple[int, int]:
    """Return the (year, month) pair of a date."""
    return value.year, value.month


def is_in_period(value, month: int, year: int) -> bool:
    """Return True when ``value`` falls in the given calendar month.

    Args:
        value: Record date; anything that is not a date never matches.
        month: Reference month (1-12).
        year: Reference year.

    Returns:
        bool: True for a date in the same month and year.
    """
    if not isinstance(value, date):
        return False
    return period_key(value) == (year, month)


__all__ = ["period_key", "is_in_period"]
