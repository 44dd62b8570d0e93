"""
Date and time utilities for Finovo.

Provides timezone-aware datetime helpers and calendar month helpers
used by the budgeting and dashboard aggregates.
"""
from datetime import datetime, timezone, date


def utcnow() -> datetime:
    """
    Get current UTC datetime with timezone info.

    Returns:
        datetime: Current datetime in UTC with tzinfo set to timezone.utc

    Note:
        Always use this function instead of datetime.now() to ensure
        timezone-aware timestamps across the application.
    """
    return datetime.now(timezone.utc)


def today_utc() -> date:
    """Current calendar date in UTC."""
    return utcnow().date()


def month_key(d: date) -> str:
    """Format a date as its calendar month key (YYYY-MM)."""
    return f"{d.year:04d}-{d.month:02d}"


def parse_month_key(v: str) -> date:
    """
    Parse a YYYY-MM month key into the first day of that month.

    Raises:
        ValueError: If the string is not a valid month key
    """
    try:
        year_str, month_str = v.split("-")
        return date(int(year_str), int(month_str), 1)
    except (ValueError, AttributeError) as e:
        raise ValueError(f"Month must be in YYYY-MM format, got {v!r}. Error: {e}")


def shift_month(d: date, months: int) -> date:
    """
    Return the first day of the month that is `months` away from `d`.

    Example:
        >>> shift_month(date(2025, 1, 15), -2)
        datetime.date(2024, 11, 1)
    """
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)
