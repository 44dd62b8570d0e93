"""
Test datetime utilities.
All test is independent of the others, so help use pytest features.
"""
from datetime import date, datetime, timezone

import pytest

from finovo.app.utils.datetime_utils import month_key, parse_month_key, shift_month, today_utc, utcnow


# ============================================================================
# TESTS: clock
# ============================================================================

def test_utcnow_has_timezone_info():
    result = utcnow()
    assert isinstance(result, datetime)
    assert result.tzinfo == timezone.utc


def test_today_utc_matches_utcnow():
    assert today_utc() in (utcnow().date(), datetime.now(timezone.utc).date())


# ============================================================================
# TESTS: month helpers
# ============================================================================

def test_month_key_is_zero_padded():
    assert month_key(date(2025, 3, 31)) == "2025-03"


def test_parse_month_key_returns_first_day():
    assert parse_month_key("2024-11") == date(2024, 11, 1)


@pytest.mark.parametrize("value", ["2024", "2024-13", "abcd-ef", "2024-11-01"])
def test_parse_month_key_invalid(value):
    with pytest.raises(ValueError, match="YYYY-MM"):
        parse_month_key(value)


@pytest.mark.parametrize("start,months,expected", [
    (date(2025, 1, 15), -2, date(2024, 11, 1)),
    (date(2025, 1, 31), 1, date(2025, 2, 1)),
    (date(2024, 12, 10), 1, date(2025, 1, 1)),
    (date(2025, 6, 30), 0, date(2025, 6, 1)),
    (date(2025, 6, 1), -18, date(2023, 12, 1)),
    ])
def test_shift_month(start, months, expected):
    assert shift_month(start, months) == expected
