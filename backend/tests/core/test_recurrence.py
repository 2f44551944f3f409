"""Recurrence — next due instant per interval kind, clamping, and validation.

Tests cover:
    - daily/weekly/custom add whole days; monthly/yearly use calendar arithmetic
    - Month-end and leap-day clamping
    - Result is strictly after the reference instant; time of day and tz preserved
    - interval validation (range, type, normalization)
    - upcoming_due_dates preview chains on-time completions
    - Dates past year 9999 are validation errors; previews stop there
"""

from datetime import datetime, timedelta, timezone

import pytest

from choretrack.core.domain_types import IntervalType
from choretrack.core.errors import ChoreValidationError
from choretrack.core.recurrence import (
    add_months, add_years, next_due_at, parse_interval_type,
    upcoming_due_dates, validate_interval,
)

UTC = timezone.utc


# ─── next_due_at ─────────────────────────────────────────────────

def test_daily_adds_one_day():
    base = datetime(2026, 3, 10, 21, 15, tzinfo=UTC)
    assert next_due_at(IntervalType.DAILY, 1, base) == base + timedelta(days=1)


def test_weekly_adds_seven_days():
    base = datetime(2026, 3, 10, 8, 0, tzinfo=UTC)
    assert next_due_at(IntervalType.WEEKLY, 1, base) == datetime(2026, 3, 17, 8, 0, tzinfo=UTC)


def test_daily_and_weekly_ignore_value():
    base = datetime(2026, 3, 10, tzinfo=UTC)
    assert next_due_at(IntervalType.DAILY, 5, base) == base + timedelta(days=1)
    assert next_due_at(IntervalType.WEEKLY, 3, base) == base + timedelta(days=7)


def test_custom_adds_value_days():
    base = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)
    assert next_due_at(IntervalType.CUSTOM, 10, base) == datetime(2026, 3, 20, 12, 0, tzinfo=UTC)


def test_monthly_adds_calendar_months():
    base = datetime(2026, 3, 15, 7, 30, tzinfo=UTC)
    assert next_due_at(IntervalType.MONTHLY, 2, base) == datetime(2026, 5, 15, 7, 30, tzinfo=UTC)


def test_monthly_crosses_year_boundary():
    base = datetime(2026, 11, 5, tzinfo=UTC)
    assert next_due_at(IntervalType.MONTHLY, 3, base) == datetime(2027, 2, 5, tzinfo=UTC)


def test_monthly_clamps_to_month_end():
    assert add_months(datetime(2026, 1, 31, tzinfo=UTC), 1) == datetime(2026, 2, 28, tzinfo=UTC)
    assert add_months(datetime(2028, 1, 31, tzinfo=UTC), 1) == datetime(2028, 2, 29, tzinfo=UTC)
    assert add_months(datetime(2026, 3, 31, tzinfo=UTC), 1) == datetime(2026, 4, 30, tzinfo=UTC)


def test_yearly_clamps_leap_day():
    base = datetime(2028, 2, 29, 10, 0, tzinfo=UTC)
    assert next_due_at(IntervalType.YEARLY, 1, base) == datetime(2029, 2, 28, 10, 0, tzinfo=UTC)
    assert add_years(base, 4) == datetime(2032, 2, 29, 10, 0, tzinfo=UTC)


def test_result_is_strictly_after_reference():
    base = datetime(2026, 1, 31, 23, 59, tzinfo=UTC)
    for kind in IntervalType:
        assert next_due_at(kind, 1, base) > base


def test_preserves_timezone_and_time_of_day():
    tz = timezone(timedelta(hours=-5))
    base = datetime(2026, 6, 1, 18, 45, tzinfo=tz)
    result = next_due_at(IntervalType.MONTHLY, 1, base)
    assert result.tzinfo is tz
    assert (result.hour, result.minute) == (18, 45)


def test_value_below_one_rejected():
    with pytest.raises(ChoreValidationError) as exc:
        next_due_at(IntervalType.CUSTOM, 0, datetime(2026, 1, 1, tzinfo=UTC))
    assert exc.value.field == "interval_value"


# ─── validation ──────────────────────────────────────────────────

def test_parse_interval_type_accepts_strings():
    assert parse_interval_type("yearly") is IntervalType.YEARLY
    assert parse_interval_type(IntervalType.DAILY) is IntervalType.DAILY


def test_parse_interval_type_rejects_unknown():
    with pytest.raises(ChoreValidationError) as exc:
        parse_interval_type("fortnightly")
    assert exc.value.field == "interval_type"
    assert exc.value.code == "VALIDATION_ERROR"


def test_validate_interval_normalizes_daily_weekly():
    assert validate_interval("daily", 4) == (IntervalType.DAILY, 1)
    assert validate_interval(IntervalType.WEEKLY, 2) == (IntervalType.WEEKLY, 1)
    assert validate_interval("custom", 4) == (IntervalType.CUSTOM, 4)


@pytest.mark.parametrize("value", [0, -3, 1001, True, 2.5, "3"])
def test_validate_interval_rejects_bad_values(value):
    with pytest.raises(ChoreValidationError):
        validate_interval(IntervalType.CUSTOM, value)


def test_validate_interval_rejects_zero_even_for_daily():
    with pytest.raises(ChoreValidationError):
        validate_interval(IntervalType.DAILY, 0)


# ─── preview ─────────────────────────────────────────────────────

def test_upcoming_due_dates_chains_occurrences():
    start = datetime(2026, 1, 31, tzinfo=UTC)
    dates = upcoming_due_dates(start, IntervalType.MONTHLY, 1, 3)
    assert dates == [
        datetime(2026, 2, 28, tzinfo=UTC),
        datetime(2026, 3, 28, tzinfo=UTC),
        datetime(2026, 4, 28, tzinfo=UTC),
    ]


def test_upcoming_due_dates_zero_count_is_empty():
    assert upcoming_due_dates(datetime(2026, 1, 1, tzinfo=UTC), IntervalType.DAILY, 1, 0) == []


# ─── calendar limits ─────────────────────────────────────────────

def test_next_due_past_year_9999_is_validation_error():
    base = datetime(9500, 6, 1, tzinfo=UTC)
    with pytest.raises(ChoreValidationError) as exc:
        next_due_at(IntervalType.YEARLY, 1000, base)
    assert exc.value.field == "interval_value"


def test_custom_days_past_max_date_is_validation_error():
    with pytest.raises(ChoreValidationError):
        next_due_at(IntervalType.CUSTOM, 1000, datetime(9999, 12, 1, tzinfo=UTC))


def test_upcoming_due_dates_stops_at_calendar_end():
    start = datetime(3026, 3, 10, tzinfo=UTC)
    dates = upcoming_due_dates(start, IntervalType.YEARLY, 1000, 10)
    assert [d.year for d in dates] == [4026, 5026, 6026, 7026, 8026, 9026]


def test_upcoming_due_dates_rejects_zero_value():
    with pytest.raises(ChoreValidationError):
        upcoming_due_dates(datetime(2026, 1, 1, tzinfo=UTC), IntervalType.CUSTOM, 0, 3)
