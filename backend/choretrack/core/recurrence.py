"""Recurrence Calculator — next due instant from an interval and a reference instant.

Invariants:
    - next_due_at is PURE and strictly greater than its reference instant
    - Month/year arithmetic clamps to the last valid day of the target month
      (Jan 31 + 1 month -> Feb 29 in a leap year, Feb 29 + 1 year -> Feb 28)
    - Time of day and tzinfo of the reference instant are preserved
    - interval_value < 1 never reaches the arithmetic (ChoreValidationError)
    - A due date past the representable calendar is a ChoreValidationError, never
      a bare ValueError; previews simply stop there

Design Decisions:
    - Schedule restarts from the ACTUAL completion instant, never from the previous
      due_at. This is a policy choice: a late completion does not pull the next
      due date earlier, and repeated late completions never build a backlog.
    - Exhaustive match with assert_never: a new IntervalType member fails type
      checking here first
"""

import calendar
from datetime import datetime, timedelta
from typing import assert_never

from choretrack.core.domain_types import (
    IntervalType, MAX_INTERVAL_VALUE, MIN_INTERVAL_VALUE,
)
from choretrack.core.errors import ChoreValidationError


def parse_interval_type(raw: IntervalType | str) -> IntervalType:
    """Coerce a raw string into the closed IntervalType set."""
    if isinstance(raw, IntervalType):
        return raw
    try:
        return IntervalType(raw)
    except ValueError:
        allowed = ", ".join(t.value for t in IntervalType)
        raise ChoreValidationError(
            f"interval_type must be one of: {allowed} (got {raw!r})",
            field="interval_type",
        ) from None


def validate_interval(
    interval_type: IntervalType | str, interval_value: int,
) -> tuple[IntervalType, int]:
    """Validate an interval spec and normalize it.

    daily/weekly ignore their value, so it is normalized to 1 once the raw
    value has passed the >= 1 check.
    """
    kind = parse_interval_type(interval_type)
    if isinstance(interval_value, bool) or not isinstance(interval_value, int):
        raise ChoreValidationError(
            "interval_value must be an integer", field="interval_value",
        )
    if interval_value < MIN_INTERVAL_VALUE:
        raise ChoreValidationError(
            f"interval_value must be >= {MIN_INTERVAL_VALUE} (got {interval_value})",
            field="interval_value",
        )
    if interval_value > MAX_INTERVAL_VALUE:
        raise ChoreValidationError(
            f"interval_value must be <= {MAX_INTERVAL_VALUE} (got {interval_value})",
            field="interval_value",
        )
    if not kind.uses_value:
        return kind, 1
    return kind, interval_value


def add_months(base: datetime, months: int) -> datetime:
    month = base.month - 1 + months
    year = base.year + month // 12
    month = month % 12 + 1
    day = min(base.day, calendar.monthrange(year, month)[1])
    return base.replace(year=year, month=month, day=day)


def add_years(base: datetime, years: int) -> datetime:
    year = base.year + years
    day = min(base.day, calendar.monthrange(year, base.month)[1])
    return base.replace(year=year, day=day)


def _require_positive(interval_value: int) -> None:
    if interval_value < MIN_INTERVAL_VALUE:
        raise ChoreValidationError(
            f"interval_value must be >= {MIN_INTERVAL_VALUE} (got {interval_value})",
            field="interval_value",
        )


def next_due_at(
    interval_type: IntervalType, interval_value: int, completed_at: datetime,
) -> datetime:
    """Next due instant, counted from the completion instant."""
    _require_positive(interval_value)
    try:
        return _advance(interval_type, interval_value, completed_at)
    except (ValueError, OverflowError):
        raise ChoreValidationError(
            f"next due date after {completed_at.isoformat()} is out of range "
            f"for a {interval_type.value} interval of {interval_value}",
            field="interval_value",
        ) from None


def _advance(
    interval_type: IntervalType, interval_value: int, completed_at: datetime,
) -> datetime:
    match interval_type:
        case IntervalType.DAILY:
            return completed_at + timedelta(days=1)
        case IntervalType.WEEKLY:
            return completed_at + timedelta(days=7)
        case IntervalType.MONTHLY:
            return add_months(completed_at, interval_value)
        case IntervalType.YEARLY:
            return add_years(completed_at, interval_value)
        case IntervalType.CUSTOM:
            return completed_at + timedelta(days=interval_value)
        case _:
            assert_never(interval_type)


def upcoming_due_dates(
    start: datetime, interval_type: IntervalType, interval_value: int, count: int,
) -> list[datetime]:
    """Preview the next ``count`` due instants if each is completed on time.

    The preview stops early at the last date the calendar can represent.
    """
    _require_positive(interval_value)
    dates: list[datetime] = []
    current = start
    for _ in range(max(count, 0)):
        try:
            current = _advance(interval_type, interval_value, current)
        except (ValueError, OverflowError):
            break
        dates.append(current)
    return dates
