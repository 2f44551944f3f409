"""Overdue Classifier — strict comparison and household counters.

Tests cover:
    - now > due_at is overdue; equality is not
    - Overdue ignores completion state
    - household_stats totals, overdue and due-today buckets
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

from choretrack.core.domain_types import ChoreId, HouseholdId
from choretrack.core.overdue import HouseholdChoreStats, household_stats, is_overdue

UTC = timezone.utc


def test_past_due_is_overdue(make_chore, now):
    chore = make_chore(due_at=now - timedelta(minutes=1))
    assert is_overdue(chore, now)


def test_due_exactly_now_is_not_overdue(make_chore, now):
    assert not is_overdue(make_chore(due_at=now), now)


def test_future_due_is_not_overdue(make_chore, now):
    assert not is_overdue(make_chore(due_at=now + timedelta(days=1)), now)


def test_completion_record_does_not_affect_overdue(make_chore, completion, now):
    chore = make_chore(due_at=now - timedelta(days=2), last_completion=completion)
    assert is_overdue(chore, now)


def test_household_stats_counts_buckets(make_chore, completion, now):
    home = HouseholdId(UUID("10000000-0000-0000-0000-000000000001"))
    cabin = HouseholdId(UUID("20000000-0000-0000-0000-000000000002"))
    chores = [
        make_chore(id=ChoreId(UUID(int=1)), household_id=home, due_at=now - timedelta(hours=2)),
        make_chore(id=ChoreId(UUID(int=2)), household_id=home, due_at=now + timedelta(hours=3)),
        make_chore(
            id=ChoreId(UUID(int=3)), household_id=home,
            due_at=now + timedelta(hours=5), last_completion=completion,
        ),
        make_chore(id=ChoreId(UUID(int=4)), household_id=cabin, due_at=now + timedelta(days=3)),
    ]
    stats = household_stats(chores, now)
    # 07:00 overdue and due today; 12:00 due today; 14:00 completed, not counted
    assert stats[home] == HouseholdChoreStats(total=3, overdue=1, due_today=2)
    assert stats[cabin] == HouseholdChoreStats(total=1, overdue=0, due_today=0)


def test_household_stats_due_today_uses_utc_day(make_chore):
    now = datetime(2026, 3, 10, 23, 0, tzinfo=UTC)
    chores = [
        make_chore(id=ChoreId(UUID(int=1)), due_at=datetime(2026, 3, 10, 23, 59, tzinfo=UTC)),
        make_chore(id=ChoreId(UUID(int=2)), due_at=datetime(2026, 3, 11, 0, 0, tzinfo=UTC)),
    ]
    stats = household_stats(chores, now)
    assert next(iter(stats.values())).due_today == 1


def test_household_stats_empty_input():
    assert household_stats([], datetime(2026, 1, 1, tzinfo=UTC)) == {}
