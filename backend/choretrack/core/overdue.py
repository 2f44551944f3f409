"""Overdue Classifier — derived overdue status and per-household counters.

Invariants:
    - is_overdue(chore, now) == (now > chore.due_at); equal instants are NOT overdue
    - Overdue is never stored; a restored due_at after undo is judged like any other
    - household_stats is pure and counts every chore exactly once
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable

from choretrack.core.chore import Chore
from choretrack.core.domain_types import ChoreState, HouseholdId


def is_overdue(chore: Chore, now: datetime) -> bool:
    return now > chore.due_at


@dataclass
class HouseholdChoreStats:
    """Dashboard counters for one household."""
    total: int = 0
    overdue: int = 0
    due_today: int = 0


def _utc_day_bounds(now: datetime) -> tuple[datetime, datetime]:
    day = now.astimezone(timezone.utc)
    start = day.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)


def household_stats(
    chores: Iterable[Chore], now: datetime,
) -> dict[HouseholdId, HouseholdChoreStats]:
    """Total / overdue / due-today counts keyed by household.

    due_today covers the UTC calendar day containing ``now`` and skips chores
    whose latest completion is still undoable (already handled today).
    """
    start, end = _utc_day_bounds(now)
    stats: dict[HouseholdId, HouseholdChoreStats] = {}
    for chore in chores:
        bucket = stats.setdefault(chore.household_id, HouseholdChoreStats())
        bucket.total += 1
        if is_overdue(chore, now):
            bucket.overdue += 1
        if start <= chore.due_at < end and chore.state == ChoreState.PENDING:
            bucket.due_today += 1
    return stats
