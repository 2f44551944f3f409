"""Chore Ordering — deterministic display order for a chore snapshot.

Invariants:
    - Overdue chores sort before all non-overdue chores
    - Within each group: ascending due_at, ties broken by id ascending
    - Input is never mutated; the store is never queried
"""

from datetime import datetime
from typing import Iterable

from choretrack.core.chore import Chore
from choretrack.core.overdue import is_overdue


def display_key(chore: Chore, now: datetime) -> tuple[bool, datetime, str]:
    """Sort key: (not overdue, due_at, id)."""
    return (not is_overdue(chore, now), chore.due_at, str(chore.id))


def order_for_display(chores: Iterable[Chore], now: datetime) -> list[Chore]:
    return sorted(chores, key=lambda c: display_key(c, now))
