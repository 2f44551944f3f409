"""Chore Ordering — overdue first, then due_at, then id.

Tests cover:
    - Overdue chores precede non-overdue regardless of due_at
    - Ties on due_at broken by id ascending
    - Input list is not mutated
"""

from datetime import timedelta
from uuid import UUID

from choretrack.core.domain_types import ChoreId
from choretrack.core.ordering import display_key, order_for_display


def _ids(chores):
    return [c.id.int for c in chores]


def test_overdue_chores_come_first(make_chore, now):
    soon = make_chore(id=ChoreId(UUID(int=1)), due_at=now + timedelta(hours=1))
    late = make_chore(id=ChoreId(UUID(int=2)), due_at=now - timedelta(days=3))
    later = make_chore(id=ChoreId(UUID(int=3)), due_at=now - timedelta(hours=1))
    assert _ids(order_for_display([soon, later, late], now)) == [2, 3, 1]


def test_non_overdue_sorted_by_due_at(make_chore, now):
    a = make_chore(id=ChoreId(UUID(int=1)), due_at=now + timedelta(days=5))
    b = make_chore(id=ChoreId(UUID(int=2)), due_at=now + timedelta(days=1))
    assert _ids(order_for_display([a, b], now)) == [2, 1]


def test_due_at_ties_broken_by_id(make_chore, now):
    due = now + timedelta(days=1)
    a = make_chore(id=ChoreId(UUID(int=9)), due_at=due)
    b = make_chore(id=ChoreId(UUID(int=4)), due_at=due)
    assert _ids(order_for_display([a, b], now)) == [4, 9]


def test_due_exactly_now_sorts_with_non_overdue(make_chore, now):
    current = make_chore(id=ChoreId(UUID(int=1)), due_at=now)
    overdue = make_chore(id=ChoreId(UUID(int=2)), due_at=now + timedelta(days=2) - timedelta(days=3))
    assert display_key(current, now)[0] is True
    assert _ids(order_for_display([current, overdue], now)) == [2, 1]


def test_input_not_mutated(make_chore, now):
    a = make_chore(id=ChoreId(UUID(int=1)), due_at=now + timedelta(days=2))
    b = make_chore(id=ChoreId(UUID(int=2)), due_at=now - timedelta(days=2))
    chores = [a, b]
    order_for_display(chores, now)
    assert chores == [a, b]
