"""Chore Schemas — request validation and response conversion.

Tests cover:
    - ChoreCreate strips names, rejects blanks and out-of-range intervals
    - ChoreUpdate.changes() only reports fields present in the body
    - chore_to_response derives state, can_undo, is_overdue and labels
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from choretrack.core.assignment import AssignmentResolver
from choretrack.core.chore import Chore, CompletionRecord
from choretrack.core.domain_types import (
    ChoreId, HouseholdId, IntervalType, UserId, Version,
)
from choretrack.schemas.chore import ChoreCreate, ChoreUpdate, chore_to_response

NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


def test_create_strips_name_and_builds_draft():
    body = ChoreCreate(name="  Dust shelves ", interval_type="monthly", interval_value=2, created_by="u-1")
    draft = body.to_draft()
    assert draft.name == "Dust shelves"
    assert draft.interval_type is IntervalType.MONTHLY
    assert draft.assigned_to is None


def test_create_rejects_whitespace_name():
    with pytest.raises(ValidationError):
        ChoreCreate(name="   ", interval_type="daily", created_by="u-1")


@pytest.mark.parametrize("value", [0, 1001])
def test_create_rejects_interval_out_of_range(value):
    with pytest.raises(ValidationError):
        ChoreCreate(name="Mop", interval_type="custom", interval_value=value, created_by="u-1")


def test_update_changes_only_sent_fields():
    body = ChoreUpdate.model_validate({"expected_version": 3, "assigned_to": None})
    assert body.changes() == {"assigned_to": None}


def test_response_derived_fields():
    chore = Chore(
        id=ChoreId(uuid4()),
        household_id=HouseholdId(uuid4()),
        name="Bins",
        interval_type=IntervalType.WEEKLY,
        interval_value=1,
        due_at=NOW - timedelta(hours=1),
        version=Version(4),
        assigned_to=UserId("u-gone"),
        last_completion=CompletionRecord(NOW, UserId("u-1"), NOW - timedelta(days=7)),
    )
    res = chore_to_response(chore, NOW, AssignmentResolver([]))
    assert res.state == "completed"
    assert res.can_undo is True
    assert res.is_overdue is True
    assert res.assignee_label == "Former member"
    assert res.last_completion.completed_by == "u-1"
