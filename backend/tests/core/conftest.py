"""Core test fixtures — Chore factory with fixed ids and instants."""

from datetime import datetime, timezone
from uuid import UUID

import pytest

from choretrack.core.chore import Chore, CompletionRecord
from choretrack.core.domain_types import (
    ChoreId, HouseholdId, IntervalType, UserId, Version,
)


@pytest.fixture
def now():
    return datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_chore():
    """Build a Chore; any field can be overridden by keyword."""
    def _make(**overrides) -> Chore:
        fields = {
            "id": ChoreId(UUID("00000000-0000-0000-0000-000000000001")),
            "household_id": HouseholdId(UUID("10000000-0000-0000-0000-000000000001")),
            "name": "Water plants",
            "interval_type": IntervalType.WEEKLY,
            "interval_value": 1,
            "due_at": datetime(2026, 3, 12, 9, 0, tzinfo=timezone.utc),
            "version": Version(1),
        }
        fields.update(overrides)
        return Chore(**fields)
    return _make


@pytest.fixture
def completion():
    return CompletionRecord(
        completed_at=datetime(2026, 3, 9, 18, 30, tzinfo=timezone.utc),
        completed_by=UserId("alice"),
        previous_due_at=datetime(2026, 3, 8, 9, 0, tzinfo=timezone.utc),
    )
