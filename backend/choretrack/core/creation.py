"""Chore Creation — validates a draft and seeds its first due instant.

Invariants:
    - build_chore is PURE: id, clock and creator come from the caller
    - Initial due_at = next_due_at(type, value, created_at) unless the draft
      supplies an explicit due_at override
    - New chores start at version 1 with no completion record
"""

from datetime import datetime

from choretrack.core.chore import Chore, ChoreDraft
from choretrack.core.domain_types import (
    ChoreId, HouseholdId, INITIAL_VERSION, UserId,
)
from choretrack.core.errors import ChoreValidationError
from choretrack.core.recurrence import next_due_at, validate_interval

MAX_NAME_LENGTH: int = 128
MAX_DESCRIPTION_LENGTH: int = 2048


def validate_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ChoreValidationError("name cannot be empty", field="name")
    if len(cleaned) > MAX_NAME_LENGTH:
        raise ChoreValidationError(
            f"name must be at most {MAX_NAME_LENGTH} characters", field="name",
        )
    return cleaned


def validate_description(description: str | None) -> str:
    cleaned = (description or "").strip()
    if len(cleaned) > MAX_DESCRIPTION_LENGTH:
        raise ChoreValidationError(
            f"description must be at most {MAX_DESCRIPTION_LENGTH} characters",
            field="description",
        )
    return cleaned


def require_aware(value: datetime, field: str) -> datetime:
    if value.tzinfo is None or value.utcoffset() is None:
        raise ChoreValidationError(
            f"{field} must include a timezone offset", field=field,
        )
    return value


def build_chore(
    draft: ChoreDraft,
    chore_id: ChoreId,
    household_id: HouseholdId,
    created_by: UserId,
    now: datetime,
) -> Chore:
    """Validate the draft and return the chore to insert."""
    name = validate_name(draft.name)
    description = validate_description(draft.description)
    interval_type, interval_value = validate_interval(
        draft.interval_type, draft.interval_value,
    )
    if draft.due_at is not None:
        due_at = require_aware(draft.due_at, "due_at")
    else:
        due_at = next_due_at(interval_type, interval_value, now)
    return Chore(
        id=chore_id,
        household_id=household_id,
        name=name,
        description=description,
        interval_type=interval_type,
        interval_value=interval_value,
        due_at=due_at,
        version=INITIAL_VERSION,
        assigned_to=draft.assigned_to or None,
        room_id=draft.room_id or None,
        last_completion=None,
        created_by=created_by,
        created_at=now,
        updated_at=now,
    )
