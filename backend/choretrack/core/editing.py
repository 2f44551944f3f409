"""Chore Editing — field edits under the same version guard as completion.

Invariants:
    - plan_edit is PURE and never touches last_completion: a pending undo record
      survives renames, re-assignment, room moves and interval changes
    - Interval edits do not reschedule; the new interval applies from the next completion
    - An explicit due_at edit must be timezone-aware
    - An edit with no fields is a ChoreValidationError
"""

from typing import Any

from choretrack.core.chore import Chore, ChoreMutation, MutationKind
from choretrack.core.completion import check_version
from choretrack.core.creation import (
    require_aware, validate_description, validate_name,
)
from choretrack.core.errors import ChoreValidationError
from choretrack.core.recurrence import validate_interval

EDITABLE_FIELDS: frozenset[str] = frozenset({
    "name", "description", "assigned_to", "room_id",
    "interval_type", "interval_value", "due_at",
})


def plan_edit(
    chore: Chore, changes: dict[str, Any], expected_version: int,
) -> ChoreMutation:
    """Validate ``changes`` against the current chore and build the mutation."""
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ChoreValidationError(
            f"fields cannot be edited: {', '.join(sorted(unknown))}",
            field=sorted(unknown)[0],
        )
    if not changes:
        raise ChoreValidationError("no fields provided for update", field="body")
    check_version(chore, expected_version)

    details: dict[str, Any] = {}
    if "name" in changes:
        details["name"] = validate_name(changes["name"])
    if "description" in changes:
        details["description"] = validate_description(changes["description"])
    if "assigned_to" in changes:
        details["assigned_to"] = changes["assigned_to"] or None
    if "room_id" in changes:
        details["room_id"] = changes["room_id"] or None
    if "interval_type" in changes or "interval_value" in changes:
        interval_type, interval_value = validate_interval(
            changes.get("interval_type", chore.interval_type),
            changes.get("interval_value", chore.interval_value),
        )
        details["interval_type"] = interval_type
        details["interval_value"] = interval_value

    due_at = None
    if "due_at" in changes:
        if changes["due_at"] is None:
            raise ChoreValidationError("due_at cannot be cleared", field="due_at")
        due_at = require_aware(changes["due_at"], "due_at")

    return ChoreMutation(
        kind=MutationKind.EDIT,
        due_at=due_at,
        touches_completion=False,
        details=details,
    )
