"""Completion State Machine — complete/undo transitions with single-level undo.

States:
    PENDING   — no completion record
    COMPLETED — one completion record (the only undoable one)

Transitions:
    complete: PENDING|COMPLETED -> COMPLETED
        record = {now, user, previous due_at}; due_at = next_due_at(..., now).
        A second completion REPLACES the record; completions never stack.
    undo:     COMPLETED -> PENDING
        due_at = record.previous_due_at; record cleared.
        From PENDING -> NotUndoableError (stale client view, not retried),
        reported before any version check so a repeated undo reads as
        "already undone" rather than a conflict.

Invariants:
    - plan_* functions are PURE: they return a ChoreMutation, the store applies it
    - Stale expected_version -> VersionConflictError before any write; the store's
      guarded write remains the authoritative check
    - apply_mutation changes due_at and last_completion in one new record, so no
      reader observes one without the other
"""

import dataclasses
from datetime import datetime

from choretrack.core.chore import (
    Chore, ChoreMutation, CompletionRecord, MutationKind,
)
from choretrack.core.domain_types import UserId, Version
from choretrack.core.errors import NotUndoableError, VersionConflictError
from choretrack.core.recurrence import next_due_at


def check_version(chore: Chore, expected_version: int) -> None:
    if chore.version != expected_version:
        raise VersionConflictError(
            str(chore.id), expected_version, current_version=chore.version,
        )


def plan_complete(
    chore: Chore, user_id: UserId, expected_version: int, now: datetime,
) -> ChoreMutation:
    """Completion mutation. Valid from either state."""
    check_version(chore, expected_version)
    record = CompletionRecord(
        completed_at=now, completed_by=user_id, previous_due_at=chore.due_at,
    )
    return ChoreMutation(
        kind=MutationKind.COMPLETE,
        due_at=next_due_at(chore.interval_type, chore.interval_value, now),
        completion=record,
        touches_completion=True,
    )


def plan_undo(
    chore: Chore, user_id: UserId, expected_version: int,
) -> ChoreMutation:
    """Undo mutation. Only valid while a completion record exists.

    user_id is accepted for auditing symmetry with complete; any household
    member may undo the latest completion.
    """
    if chore.last_completion is None:
        raise NotUndoableError(str(chore.id))
    check_version(chore, expected_version)
    return ChoreMutation(
        kind=MutationKind.UNDO,
        due_at=chore.last_completion.previous_due_at,
        completion=None,
        touches_completion=True,
    )


def apply_mutation(chore: Chore, mutation: ChoreMutation, now: datetime) -> Chore:
    """Return the chore as the store will hold it after an accepted write."""
    changes: dict = dict(mutation.details)
    if mutation.due_at is not None:
        changes["due_at"] = mutation.due_at
    if mutation.touches_completion:
        changes["last_completion"] = mutation.completion
    changes["version"] = Version(chore.version + 1)
    changes["updated_at"] = now
    return dataclasses.replace(chore, **changes)
