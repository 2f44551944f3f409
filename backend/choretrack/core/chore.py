"""Chore Records — immutable domain records passed between core, services and store.

Invariants:
    - Chore.due_at is always a timezone-aware instant (never None)
    - Chore.interval_value >= 1
    - Chore.last_completion present iff an undo is possible (single record, never a stack)
    - Records are frozen: every transition produces a new Chore
    - room_id None means the chore is not filed under a room

Design Decisions:
    - Frozen dataclasses over ORM objects: core never sees sessions or lazy loads
    - ChoreMutation describes a write, it does not perform it — the store applies it
      under the version guard
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from choretrack.core.domain_types import (
    ChoreId, ChoreState, HouseholdId, HouseholdRole, IntervalType, UserId, Version,
)


@dataclass(frozen=True)
class CompletionRecord:
    """The single retained undo state for a chore's most recent completion."""
    completed_at: datetime
    completed_by: UserId
    previous_due_at: datetime


@dataclass(frozen=True)
class Chore:
    """A recurring household task with a computed due instant."""
    id: ChoreId
    household_id: HouseholdId
    name: str
    interval_type: IntervalType
    interval_value: int
    due_at: datetime
    version: Version
    description: str = ""
    assigned_to: UserId | None = None
    room_id: str | None = None
    last_completion: CompletionRecord | None = None
    created_by: UserId | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def state(self) -> ChoreState:
        if self.last_completion is not None:
            return ChoreState.COMPLETED
        return ChoreState.PENDING

    @property
    def can_undo(self) -> bool:
        return self.last_completion is not None


@dataclass(frozen=True)
class ChoreDraft:
    """Creation-flow input, validated by core.creation before any write."""
    name: str
    interval_type: IntervalType | str
    interval_value: int = 1
    description: str = ""
    assigned_to: UserId | None = None
    room_id: str | None = None
    due_at: datetime | None = None


class MutationKind(str, Enum):
    COMPLETE = "complete"
    UNDO = "undo"
    EDIT = "edit"


@dataclass(frozen=True)
class ChoreMutation:
    """A version-guarded write: due_at and completion change together or not at all.

    due_at None means "unchanged". touches_completion says whether
    last_completion is replaced by ``completion`` (which may be None to clear it).
    details holds edit-only fields (name, description, assigned_to, room_id,
    interval).
    """
    kind: MutationKind
    due_at: datetime | None = None
    completion: CompletionRecord | None = None
    touches_completion: bool = False
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class HouseholdMember:
    """Membership row — read-only from the core's perspective."""
    user_id: UserId
    household_id: HouseholdId
    role: HouseholdRole


@dataclass(frozen=True)
class MemberProfile:
    """Display view of an assignee. user_id None means "anyone"."""
    user_id: UserId | None
    display_name: str
    role: HouseholdRole | None = None
    is_member: bool = True
