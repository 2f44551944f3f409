"""Chore Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - ChoreCreate.name: 1-128 chars, stripped, non-empty
    - interval_value: 1-1000 (daily/weekly normalize it to 1 in core)
    - Every mutating request carries expected_version (optimistic concurrency)
    - Responses expose derived fields (state, is_overdue, can_undo) computed at read time

Design Decisions:
    - IntervalType enum from core for interval_type: Pydantic rejects unknown kinds
    - field_validator for side-effect-free transforms (strip) — keeps models pure
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from choretrack.core.assignment import AssignmentResolver
from choretrack.core.chore import Chore, ChoreDraft, MemberProfile
from choretrack.core.domain_types import ChoreState, IntervalType, UserId
from choretrack.core.overdue import HouseholdChoreStats, is_overdue


class ChoreCreate(BaseModel):
    """Chore creation — interval spec plus optional assignee and due override."""
    name: str = Field(min_length=1, max_length=128)
    description: str = Field("", max_length=2048)
    interval_type: IntervalType
    interval_value: int = Field(1, ge=1, le=1000)
    assigned_to: str | None = Field(None, max_length=128)
    room_id: str | None = Field(None, max_length=128)
    due_at: datetime | None = None
    created_by: str = Field(min_length=1, max_length=128)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    def to_draft(self) -> ChoreDraft:
        return ChoreDraft(
            name=self.name,
            description=self.description,
            interval_type=self.interval_type,
            interval_value=self.interval_value,
            assigned_to=UserId(self.assigned_to) if self.assigned_to else None,
            room_id=self.room_id or None,
            due_at=self.due_at,
        )


class ChoreUpdate(BaseModel):
    """Partial edit — only fields present in the request body are changed."""
    expected_version: int = Field(ge=1)
    name: str | None = Field(None, min_length=1, max_length=128)
    description: str | None = Field(None, max_length=2048)
    assigned_to: str | None = Field(None, max_length=128)
    room_id: str | None = Field(None, max_length=128)
    interval_type: IntervalType | None = None
    interval_value: int | None = Field(None, ge=1, le=1000)
    due_at: datetime | None = None

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True)
        data.pop("expected_version", None)
        return data


class TransitionRequest(BaseModel):
    """complete / undo request body."""
    user_id: str = Field(min_length=1, max_length=128)
    expected_version: int = Field(ge=1)


class CompletionResponse(BaseModel):
    completed_at: datetime
    completed_by: str
    previous_due_at: datetime


class ChoreResponse(BaseModel):
    """Chore as shown to clients, with derived state at response time."""
    id: UUID
    household_id: UUID
    name: str
    description: str
    interval_type: IntervalType
    interval_value: int
    due_at: datetime
    assigned_to: str | None
    room_id: str | None = None
    assignee_label: str | None = None
    last_completion: CompletionResponse | None
    state: ChoreState
    can_undo: bool
    is_overdue: bool
    version: int
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MemberProfileResponse(BaseModel):
    user_id: str | None
    display_name: str
    role: str | None
    is_member: bool


class HouseholdStatsResponse(BaseModel):
    household_id: UUID
    total: int
    overdue: int
    due_today: int


class ScheduleResponse(BaseModel):
    chore_id: UUID
    due_at: datetime
    upcoming: list[datetime]


def chore_to_response(
    chore: Chore, now: datetime, resolver: AssignmentResolver | None = None,
) -> ChoreResponse:
    record = chore.last_completion
    return ChoreResponse(
        id=chore.id,
        household_id=chore.household_id,
        name=chore.name,
        description=chore.description,
        interval_type=chore.interval_type,
        interval_value=chore.interval_value,
        due_at=chore.due_at,
        assigned_to=chore.assigned_to,
        room_id=chore.room_id,
        assignee_label=resolver.label_for(chore.assigned_to) if resolver else None,
        last_completion=CompletionResponse(
            completed_at=record.completed_at,
            completed_by=record.completed_by,
            previous_due_at=record.previous_due_at,
        ) if record else None,
        state=chore.state,
        can_undo=chore.can_undo,
        is_overdue=is_overdue(chore, now),
        version=chore.version,
        created_by=chore.created_by,
        created_at=chore.created_at,
        updated_at=chore.updated_at,
    )


def profile_to_response(profile: MemberProfile) -> MemberProfileResponse:
    return MemberProfileResponse(
        user_id=profile.user_id,
        display_name=profile.display_name,
        role=profile.role.value if profile.role else None,
        is_member=profile.is_member,
    )


def stats_to_response(
    household_id: UUID, stats: HouseholdChoreStats,
) -> HouseholdStatsResponse:
    return HouseholdStatsResponse(
        household_id=household_id,
        total=stats.total,
        overdue=stats.overdue,
        due_today=stats.due_today,
    )
