"""SQL Store — SQLAlchemy implementations of ChoreStore and MemberDirectory.

Invariants:
    - write() is ONE guarded statement:
      UPDATE chores SET ..., version = version + 1 WHERE id = :id AND version = :expected
      0 rows -> ChoreNotFoundError if the row is gone, else VersionConflictError
    - due_at, the completion columns and version change in the same UPDATE
    - Conflicts are never retried here
    - Every accepted write/create/delete publishes a fresh household Snapshot
    - Timestamps read back without tzinfo (SQLite) are normalized to UTC

Design Decisions:
    - Session per operation via DatabaseSessionManager.session(): the read that
      produced expected_version is never held open across the write
    - Snapshot refresh failures are published as Snapshot.error, not raised:
      the write itself was already accepted
"""

import logging
from datetime import datetime, timezone
from typing import AsyncContextManager, Callable

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from choretrack.core.chore import (
    Chore, ChoreMutation, CompletionRecord, HouseholdMember,
)
from choretrack.core.domain_types import (
    ChoreId, HouseholdId, HouseholdRole, IntervalType, UserId, Version,
)
from choretrack.core.errors import (
    ChoreNotFoundError, ChoreTrackError, VersionConflictError,
)
from choretrack.core.repository_protocols import Snapshot
from choretrack.infrastructure.snapshot_feed import FeedSubscription, SnapshotFeed
from choretrack.models.chore import ChoreRow
from choretrack.models.household_member import HouseholdMemberRow
from choretrack.models.user_profile import UserProfileRow

logger = logging.getLogger(__name__)

SessionScope = Callable[[], AsyncContextManager[AsyncSession]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _aware(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def row_to_chore(row: ChoreRow) -> Chore:
    completion = None
    if row.completed_at is not None:
        completion = CompletionRecord(
            completed_at=_aware(row.completed_at),
            completed_by=UserId(row.completed_by or ""),
            previous_due_at=_aware(row.previous_due_at),
        )
    return Chore(
        id=ChoreId(row.id),
        household_id=HouseholdId(row.household_id),
        name=row.name,
        description=row.description or "",
        interval_type=IntervalType(row.interval_type),
        interval_value=row.interval_value,
        due_at=_aware(row.due_at),
        version=Version(row.version),
        assigned_to=UserId(row.assigned_to) if row.assigned_to else None,
        room_id=row.room_id,
        last_completion=completion,
        created_by=UserId(row.created_by) if row.created_by else None,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def chore_to_row(chore: Chore) -> ChoreRow:
    record = chore.last_completion
    return ChoreRow(
        id=chore.id,
        household_id=chore.household_id,
        name=chore.name,
        description=chore.description,
        interval_type=chore.interval_type.value,
        interval_value=chore.interval_value,
        due_at=chore.due_at,
        assigned_to=chore.assigned_to,
        room_id=chore.room_id,
        completed_at=record.completed_at if record else None,
        completed_by=record.completed_by if record else None,
        previous_due_at=record.previous_due_at if record else None,
        version=chore.version,
        created_by=chore.created_by,
        created_at=chore.created_at or _utcnow(),
        updated_at=chore.updated_at or _utcnow(),
    )


def mutation_values(mutation: ChoreMutation, now: datetime) -> dict:
    """Column values for the guarded UPDATE (version bump added by the caller)."""
    values: dict = {"updated_at": now}
    for key, value in mutation.details.items():
        values[key] = value.value if isinstance(value, IntervalType) else value
    if mutation.due_at is not None:
        values["due_at"] = mutation.due_at
    if mutation.touches_completion:
        record = mutation.completion
        values["completed_at"] = record.completed_at if record else None
        values["completed_by"] = record.completed_by if record else None
        values["previous_due_at"] = record.previous_due_at if record else None
    return values


class SqlChoreStore:
    """ChoreStore over SQLAlchemy async sessions, publishing to a SnapshotFeed."""

    def __init__(
        self,
        session_scope: SessionScope,
        feed: SnapshotFeed,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._session_scope = session_scope
        self._feed = feed
        self._clock = clock

    async def get(self, chore_id: ChoreId) -> Chore | None:
        async with self._session_scope() as db:
            row = await db.get(ChoreRow, chore_id)
            return row_to_chore(row) if row else None

    async def list_for_households(
        self, household_ids: list[HouseholdId],
    ) -> list[Chore]:
        if not household_ids:
            return []
        async with self._session_scope() as db:
            result = await db.execute(
                select(ChoreRow)
                .where(ChoreRow.household_id.in_(household_ids))
                .order_by(ChoreRow.due_at.asc(), ChoreRow.id.asc()),
            )
            return [row_to_chore(r) for r in result.scalars().all()]

    async def create(self, chore: Chore) -> Chore:
        async with self._session_scope() as db:
            db.add(chore_to_row(chore))
            await db.commit()
        logger.info(
            "Chore created",
            extra={"chore_id": str(chore.id), "household_id": str(chore.household_id)},
        )
        await self.publish_household(chore.household_id)
        return chore

    async def write(
        self, chore_id: ChoreId, mutation: ChoreMutation, expected_version: int,
    ) -> Version:
        values = mutation_values(mutation, self._clock())
        async with self._session_scope() as db:
            result = await db.execute(
                update(ChoreRow)
                .where(ChoreRow.id == chore_id)
                .where(ChoreRow.version == expected_version)
                .values(version=ChoreRow.version + 1, **values)
                .execution_options(synchronize_session=False),
            )
            if result.rowcount == 0:
                await db.rollback()
                current = await db.scalar(
                    select(ChoreRow.version).where(ChoreRow.id == chore_id),
                )
                if current is None:
                    raise ChoreNotFoundError(str(chore_id))
                raise VersionConflictError(
                    str(chore_id), expected_version, current_version=current,
                )
            await db.commit()
            household_id = await db.scalar(
                select(ChoreRow.household_id).where(ChoreRow.id == chore_id),
            )
        new_version = Version(expected_version + 1)
        logger.info(
            "Chore write accepted",
            extra={
                "chore_id": str(chore_id),
                "expected_version": expected_version,
                "version": new_version,
            },
        )
        if household_id is not None:
            await self.publish_household(HouseholdId(household_id))
        return new_version

    async def delete(self, chore_id: ChoreId) -> None:
        async with self._session_scope() as db:
            household_id = await db.scalar(
                select(ChoreRow.household_id).where(ChoreRow.id == chore_id),
            )
            if household_id is None:
                raise ChoreNotFoundError(str(chore_id))
            await db.execute(delete(ChoreRow).where(ChoreRow.id == chore_id))
            await db.commit()
        logger.info("Chore deleted", extra={"chore_id": str(chore_id)})
        await self.publish_household(HouseholdId(household_id))

    # -- Snapshots -------------------------------------------------------------

    def subscribe(self, household_id: HouseholdId) -> FeedSubscription:
        """Subscribe and schedule the initial snapshot for this subscriber."""
        sub = self._feed.subscribe(household_id)
        self._feed.spawn(self._prime(sub))
        return sub

    async def load_snapshot(self, household_id: HouseholdId) -> Snapshot:
        try:
            chores = await self.list_for_households([household_id])
        except ChoreTrackError as exc:
            logger.warning(
                "Snapshot load failed",
                extra={"household_id": str(household_id), "error_code": exc.code},
            )
            return Snapshot(household_id=household_id, chores=(), error=exc)
        return Snapshot(household_id=household_id, chores=tuple(chores))

    async def publish_household(self, household_id: HouseholdId) -> None:
        if self._feed.subscriber_count(household_id) == 0:
            return
        self._feed.publish(await self.load_snapshot(household_id))

    async def _prime(self, sub: FeedSubscription) -> None:
        snapshot = await self.load_snapshot(sub.household_id)
        sub.deliver(snapshot)


class SqlMemberDirectory:
    """MemberDirectory over the household_members / user_profiles tables."""

    def __init__(self, session_scope: SessionScope):
        self._session_scope = session_scope

    async def resolve_members(
        self, household_id: HouseholdId,
    ) -> list[HouseholdMember]:
        async with self._session_scope() as db:
            result = await db.execute(
                select(HouseholdMemberRow)
                .where(HouseholdMemberRow.household_id == household_id)
                .order_by(HouseholdMemberRow.joined_at.asc()),
            )
            return [
                HouseholdMember(
                    user_id=UserId(r.user_id),
                    household_id=HouseholdId(r.household_id),
                    role=HouseholdRole(r.role),
                )
                for r in result.scalars().all()
            ]

    async def display_names(self, user_ids: list[str]) -> dict[str, str]:
        if not user_ids:
            return {}
        async with self._session_scope() as db:
            result = await db.execute(
                select(UserProfileRow.user_id, UserProfileRow.display_name)
                .where(UserProfileRow.user_id.in_(user_ids)),
            )
            return {user_id: name for user_id, name in result.all()}
