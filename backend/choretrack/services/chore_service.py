"""Chore Service — imperative shell around the pure completion state machine.

Invariants:
    - Every mutation: read chore -> pure plan (core) -> version-guarded store write
    - Validation errors raised before any store write
    - VersionConflictError / NotUndoableError / ChoreNotFoundError surface to the
      caller unchanged; nothing is retried here
    - The clock is injected; core functions never read the wall clock

Design Decisions:
    - Returned Chore is the plan applied locally (apply_mutation) with the version
      the store accepted, so callers do not need a second read
    - Assignees must be current household members at create/edit time
"""

import dataclasses
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable

from choretrack.core.assignment import AssignmentResolver
from choretrack.core.chore import Chore, ChoreDraft, ChoreMutation
from choretrack.core.completion import apply_mutation, plan_complete, plan_undo
from choretrack.core.creation import build_chore
from choretrack.core.domain_types import ChoreId, HouseholdId, UserId
from choretrack.core.editing import plan_edit
from choretrack.core.errors import (
    ChoreNotFoundError, ChoreValidationError, VersionConflictError,
)
from choretrack.core.ordering import order_for_display
from choretrack.core.overdue import HouseholdChoreStats, household_stats
from choretrack.core.recurrence import upcoming_due_dates
from choretrack.core.repository_protocols import (
    ChoreStore, MemberDirectory, Subscription,
)

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChoreService:
    """Chore use cases for one process; stateless apart from its collaborators."""

    def __init__(
        self,
        store: ChoreStore,
        members: MemberDirectory,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.members = members
        self.clock = clock

    # -- Reads -----------------------------------------------------------------

    async def get(self, chore_id: ChoreId) -> Chore:
        chore = await self.store.get(chore_id)
        if chore is None:
            raise ChoreNotFoundError(str(chore_id))
        return chore

    async def list_household(
        self,
        household_id: HouseholdId,
        now: datetime | None = None,
        room_id: str | None = None,
    ) -> list[Chore]:
        """Household chores in display order, optionally only one room's."""
        chores = await self.list_for_households([household_id], now)
        if room_id is None:
            return chores
        return [c for c in chores if c.room_id == room_id]

    async def list_for_households(
        self, household_ids: list[HouseholdId], now: datetime | None = None,
    ) -> list[Chore]:
        chores = await self.store.list_for_households(household_ids)
        return order_for_display(chores, now or self.clock())

    async def stats(
        self, household_ids: list[HouseholdId], now: datetime | None = None,
    ) -> dict[HouseholdId, HouseholdChoreStats]:
        chores = await self.store.list_for_households(household_ids)
        computed = household_stats(chores, now or self.clock())
        for household_id in household_ids:
            computed.setdefault(household_id, HouseholdChoreStats())
        return computed

    async def schedule(
        self, chore_id: ChoreId, count: int,
    ) -> tuple[Chore, list[datetime]]:
        """The chore and its due dates after the current one, assuming on-time completion."""
        chore = await self.get(chore_id)
        return chore, upcoming_due_dates(
            chore.due_at, chore.interval_type, chore.interval_value, count,
        )

    async def resolver(self, household_id: HouseholdId) -> AssignmentResolver:
        members = await self.members.resolve_members(household_id)
        names = await self.members.display_names([m.user_id for m in members])
        return AssignmentResolver(members, names)

    def subscribe(self, household_id: HouseholdId) -> Subscription:
        return self.store.subscribe(household_id)

    # -- Creation / edit / delete ------------------------------------------------

    async def create(
        self, household_id: HouseholdId, draft: ChoreDraft, created_by: UserId,
    ) -> Chore:
        chore = build_chore(
            draft, ChoreId(uuid.uuid4()), household_id, created_by, self.clock(),
        )
        if chore.assigned_to is not None:
            await self._require_member(household_id, chore.assigned_to)
        return await self.store.create(chore)

    async def edit(
        self, chore_id: ChoreId, changes: dict[str, Any], expected_version: int,
    ) -> Chore:
        chore = await self.get(chore_id)
        mutation = plan_edit(chore, changes, expected_version)
        assignee = mutation.details.get("assigned_to")
        if assignee is not None:
            await self._require_member(chore.household_id, assignee)
        return await self._commit(chore, mutation, expected_version)

    async def delete(self, chore_id: ChoreId) -> None:
        await self.store.delete(chore_id)

    # -- State machine -----------------------------------------------------------

    async def complete(
        self, chore_id: ChoreId, user_id: UserId, expected_version: int,
    ) -> Chore:
        chore = await self.get(chore_id)
        now = self.clock()
        mutation = plan_complete(chore, user_id, expected_version, now)
        return await self._commit(chore, mutation, expected_version, user_id, now)

    async def undo(
        self, chore_id: ChoreId, user_id: UserId, expected_version: int,
    ) -> Chore:
        chore = await self.get(chore_id)
        mutation = plan_undo(chore, user_id, expected_version)
        return await self._commit(chore, mutation, expected_version, user_id)

    # -- Helpers -----------------------------------------------------------------

    async def _commit(
        self,
        chore: Chore,
        mutation: ChoreMutation,
        expected_version: int,
        user_id: UserId | None = None,
        now: datetime | None = None,
    ) -> Chore:
        extra = {
            "chore_id": str(chore.id),
            "household_id": str(chore.household_id),
            "user_id": user_id,
            "expected_version": expected_version,
        }
        try:
            new_version = await self.store.write(chore.id, mutation, expected_version)
        except VersionConflictError as exc:
            logger.warning(
                "Chore %s rejected: stale version", mutation.kind.value,
                extra={**extra, "error_code": exc.code},
            )
            raise
        updated = apply_mutation(chore, mutation, now or self.clock())
        if updated.version != new_version:
            updated = dataclasses.replace(updated, version=new_version)
        logger.info(
            "Chore %s accepted", mutation.kind.value,
            extra={**extra, "version": new_version},
        )
        return updated

    async def _require_member(
        self, household_id: HouseholdId, user_id: UserId,
    ) -> None:
        resolver = await self.resolver(household_id)
        if not resolver.is_member(user_id):
            raise ChoreValidationError(
                f"'{user_id}' is not a member of this household",
                field="assigned_to",
            )
