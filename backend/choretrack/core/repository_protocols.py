"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - ChoreStore.write is version-guarded: it applies the mutation atomically only
      if the stored version still equals expected_version, else raises
      VersionConflictError (ChoreNotFoundError when the chore is gone)
    - subscribe returns a cancellable handle; after cancel() returns no further
      snapshot is delivered

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these protocols are never async themselves —
      the shell orchestrates the async calls around the pure logic
"""

from dataclasses import dataclass
from typing import AsyncIterator, Protocol

from choretrack.core.chore import Chore, ChoreMutation, HouseholdMember
from choretrack.core.domain_types import ChoreId, HouseholdId, Version
from choretrack.core.errors import ChoreTrackError


@dataclass(frozen=True)
class Snapshot:
    """Full replacement of a household's chore collection (never a diff)."""
    household_id: HouseholdId
    chores: tuple[Chore, ...]
    error: ChoreTrackError | None = None


class Subscription(Protocol):
    """Handle for a live snapshot stream."""
    household_id: HouseholdId

    def cancel(self) -> None: ...

    @property
    def cancelled(self) -> bool: ...

    def __aiter__(self) -> AsyncIterator[Snapshot]: ...


class ChoreStore(Protocol):
    """Contract for chore persistence — implemented by shell."""
    async def get(self, chore_id: ChoreId) -> Chore | None: ...
    async def list_for_households(
        self, household_ids: list[HouseholdId],
    ) -> list[Chore]: ...
    async def create(self, chore: Chore) -> Chore: ...
    async def write(
        self, chore_id: ChoreId, mutation: ChoreMutation, expected_version: int,
    ) -> Version: ...
    async def delete(self, chore_id: ChoreId) -> None: ...
    def subscribe(self, household_id: HouseholdId) -> Subscription: ...


class MemberDirectory(Protocol):
    """Contract for read-only household membership — implemented by shell."""
    async def resolve_members(
        self, household_id: HouseholdId,
    ) -> list[HouseholdMember]: ...
    async def display_names(self, user_ids: list[str]) -> dict[str, str]: ...
