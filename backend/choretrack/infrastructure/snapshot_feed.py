"""Snapshot Feed — push-based, cancellable household snapshot subscriptions.

Invariants:
    - Every delivery is a full Snapshot of one household (never a diff)
    - Each subscription buffers at most ONE undelivered snapshot; a newer one replaces it
    - cancel() is synchronous and idempotent: buffer dropped, subscription detached,
      no delivery (iterator item or callback) happens after it returns
    - Iteration ends (StopAsyncIteration) once the subscription is cancelled
    - No ordering guarantee between two rapidly published snapshots beyond each
      being self-consistent

Design Decisions:
    - Latest-only slot + asyncio.Event over an unbounded Queue: slow readers never
      accumulate stale snapshots
    - Background loads tracked in a set so close() can cancel them
"""

import asyncio
import logging
from collections import defaultdict
from typing import Awaitable, Callable

from choretrack.core.domain_types import HouseholdId
from choretrack.core.repository_protocols import Snapshot

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[Snapshot], None]


class FeedSubscription:
    """One subscriber's handle. Async-iterate it or pass on_snapshot."""

    def __init__(
        self,
        feed: "SnapshotFeed",
        household_id: HouseholdId,
        on_snapshot: SnapshotCallback | None = None,
    ):
        self.household_id = household_id
        self._feed = feed
        self._on_snapshot = on_snapshot
        self._slot: Snapshot | None = None
        self._ready = asyncio.Event()
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def deliver(self, snapshot: Snapshot) -> None:
        if self._cancelled:
            return
        if self._on_snapshot is not None:
            self._on_snapshot(snapshot)
            return
        self._slot = snapshot
        self._ready.set()

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._slot = None
        self._on_snapshot = None
        self._feed.detach(self)
        self._ready.set()
        logger.debug(
            "Subscription cancelled",
            extra={"household_id": str(self.household_id)},
        )

    def __aiter__(self) -> "FeedSubscription":
        return self

    async def __anext__(self) -> Snapshot:
        while True:
            if self._cancelled:
                raise StopAsyncIteration
            if self._slot is not None:
                snapshot, self._slot = self._slot, None
                self._ready.clear()
                return snapshot
            await self._ready.wait()
            self._ready.clear()


class SnapshotFeed:
    """Fan-out of household snapshots to live subscriptions."""

    def __init__(self) -> None:
        self._subscribers: dict[HouseholdId, set[FeedSubscription]] = defaultdict(set)
        self._tasks: set[asyncio.Task] = set()

    def subscribe(
        self,
        household_id: HouseholdId,
        on_snapshot: SnapshotCallback | None = None,
    ) -> FeedSubscription:
        sub = FeedSubscription(self, household_id, on_snapshot)
        self._subscribers[household_id].add(sub)
        return sub

    def detach(self, sub: FeedSubscription) -> None:
        subs = self._subscribers.get(sub.household_id)
        if not subs:
            return
        subs.discard(sub)
        if not subs:
            del self._subscribers[sub.household_id]

    def subscriber_count(self, household_id: HouseholdId) -> int:
        return len(self._subscribers.get(household_id, ()))

    def publish(self, snapshot: Snapshot) -> None:
        """Deliver to every live subscriber of the snapshot's household."""
        for sub in list(self._subscribers.get(snapshot.household_id, ())):
            try:
                sub.deliver(snapshot)
            except Exception:
                logger.error(
                    "Snapshot callback failed",
                    exc_info=True,
                    extra={"household_id": str(snapshot.household_id)},
                )

    def spawn(self, coro: Awaitable[None]) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def close(self) -> None:
        """Cancel every subscription and pending background load."""
        for subs in list(self._subscribers.values()):
            for sub in list(subs):
                sub.cancel()
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()
