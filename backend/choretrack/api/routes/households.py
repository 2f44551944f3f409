"""Household Routes — chore list, creation, member labels, and the live snapshot stream.

Invariants:
    - GET chores returns the display order (overdue first, due_at, id)
    - The SSE stream emits one "snapshot" event per full replacement snapshot;
      store failures arrive as "error" events, the stream stays open
    - The subscription is opened by the body generator itself, so a response that
      is never iterated never subscribes
    - The subscription is cancelled when the client disconnects (no residual delivery)

Design Decisions:
    - StreamingResponse for SSE: snapshot_events yields formatted SSE lines
    - snapshot_events is a plain async generator over a subscribe callable so it
      can be driven without an HTTP server
"""

import asyncio
import json
import logging
from datetime import datetime
from typing import AsyncIterator, Callable
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse

from choretrack.api.dependencies import get_chore_service
from choretrack.core.domain_types import HouseholdId, UserId
from choretrack.core.ordering import order_for_display
from choretrack.core.repository_protocols import Subscription
from choretrack.schemas.chore import (
    ChoreCreate, ChoreResponse, MemberProfileResponse,
    chore_to_response, profile_to_response,
)
from choretrack.services.chore_service import ChoreService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/households", tags=["households"])

# SSE headers prevent proxy/browser buffering of streamed events.
_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}


@router.get("/{household_id}/chores", response_model=list[ChoreResponse])
async def list_household_chores(
    household_id: UUID,
    room_id: str | None = Query(None, max_length=128),
    service: ChoreService = Depends(get_chore_service),
):
    """Household chores in display order, labelled with assignee names."""
    hid = HouseholdId(household_id)
    now = service.clock()
    chores = await service.list_household(hid, now, room_id=room_id)
    resolver = await service.resolver(hid)
    return [chore_to_response(c, now, resolver) for c in chores]


@router.post(
    "/{household_id}/chores", response_model=ChoreResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_household_chore(
    household_id: UUID,
    body: ChoreCreate,
    service: ChoreService = Depends(get_chore_service),
):
    chore = await service.create(
        HouseholdId(household_id), body.to_draft(), UserId(body.created_by),
    )
    return chore_to_response(chore, service.clock())


@router.get(
    "/{household_id}/members", response_model=list[MemberProfileResponse],
)
async def list_household_members(
    household_id: UUID, service: ChoreService = Depends(get_chore_service),
):
    resolver = await service.resolver(HouseholdId(household_id))
    return [profile_to_response(p) for p in resolver.profiles]


@router.get("/{household_id}/chores/stream")
async def stream_household_chores(
    household_id: UUID, service: ChoreService = Depends(get_chore_service),
):
    """SSE stream of full chore snapshots for one household."""
    return StreamingResponse(
        snapshot_events(
            service.subscribe, HouseholdId(household_id), service.clock,
        ),
        media_type="text/event-stream",
        headers=_SSE_HEADERS,
    )


async def snapshot_events(
    subscribe: Callable[[HouseholdId], Subscription],
    household_id: HouseholdId,
    clock: Callable[[], datetime],
) -> AsyncIterator[str]:
    """Subscribe on first iteration and render snapshots as SSE lines until cancelled."""
    subscription = subscribe(household_id)
    try:
        async for snapshot in subscription:
            if snapshot.error is not None:
                yield _sse_line(snapshot.error.to_sse_event())
                continue
            now = clock()
            ordered = order_for_display(snapshot.chores, now)
            yield _sse_line({
                "type": "snapshot",
                "data": {
                    "household_id": str(snapshot.household_id),
                    "chores": [
                        chore_to_response(c, now).model_dump(mode="json")
                        for c in ordered
                    ],
                },
            })
    except asyncio.CancelledError:
        logger.info(
            "Client disconnected from chore stream",
            extra={"household_id": str(household_id)},
        )
        raise
    finally:
        subscription.cancel()


def _sse_line(event: dict) -> str:
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"
