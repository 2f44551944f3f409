"""Chore Routes — single-chore reads, edits, and the complete/undo transitions.

Invariants:
    - Every mutating endpoint takes expected_version; stale -> 409 VERSION_CONFLICT
    - undo without a completion record -> 409 NOT_UNDOABLE
    - Missing chore -> 404 CHORE_NOT_FOUND
    - Errors raised as ChoreTrackError and rendered by the global handler

Design Decisions:
    - /complete and /undo are POST actions, not PATCH: they are state transitions
      with server-computed fields (due_at, completion record)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from choretrack.api.dependencies import get_chore_service
from choretrack.config import get_settings
from choretrack.core.domain_types import ChoreId, HouseholdId, UserId
from choretrack.schemas.chore import (
    ChoreResponse, ChoreUpdate, HouseholdStatsResponse, ScheduleResponse,
    TransitionRequest, chore_to_response, stats_to_response,
)
from choretrack.services.chore_service import ChoreService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/chores", tags=["chores"])


@router.get("", response_model=list[ChoreResponse])
async def list_chores(
    household_id: list[UUID] = Query(...),
    service: ChoreService = Depends(get_chore_service),
):
    """Chores across several households, overdue first."""
    now = service.clock()
    chores = await service.list_for_households(
        [HouseholdId(h) for h in household_id], now,
    )
    return [chore_to_response(c, now) for c in chores]


@router.get("/stats", response_model=list[HouseholdStatsResponse])
async def chore_stats(
    household_id: list[UUID] = Query(...),
    service: ChoreService = Depends(get_chore_service),
):
    """Total / overdue / due-today counters per household."""
    stats = await service.stats([HouseholdId(h) for h in household_id])
    return [stats_to_response(h, stats[HouseholdId(h)]) for h in household_id]


@router.get("/{chore_id}", response_model=ChoreResponse)
async def get_chore(
    chore_id: UUID, service: ChoreService = Depends(get_chore_service),
):
    chore = await service.get(ChoreId(chore_id))
    resolver = await service.resolver(chore.household_id)
    return chore_to_response(chore, service.clock(), resolver)


@router.patch("/{chore_id}", response_model=ChoreResponse)
async def update_chore(
    chore_id: UUID,
    body: ChoreUpdate,
    service: ChoreService = Depends(get_chore_service),
):
    """Edit fields; a pending completion record is kept."""
    chore = await service.edit(
        ChoreId(chore_id), body.changes(), body.expected_version,
    )
    return chore_to_response(chore, service.clock())


@router.delete("/{chore_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chore(
    chore_id: UUID, service: ChoreService = Depends(get_chore_service),
):
    await service.delete(ChoreId(chore_id))


@router.post("/{chore_id}/complete", response_model=ChoreResponse)
async def complete_chore(
    chore_id: UUID,
    body: TransitionRequest,
    service: ChoreService = Depends(get_chore_service),
):
    chore = await service.complete(
        ChoreId(chore_id), UserId(body.user_id), body.expected_version,
    )
    return chore_to_response(chore, service.clock())


@router.post("/{chore_id}/undo", response_model=ChoreResponse)
async def undo_completion(
    chore_id: UUID,
    body: TransitionRequest,
    service: ChoreService = Depends(get_chore_service),
):
    chore = await service.undo(
        ChoreId(chore_id), UserId(body.user_id), body.expected_version,
    )
    return chore_to_response(chore, service.clock())


@router.get("/{chore_id}/schedule", response_model=ScheduleResponse)
async def chore_schedule(
    chore_id: UUID,
    count: int | None = Query(None, ge=1, le=52),
    service: ChoreService = Depends(get_chore_service),
):
    """Upcoming due dates if every occurrence is completed on time."""
    count = count or get_settings().upcoming_preview_count
    chore, upcoming = await service.schedule(ChoreId(chore_id), count)
    return ScheduleResponse(chore_id=chore.id, due_at=chore.due_at, upcoming=upcoming)
