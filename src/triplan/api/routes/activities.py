"""External activity routes: cached activities, sync and sync settings."""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from ...db.repositories import ExternalActivityRepository
from ...exceptions import FeedNotConfiguredError
from ...integrations.base import WorkoutFeed
from ...services.sync_scheduler import ActivitySyncScheduler
from ...services.sync_service import ExternalActivitySyncService
from ..deps import (
    get_external_activity_repository,
    get_sync_scheduler,
    get_sync_service,
    get_workout_feed,
)
from ..schemas import SyncConfigUpdate, SyncRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def list_activities(
    start: Optional[date] = Query(None, description="Oldest activity date"),
    end: Optional[date] = Query(None, description="Newest activity date"),
    repo: ExternalActivityRepository = Depends(get_external_activity_repository),
) -> List[Dict[str, Any]]:
    return [a.to_dict() for a in repo.list_activities(start, end)]


@router.post("/sync")
async def sync_activities(
    request: Optional[SyncRequest] = None,
    service: ExternalActivitySyncService = Depends(get_sync_service),
) -> Dict[str, Any]:
    """
    Pull activities from intervals.icu and merge them into the cache.

    Returns 409 if a sync is already running. Feed failures leave the
    cached activities untouched.
    """
    start = request.start_date if request else None
    end = request.end_date if request else None
    result = await service.sync(start=start, end=end)
    return result.to_dict()


@router.delete("")
async def clear_activities(
    service: ExternalActivitySyncService = Depends(get_sync_service),
) -> Dict[str, Any]:
    """Delete all synced activities and reset the sync timestamps."""
    removed = service.clear_all()
    return {"success": True, "removed": removed}


@router.get("/sync/status")
async def get_sync_status(
    service: ExternalActivitySyncService = Depends(get_sync_service),
    scheduler: ActivitySyncScheduler = Depends(get_sync_scheduler),
) -> Dict[str, Any]:
    status = service.status()
    status["scheduler_running"] = scheduler.is_running
    return status


@router.put("/sync/config")
async def update_sync_config(
    request: SyncConfigUpdate,
    service: ExternalActivitySyncService = Depends(get_sync_service),
    scheduler: ActivitySyncScheduler = Depends(get_sync_scheduler),
) -> Dict[str, Any]:
    """Change auto-sync settings and apply them to the running scheduler."""
    state = service.update_config(**request.model_dump(exclude_unset=True))
    scheduler.reschedule(state)
    return state.to_dict()


@router.get("/sync/test-connection")
async def test_connection(
    feed: Optional[WorkoutFeed] = Depends(get_workout_feed),
) -> Dict[str, Any]:
    if feed is None:
        raise FeedNotConfiguredError()
    connected = await feed.test_connection()
    return {"connected": connected, "provider": feed.provider}
