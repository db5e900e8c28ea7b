"""Schedule override routes (moving sessions within their week)."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ...db.repositories import ScheduleOverrideRepository
from ..deps import get_schedule_override_repository
from ..schemas import ScheduleOverrideRequest

router = APIRouter()


@router.get("")
async def list_overrides(
    repo: ScheduleOverrideRepository = Depends(get_schedule_override_repository),
) -> List[Dict[str, Any]]:
    return [o.to_dict() for o in repo.get_all().values()]


@router.get("/week/{week_number}")
async def list_week_overrides(
    week_number: int,
    repo: ScheduleOverrideRepository = Depends(get_schedule_override_repository),
) -> List[Dict[str, Any]]:
    return [o.to_dict() for o in repo.list_by_week(week_number)]


@router.post("")
async def set_override(
    request: ScheduleOverrideRequest,
    repo: ScheduleOverrideRepository = Depends(get_schedule_override_repository),
) -> Dict[str, Any]:
    """Store an override; ``new_date`` must be one of the week's dates."""
    override = repo.set(request.session_id, request.week_number, request.new_date)
    return override.to_dict()


@router.post("/move")
async def move_session(
    request: ScheduleOverrideRequest,
    repo: ScheduleOverrideRepository = Depends(get_schedule_override_repository),
) -> Dict[str, Any]:
    """Drop a session on a day; dropping it on its default day clears the override."""
    override = repo.move(request.session_id, request.week_number, request.new_date)
    return {
        "rescheduled": override is not None,
        "override": override.to_dict() if override else None,
    }


@router.delete("/{session_id}/{week_number}")
async def clear_override(
    session_id: str,
    week_number: int,
    repo: ScheduleOverrideRepository = Depends(get_schedule_override_repository),
) -> Dict[str, bool]:
    return {"success": repo.clear(session_id, week_number)}
