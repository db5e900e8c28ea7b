"""Custom workout routes (athlete-edited session content)."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ...db.repositories import CustomWorkoutRepository
from ...exceptions import NotFoundError
from ..deps import get_custom_workout_repository
from ..schemas import CustomWorkoutRequest

router = APIRouter()


@router.get("")
async def list_custom_workouts(
    repo: CustomWorkoutRepository = Depends(get_custom_workout_repository),
) -> List[Dict[str, Any]]:
    return [c.to_dict() for c in repo.get_all().values()]


@router.get("/{session_id}/{week_number}")
async def get_custom_workout(
    session_id: str,
    week_number: int,
    repo: CustomWorkoutRepository = Depends(get_custom_workout_repository),
) -> Dict[str, Any]:
    custom = repo.get(session_id, week_number)
    if custom is None:
        raise NotFoundError("CustomWorkout", f"{session_id}_{week_number}")
    return custom.to_dict()


@router.put("")
async def upsert_custom_workout(
    request: CustomWorkoutRequest,
    repo: CustomWorkoutRepository = Depends(get_custom_workout_repository),
) -> Dict[str, Any]:
    return repo.upsert(request.session_id, request.week_number, request.workout).to_dict()


@router.delete("/{session_id}/{week_number}")
async def delete_custom_workout(
    session_id: str,
    week_number: int,
    repo: CustomWorkoutRepository = Depends(get_custom_workout_repository),
) -> Dict[str, bool]:
    return {"success": repo.delete(session_id, week_number)}
