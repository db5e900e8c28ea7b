"""Race result routes."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ...db.repositories import CheckinRepository
from ..deps import get_checkin_repository
from ..schemas import RaceResultCreate

router = APIRouter()


@router.get("")
async def list_race_results(
    repo: CheckinRepository = Depends(get_checkin_repository),
) -> List[Dict[str, Any]]:
    return repo.list_race_results()


@router.post("", status_code=201)
async def add_race_result(
    request: RaceResultCreate,
    repo: CheckinRepository = Depends(get_checkin_repository),
) -> Dict[str, Any]:
    return repo.add_race_result(request.model_dump(mode="json"))
