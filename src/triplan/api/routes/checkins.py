"""Weekly check-in routes."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ...db.repositories import CheckinRepository
from ...exceptions import NotFoundError
from ..deps import get_checkin_repository
from ..schemas import CheckinRequest

router = APIRouter()


@router.get("")
async def list_checkins(
    repo: CheckinRepository = Depends(get_checkin_repository),
) -> List[Dict[str, Any]]:
    return repo.list_checkins()


@router.get("/{week_number}")
async def get_checkin(
    week_number: int,
    repo: CheckinRepository = Depends(get_checkin_repository),
) -> Dict[str, Any]:
    checkin = repo.get_checkin(week_number)
    if checkin is None:
        raise NotFoundError("Checkin", str(week_number))
    return checkin


@router.post("")
async def upsert_checkin(
    request: CheckinRequest,
    repo: CheckinRepository = Depends(get_checkin_repository),
) -> Dict[str, Any]:
    data = request.model_dump(mode="json", exclude={"week_number"})
    return repo.upsert_checkin(request.week_number, data)
