"""Progress statistics routes."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ...services.stats_service import StatsService
from ..deps import get_stats_service

router = APIRouter()


@router.get("/completion")
async def get_completion_stats(
    service: StatsService = Depends(get_stats_service),
) -> List[Dict[str, Any]]:
    return service.completion()


@router.get("/session-types")
async def get_session_type_stats(
    service: StatsService = Depends(get_stats_service),
) -> List[Dict[str, Any]]:
    return service.session_types()


@router.get("/summary")
async def get_summary(
    service: StatsService = Depends(get_stats_service),
) -> Dict[str, Any]:
    return service.summary()
