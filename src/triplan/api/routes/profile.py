"""Athlete profile, current metrics and testing history routes."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from ...db.repositories import AthleteRepository
from ..deps import get_athlete_repository
from ..schemas import FitnessTestCreate, MetricsUpdate, ProfileUpdate

router = APIRouter()

TEST_FIELDS = {"test_type", "value", "unit", "test_date", "notes"}


@router.get("/profile")
async def get_profile(
    repo: AthleteRepository = Depends(get_athlete_repository),
) -> Dict[str, Any]:
    return repo.get_profile()


@router.put("/profile")
async def update_profile(
    request: ProfileUpdate,
    repo: AthleteRepository = Depends(get_athlete_repository),
) -> Dict[str, Any]:
    return repo.update_profile(request.model_dump(mode="json", exclude_unset=True))


@router.get("/metrics")
async def get_metrics(
    repo: AthleteRepository = Depends(get_athlete_repository),
) -> Dict[str, Any]:
    return repo.get_metrics()


@router.put("/metrics")
async def update_metrics(
    request: MetricsUpdate,
    repo: AthleteRepository = Depends(get_athlete_repository),
) -> Dict[str, Any]:
    """
    Merge new metric values.

    Sending ``test_type`` (with ``value``, ``unit``, ``test_date``) also
    records the result in the testing history.
    """
    data = request.model_dump(mode="json", exclude_unset=True)
    updates = {k: v for k, v in data.items() if k not in TEST_FIELDS}
    return repo.update_metrics(
        updates,
        test_type=data.get("test_type"),
        value=data.get("value"),
        unit=data.get("unit") or "",
        test_date=data.get("test_date"),
        notes=data.get("notes"),
    )


@router.get("/testing-history")
async def get_testing_history(
    test_type: Optional[str] = Query(None, description="Only return this kind of test"),
    repo: AthleteRepository = Depends(get_athlete_repository),
) -> List[Dict[str, Any]]:
    return repo.get_testing_history(test_type)


@router.post("/testing-history", status_code=201)
async def add_test_result(
    request: FitnessTestCreate,
    repo: AthleteRepository = Depends(get_athlete_repository),
) -> Dict[str, Any]:
    data = request.model_dump(mode="json")
    return repo.add_test_result(**data)
