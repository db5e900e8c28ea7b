"""Plan browsing and calendar projection routes."""

from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from ...exceptions import NotFoundError, WeekNotFoundError
from ...plan.source import PlanSource
from ...services.calendar_projector import CalendarProjector
from ..deps import get_calendar_projector, get_plan_source

router = APIRouter()


@router.get("/weeks")
async def list_weeks(
    plan: PlanSource = Depends(get_plan_source),
) -> List[Dict[str, Any]]:
    """Summaries of every plan week."""
    return [week.summary() for week in plan.get_all_weeks()]


@router.get("/weeks/{week_number}")
async def get_week(
    week_number: int,
    plan: PlanSource = Depends(get_plan_source),
) -> Dict[str, Any]:
    """The generated week without athlete data."""
    week = plan.get_week(week_number)
    if week is None:
        raise WeekNotFoundError(week_number)
    return week.to_dict()


@router.get("/races")
async def list_races(
    plan: PlanSource = Depends(get_plan_source),
) -> List[Dict[str, Any]]:
    return plan.get_races()


@router.get("/current")
async def get_current_week(
    on: Optional[date] = Query(None, description="Date to look up (default today)"),
    plan: PlanSource = Depends(get_plan_source),
) -> Dict[str, Any]:
    target = on or date.today()
    week_number = plan.find_week_for_date(target)
    if week_number is None:
        raise NotFoundError("Week", message=f"{target.isoformat()} is outside the plan")
    return {"date": target.isoformat(), "week_number": week_number}


@router.get("/calendar/{week_number}")
async def get_calendar_week(
    week_number: int,
    projector: CalendarProjector = Depends(get_calendar_projector),
) -> Dict[str, Any]:
    """The week as the athlete sees it: moved sessions, logs and synced activities."""
    view = projector.project_week(week_number)
    if view is None:
        raise WeekNotFoundError(week_number)
    return view.to_dict()
