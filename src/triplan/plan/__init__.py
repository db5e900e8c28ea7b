"""The 32-week training plan."""

from .source import (
    PlanSource,
    TriathlonPlan,
    get_phase_info,
    get_week_load,
    is_race_week,
)

__all__ = [
    "PlanSource",
    "TriathlonPlan",
    "get_phase_info",
    "get_week_load",
    "is_race_week",
]
