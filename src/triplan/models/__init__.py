"""Data models for TriPlan."""

from .identity import SessionIdentity
from .plan import (
    DayInfo,
    Discipline,
    NON_TRAINABLE,
    PhaseInfo,
    PlannedSession,
    WeekDates,
    WeekPlan,
)
from .records import (
    ActivityType,
    CustomWorkout,
    ExternalActivity,
    ScheduleOverride,
    SessionLog,
    SyncState,
)
from .calendar import CalendarDay, CalendarView, ProjectedSession, WeeklyStats

__all__ = [
    "SessionIdentity",
    "DayInfo",
    "Discipline",
    "NON_TRAINABLE",
    "PhaseInfo",
    "PlannedSession",
    "WeekDates",
    "WeekPlan",
    "ActivityType",
    "CustomWorkout",
    "ExternalActivity",
    "ScheduleOverride",
    "SessionLog",
    "SyncState",
    "CalendarDay",
    "CalendarView",
    "ProjectedSession",
    "WeeklyStats",
]
