"""Calendar projection result models."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from .plan import PlannedSession, WeekPlan
from .records import CustomWorkout, ExternalActivity, SessionLog


@dataclass
class ProjectedSession:
    """A planned session placed on its effective day, joined with its log."""
    session: PlannedSession
    effective_date: date
    day_name: str
    log: Optional[SessionLog] = None
    rescheduled: bool = False
    custom_workout: Optional[CustomWorkout] = None

    @property
    def completed(self) -> bool:
        return self.log is not None and self.log.completed

    @property
    def skipped(self) -> bool:
        return self.log is not None and self.log.skipped

    def to_dict(self) -> dict:
        result = self.session.to_dict()
        result.update({
            "date": self.effective_date.isoformat(),
            "day": self.day_name,
            "default_date": self.session.date.isoformat(),
            "default_day": self.session.day_name,
            "rescheduled": self.rescheduled,
            "completed": self.completed,
            "skipped": self.skipped,
            "log": self.log.to_dict() if self.log else None,
            "custom_workout": self.custom_workout.workout if self.custom_workout else None,
        })
        return result


@dataclass
class CalendarDay:
    day_name: str
    date: date
    sessions: List[ProjectedSession] = field(default_factory=list)
    activities: List[ExternalActivity] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "day_name": self.day_name,
            "date": self.date.isoformat(),
            "sessions": [s.to_dict() for s in self.sessions],
            "activities": [a.to_dict() for a in self.activities],
        }


@dataclass
class WeeklyStats:
    """Planned vs logged volume for one week, trainable sessions only."""
    target_hours: float = 0.0
    planned_hours: float = 0.0
    logged_hours: float = 0.0
    total_sessions: int = 0
    completed_sessions: int = 0
    skipped_sessions: int = 0
    completion_rate: int = 0

    def to_dict(self) -> dict:
        return {
            "target_hours": self.target_hours,
            "planned_hours": self.planned_hours,
            "logged_hours": self.logged_hours,
            "total_sessions": self.total_sessions,
            "completed_sessions": self.completed_sessions,
            "skipped_sessions": self.skipped_sessions,
            "completion_rate": self.completion_rate,
        }


@dataclass
class CalendarView:
    week: WeekPlan
    days: List[CalendarDay]
    stats: WeeklyStats

    def get_day(self, value: date) -> Optional[CalendarDay]:
        for day in self.days:
            if day.date == value:
                return day
        return None

    def find_session(self, session_id: str) -> Optional[ProjectedSession]:
        for day in self.days:
            for projected in day.sessions:
                if projected.session.session_id == session_id:
                    return projected
        return None

    def to_dict(self) -> dict:
        result = self.week.summary()
        result.update({
            "macrocycle": self.week.phase.macrocycle,
            "notes": self.week.notes,
            "days": [d.to_dict() for d in self.days],
            "stats": self.stats.to_dict(),
        })
        return result
