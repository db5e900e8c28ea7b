"""Plan data models: disciplines, week dates, planned sessions and weeks."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .identity import SessionIdentity


class Discipline(str, Enum):
    """Session types that can appear in the plan."""
    SWIM = "swim"
    BIKE = "bike"
    RUN = "run"
    BRICK = "brick"
    STRENGTH = "strength"
    CLIMBING = "climbing"
    REST = "rest"
    PREP = "prep"
    RACE = "race"
    RECOVERY = "recovery"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "Discipline":
        """Coerce a raw value, mapping anything unrecognised to UNKNOWN."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_trainable(self) -> bool:
        """Whether the session counts towards weekly completion stats."""
        return self not in NON_TRAINABLE


NON_TRAINABLE = frozenset({Discipline.REST, Discipline.PREP, Discipline.RECOVERY})


@dataclass(frozen=True)
class DayInfo:
    day_name: str
    date: date

    def to_dict(self) -> dict:
        return {
            "day_name": self.day_name,
            "date": self.date.isoformat(),
            "display_date": f"{self.date.strftime('%b')} {self.date.day}",
        }


@dataclass(frozen=True)
class WeekDates:
    """The seven calendar days (Monday to Sunday) of one plan week."""
    start: date
    end: date
    days: Tuple[DayInfo, ...]

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end

    def day_for(self, value: date) -> Optional[DayInfo]:
        for day in self.days:
            if day.date == value:
                return day
        return None

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "days": [d.to_dict() for d in self.days],
        }


@dataclass(frozen=True)
class PhaseInfo:
    name: str
    focus: str
    macrocycle: int


@dataclass(frozen=True)
class PlannedSession:
    """
    A session as generated by the plan.

    Computed on demand and never persisted. ``target`` carries the workout
    targets (pace, power, distance...), ``details`` the discipline specific
    extras such as strength exercises or brick legs.
    """
    session_id: str
    week_number: int
    discipline: Discipline
    day_name: str
    date: date
    title: str
    description: str
    duration_min: int = 0
    target: Dict[str, Any] = field(default_factory=dict)
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def identity(self) -> SessionIdentity:
        return SessionIdentity(self.session_id, self.week_number)

    @property
    def is_trainable(self) -> bool:
        return self.discipline.is_trainable

    def to_dict(self) -> dict:
        return {
            "id": self.session_id,
            "week_number": self.week_number,
            "type": self.discipline.value,
            "day": self.day_name,
            "date": self.date.isoformat(),
            "title": self.title,
            "description": self.description,
            "duration": self.duration_min,
            "target": dict(self.target),
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class WeekPlan:
    """One week of the plan with its phase, load and sessions in plan order."""
    week_number: int
    dates: WeekDates
    phase: PhaseInfo
    load_level: str
    weekly_hours: float
    sessions: Tuple[PlannedSession, ...]
    notes: str
    is_race_week: bool = False
    race_name: Optional[str] = None

    def get_session(self, session_id: str) -> Optional[PlannedSession]:
        for session in self.sessions:
            if session.session_id == session_id:
                return session
        return None

    def summary(self) -> dict:
        """Compact representation used by week listings."""
        return {
            "week_number": self.week_number,
            "start": self.dates.start.isoformat(),
            "end": self.dates.end.isoformat(),
            "phase": self.phase.name,
            "focus": self.phase.focus,
            "load": self.load_level,
            "weekly_hours": self.weekly_hours,
            "is_race_week": self.is_race_week,
            "race_name": self.race_name,
        }

    def to_dict(self) -> dict:
        result = self.summary()
        result.update({
            "macrocycle": self.phase.macrocycle,
            "dates": self.dates.to_dict(),
            "notes": self.notes,
            "sessions": [s.to_dict() for s in self.sessions],
        })
        return result
