"""Persisted record models: session logs, overrides, custom workouts and synced activities."""

from dataclasses import dataclass, field, fields as dataclass_fields
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional

from ..exceptions import SessionLogValidationError
from .identity import SessionIdentity
from .plan import Discipline


def parse_date(value: Any) -> Optional[date]:
    """Parse a date from a ``date``, ``datetime`` or ISO string (time part ignored)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).split("T")[0])


def parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


# ============================================================================
# Session logs
# ============================================================================

METRIC_FIELDS = (
    "actual_duration_min",
    "actual_distance_km",
    "actual_distance_m",
    "actual_avg_hr",
    "actual_max_hr",
    "actual_pace_sec_per_km",
    "actual_avg_power",
    "actual_np_power",
    "actual_tss",
    "actual_css_pace",
    "bike_duration_min",
    "run_duration_min",
    "foot_numbness_onset_km",
    "walk_breaks_taken",
)


@dataclass
class SessionLog:
    """
    What the athlete actually did for one planned session.

    ``completed`` and ``skipped`` are mutually exclusive. A record that
    arrives with both set keeps ``completed`` and drops the skip.
    """
    session_id: str
    week_number: int
    session_date: Optional[date] = None
    session_type: Optional[Discipline] = None
    completed: bool = False
    skipped: bool = False
    skip_reason: Optional[str] = None

    # Actual metrics
    actual_duration_min: Optional[float] = None
    actual_distance_km: Optional[float] = None
    actual_distance_m: Optional[float] = None
    actual_avg_hr: Optional[int] = None
    actual_max_hr: Optional[int] = None
    actual_pace_sec_per_km: Optional[float] = None
    actual_avg_power: Optional[float] = None
    actual_np_power: Optional[float] = None
    actual_tss: Optional[float] = None
    actual_css_pace: Optional[str] = None
    bike_duration_min: Optional[float] = None
    run_duration_min: Optional[float] = None
    foot_numbness_onset_km: Optional[float] = None
    walk_breaks_taken: Optional[int] = None

    # Subjective
    completion_rate: Optional[int] = None
    rpe: Optional[int] = None
    fatigue_before: Optional[int] = None
    fatigue_after: Optional[int] = None
    notes: Optional[str] = None
    activity_url: Optional[str] = None

    updated_at: Optional[datetime] = None

    def __post_init__(self):
        self.session_date = parse_date(self.session_date)
        self.updated_at = parse_datetime(self.updated_at)
        if self.session_type is not None:
            self.session_type = Discipline.parse(self.session_type)
        self.completed = bool(self.completed)
        self.skipped = bool(self.skipped)
        if self.completed and self.skipped:
            self.skipped = False
            self.skip_reason = None

    @property
    def identity(self) -> SessionIdentity:
        return SessionIdentity(self.session_id, self.week_number)

    def validate(self) -> None:
        """Check values a caller may send; stored records are not re-checked on read.

        Raises:
            SessionLogValidationError: If completion_rate is outside 0..100
        """
        if self.completion_rate is not None and not 0 <= self.completion_rate <= 100:
            raise SessionLogValidationError(
                f"completion_rate must be between 0 and 100, got {self.completion_rate}",
                field="completion_rate",
            )

    def mark_completed(self) -> None:
        self.completed = True
        self.skipped = False
        self.skip_reason = None

    def mark_skipped(self, reason: Optional[str] = None) -> None:
        self.skipped = True
        self.skip_reason = reason
        self.completed = False

    def logged_duration_min(self, planned_min: float) -> float:
        """Minutes to credit for this session in weekly totals.

        Falls back from the logged duration to the brick legs and finally
        to the planned duration; zero counts as "not logged".
        """
        if self.actual_duration_min:
            return self.actual_duration_min
        brick_total = (self.bike_duration_min or 0) + (self.run_duration_min or 0)
        if brick_total:
            return brick_total
        return planned_min

    def to_dict(self) -> dict:
        result = {
            "session_id": self.session_id,
            "week_number": self.week_number,
            "session_date": _iso(self.session_date),
            "session_type": self.session_type.value if self.session_type else None,
            "completed": self.completed,
            "skipped": self.skipped,
            "skip_reason": self.skip_reason,
        }
        for name in METRIC_FIELDS:
            result[name] = getattr(self, name)
        result.update({
            "completion_rate": self.completion_rate,
            "rpe": self.rpe,
            "fatigue_before": self.fatigue_before,
            "fatigue_after": self.fatigue_after,
            "notes": self.notes,
            "activity_url": self.activity_url,
            "updated_at": _iso(self.updated_at),
        })
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "SessionLog":
        """Build a log from a stored or request dict, ignoring unknown keys."""
        known = {f.name for f in dataclass_fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


# ============================================================================
# Schedule overrides and custom workouts
# ============================================================================

@dataclass
class ScheduleOverride:
    """A session moved to another day of its own week."""
    session_id: str
    week_number: int
    new_date: date
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        self.new_date = parse_date(self.new_date)
        self.updated_at = parse_datetime(self.updated_at)

    @property
    def identity(self) -> SessionIdentity:
        return SessionIdentity(self.session_id, self.week_number)

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "week_number": self.week_number,
            "new_date": self.new_date.isoformat(),
            "updated_at": _iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScheduleOverride":
        return cls(
            session_id=data["session_id"],
            week_number=int(data["week_number"]),
            new_date=data["new_date"],
            updated_at=data.get("updated_at"),
        )


@dataclass
class CustomWorkout:
    """Athlete-edited replacement content for a planned session."""
    session_id: str
    week_number: int
    workout: Dict[str, Any] = field(default_factory=dict)
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        self.updated_at = parse_datetime(self.updated_at)

    @property
    def identity(self) -> SessionIdentity:
        return SessionIdentity(self.session_id, self.week_number)

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "week_number": self.week_number,
            "workout": dict(self.workout),
            "updated_at": _iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CustomWorkout":
        return cls(
            session_id=data["session_id"],
            week_number=int(data["week_number"]),
            workout=data.get("workout") or {},
            updated_at=data.get("updated_at"),
        )


# ============================================================================
# External activities
# ============================================================================

class ActivityType(str, Enum):
    """Classification of an externally recorded activity."""
    RUN = "run"
    BIKE = "bike"
    SWIM = "swim"
    HIKE = "hike"
    SKI = "ski"
    STRENGTH = "strength"
    CLIMBING = "climbing"
    BASKETBALL = "basketball"
    RECOVERY = "recovery"
    REST = "rest"


@dataclass
class ExternalActivity:
    """
    An activity pulled from the workout feed.

    ``fields`` holds the feed's optional performance data (zones, load,
    power, device info...) untouched. Two records describe the same
    content when everything except ``synced_at`` matches.
    """
    external_id: str
    activity_type: ActivityType = ActivityType.REST
    date: Optional[date] = None
    start_time: Optional[str] = None
    duration: float = 0
    distance: float = 0
    title: str = ""
    source: str = "intervals.icu"
    fields: Dict[str, Any] = field(default_factory=dict)
    synced_at: Optional[datetime] = None

    def __post_init__(self):
        self.external_id = str(self.external_id)
        if not isinstance(self.activity_type, ActivityType):
            try:
                self.activity_type = ActivityType(str(self.activity_type))
            except ValueError:
                self.activity_type = ActivityType.REST
        self.date = parse_date(self.date)
        self.synced_at = parse_datetime(self.synced_at)

    @property
    def id(self) -> str:
        return f"intervals_{self.external_id}"

    def content_dict(self) -> dict:
        """Serialized form without the sync timestamp."""
        return {
            "id": self.id,
            "external_id": self.external_id,
            "type": self.activity_type.value,
            "date": _iso(self.date),
            "start_time": self.start_time,
            "duration": self.duration,
            "distance": self.distance,
            "title": self.title,
            "source": self.source,
            "fields": dict(self.fields),
        }

    def same_content(self, other: "ExternalActivity") -> bool:
        return self.content_dict() == other.content_dict()

    def to_dict(self) -> dict:
        result = self.content_dict()
        result["synced_at"] = _iso(self.synced_at)
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "ExternalActivity":
        return cls(
            external_id=data["external_id"],
            activity_type=data.get("type", ActivityType.REST.value),
            date=data.get("date"),
            start_time=data.get("start_time"),
            duration=data.get("duration") or 0,
            distance=data.get("distance") or 0,
            title=data.get("title") or "",
            source=data.get("source") or "intervals.icu",
            fields=data.get("fields") or {},
            synced_at=data.get("synced_at"),
        )


# ============================================================================
# Sync bookkeeping
# ============================================================================

@dataclass
class SyncState:
    """Persisted sync configuration and the outcome of the last run."""
    last_full_sync_at: Optional[datetime] = None
    last_incremental_sync_at: Optional[datetime] = None
    auto_sync_enabled: bool = True
    auto_sync_interval_hours: int = 6
    sync_start_date: Optional[date] = None
    sync_days_back: int = 30
    last_sync_status: str = "never"
    last_sync_error: Optional[str] = None
    last_sync_added: int = 0
    last_sync_updated: int = 0

    def __post_init__(self):
        self.last_full_sync_at = parse_datetime(self.last_full_sync_at)
        self.last_incremental_sync_at = parse_datetime(self.last_incremental_sync_at)
        self.sync_start_date = parse_date(self.sync_start_date)

    @property
    def last_sync_at(self) -> Optional[datetime]:
        stamps = [s for s in (self.last_full_sync_at, self.last_incremental_sync_at) if s]
        return max(stamps) if stamps else None

    def to_dict(self) -> dict:
        return {
            "last_full_sync_at": _iso(self.last_full_sync_at),
            "last_incremental_sync_at": _iso(self.last_incremental_sync_at),
            "auto_sync_enabled": self.auto_sync_enabled,
            "auto_sync_interval_hours": self.auto_sync_interval_hours,
            "sync_start_date": _iso(self.sync_start_date),
            "sync_days_back": self.sync_days_back,
            "last_sync_status": self.last_sync_status,
            "last_sync_error": self.last_sync_error,
            "last_sync_added": self.last_sync_added,
            "last_sync_updated": self.last_sync_updated,
        }

    @classmethod
    def from_dict(cls, data: dict, defaults: Optional["SyncState"] = None) -> "SyncState":
        """Build state from a stored dict, taking missing keys from ``defaults``."""
        merged = (defaults or cls()).to_dict()
        merged.update({k: v for k, v in data.items() if k in merged})
        return cls(**merged)
