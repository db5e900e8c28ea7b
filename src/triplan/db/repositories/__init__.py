"""Repositories over the data document."""

from .base import DocumentRepository, IdentityRepository
from .session_log_repository import SessionLogRepository
from .schedule_override_repository import ScheduleOverrideRepository
from .custom_workout_repository import CustomWorkoutRepository
from .athlete_repository import AthleteRepository
from .checkin_repository import CheckinRepository
from .external_activity_repository import ExternalActivityRepository

__all__ = [
    "DocumentRepository",
    "IdentityRepository",
    "SessionLogRepository",
    "ScheduleOverrideRepository",
    "CustomWorkoutRepository",
    "AthleteRepository",
    "CheckinRepository",
    "ExternalActivityRepository",
]
