"""Dependency injection for API routes."""

from functools import lru_cache
from typing import Optional

from ..config import get_settings
from ..db.repositories import (
    AthleteRepository,
    CheckinRepository,
    CustomWorkoutRepository,
    ExternalActivityRepository,
    ScheduleOverrideRepository,
    SessionLogRepository,
)
from ..db.store import JsonFileStore, Store
from ..integrations.base import WorkoutFeed
from ..integrations.intervals_icu import IntervalsIcuClient
from ..models.records import SyncState
from ..plan.source import PlanSource, TriathlonPlan
from ..services.calendar_projector import CalendarProjector
from ..services.stats_service import StatsService
from ..services.sync_scheduler import ActivitySyncScheduler
from ..services.sync_service import ExternalActivitySyncService


@lru_cache
def get_plan_source() -> PlanSource:
    """Get the (read-only) training plan."""
    return TriathlonPlan(start_date=get_settings().plan_start_date)


@lru_cache
def get_store() -> Store:
    """Get the data document store."""
    return JsonFileStore(get_settings().data_file)


@lru_cache
def get_session_log_repository() -> SessionLogRepository:
    return SessionLogRepository(get_store())


@lru_cache
def get_schedule_override_repository() -> ScheduleOverrideRepository:
    return ScheduleOverrideRepository(get_store(), get_plan_source())


@lru_cache
def get_custom_workout_repository() -> CustomWorkoutRepository:
    return CustomWorkoutRepository(get_store())


@lru_cache
def get_athlete_repository() -> AthleteRepository:
    return AthleteRepository(get_store())


@lru_cache
def get_checkin_repository() -> CheckinRepository:
    return CheckinRepository(get_store())


@lru_cache
def get_external_activity_repository() -> ExternalActivityRepository:
    """Activity cache; unsaved sync settings fall back to the environment."""
    settings = get_settings()
    defaults = SyncState(
        auto_sync_enabled=settings.auto_sync_enabled,
        auto_sync_interval_hours=settings.auto_sync_interval_hours,
        sync_days_back=settings.sync_days_back,
    )
    return ExternalActivityRepository(get_store(), defaults=defaults)


@lru_cache
def get_workout_feed() -> Optional[WorkoutFeed]:
    """Get the intervals.icu client, or None when credentials are missing."""
    settings = get_settings()
    if not settings.intervals_icu_configured:
        return None
    return IntervalsIcuClient(
        athlete_id=settings.intervals_icu_athlete_id,
        api_key=settings.intervals_icu_api_key,
        base_url=settings.intervals_icu_base_url,
    )


@lru_cache
def get_sync_service() -> ExternalActivitySyncService:
    return ExternalActivitySyncService(get_external_activity_repository(), get_workout_feed())


@lru_cache
def get_sync_scheduler() -> ActivitySyncScheduler:
    return ActivitySyncScheduler(get_sync_service())


@lru_cache
def get_calendar_projector() -> CalendarProjector:
    return CalendarProjector(
        plan_source=get_plan_source(),
        session_logs=get_session_log_repository(),
        overrides=get_schedule_override_repository(),
        custom_workouts=get_custom_workout_repository(),
        activities=get_external_activity_repository(),
    )


@lru_cache
def get_stats_service() -> StatsService:
    return StatsService(
        session_logs=get_session_log_repository(),
        checkins=get_checkin_repository(),
        athlete=get_athlete_repository(),
    )
