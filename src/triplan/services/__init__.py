"""Application services."""

from .calendar_projector import CalendarProjector, compute_weekly_stats
from .stats_service import StatsService
from .sync_merger import MergeResult, merge_activities
from .sync_scheduler import ActivitySyncScheduler
from .sync_service import ExternalActivitySyncService, SyncResult, resolve_sync_window

__all__ = [
    "CalendarProjector",
    "compute_weekly_stats",
    "StatsService",
    "MergeResult",
    "merge_activities",
    "ActivitySyncScheduler",
    "ExternalActivitySyncService",
    "SyncResult",
    "resolve_sync_window",
]
