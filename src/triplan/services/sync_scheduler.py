"""Periodic activity sync using APScheduler.

Re-runs the intervals.icu sync every ``auto_sync_interval_hours`` while
auto-sync is enabled in the persisted sync state.
"""

import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..exceptions import SyncInProgressError
from ..models.records import SyncState
from .sync_service import ExternalActivitySyncService

logger = logging.getLogger(__name__)

JOB_ID = "intervals_icu_auto_sync"


class ActivitySyncScheduler:
    """Manages the auto-sync job.

    Usage:
        scheduler = ActivitySyncScheduler(sync_service)
        scheduler.start()
        # ... app runs ...
        scheduler.stop()
    """

    def __init__(self, sync_service: ExternalActivitySyncService):
        self.sync_service = sync_service
        self.scheduler: Optional[AsyncIOScheduler] = None
        self._is_running = False

    @property
    def is_running(self) -> bool:
        """Check if the scheduler is running."""
        return self._is_running and self.scheduler is not None

    def start(self) -> None:
        """Start the interval job if auto-sync is enabled and a feed is configured."""
        if self._is_running:
            logger.warning("Sync scheduler is already running")
            return

        if not self.sync_service.is_configured:
            logger.info("intervals.icu is not configured, auto-sync disabled")
            return

        state = self.sync_service.get_sync_state()
        if not state.auto_sync_enabled:
            logger.info("Auto-sync is disabled in sync settings")
            return

        self.scheduler = AsyncIOScheduler()
        self.scheduler.add_job(
            self._run_sync,
            IntervalTrigger(hours=state.auto_sync_interval_hours),
            id=JOB_ID,
            name="intervals.icu Auto Sync",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self.scheduler.start()
        self._is_running = True
        logger.info(f"Sync scheduler started (every {state.auto_sync_interval_hours}h)")

    def stop(self) -> None:
        """Gracefully shutdown the scheduler."""
        if not self._is_running or self.scheduler is None:
            return

        logger.info("Shutting down sync scheduler...")
        self.scheduler.shutdown(wait=True)
        self._is_running = False
        self.scheduler = None
        logger.info("Sync scheduler stopped")

    def reschedule(self, state: SyncState) -> None:
        """Apply changed sync settings to the running job."""
        if not state.auto_sync_enabled:
            self.stop()
            return
        if not self.is_running:
            self.start()
            return
        self.scheduler.reschedule_job(
            JOB_ID,
            trigger=IntervalTrigger(hours=state.auto_sync_interval_hours),
        )
        logger.info(f"Auto-sync rescheduled to every {state.auto_sync_interval_hours}h")

    async def _run_sync(self) -> None:
        """Scheduled job body; failures are logged, never raised into APScheduler."""
        try:
            result = await self.sync_service.sync()
        except SyncInProgressError:
            logger.info("Skipping scheduled sync, a sync is already running")
            return
        except Exception as e:
            logger.error(f"Scheduled sync failed: {e}")
            return
        logger.info(
            f"Scheduled sync complete: {result.added} added, {result.updated} updated"
        )
