"""External activity sync service.

Pulls activities from the workout feed, merges them into the cached
collection and records the outcome in the persisted sync state.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Dict, Optional, Tuple

from ..db.repositories import ExternalActivityRepository
from ..db.repositories.base import Clock
from ..exceptions import FeedNotConfiguredError, SyncInProgressError, ValidationError
from ..integrations.base import WorkoutFeed
from ..models.records import SyncState
from .sync_merger import merge_activities

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Result of a sync operation."""
    sync_type: str
    start_date: date
    end_date: date
    fetched: int = 0
    added: int = 0
    updated: int = 0
    total: int = 0
    synced_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sync_type": self.sync_type,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "fetched": self.fetched,
            "added": self.added,
            "updated": self.updated,
            "total": self.total,
            "synced_at": self.synced_at.isoformat() if self.synced_at else None,
        }


def resolve_sync_window(
    state: SyncState,
    today: date,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> Tuple[date, date]:
    """
    Date range to fetch.

    An explicit ``start`` wins, then the configured ``sync_start_date``,
    then ``today - sync_days_back``. The range ends today unless ``end``
    is given.
    """
    end_date = end or today
    if start is not None:
        start_date = start
    elif state.sync_start_date is not None:
        start_date = state.sync_start_date
    else:
        start_date = today - timedelta(days=state.sync_days_back)

    if start_date > end_date:
        raise ValidationError(
            f"Sync start {start_date.isoformat()} is after end {end_date.isoformat()}",
            field="start_date",
        )
    return start_date, end_date


class ExternalActivitySyncService:
    """
    Runs activity syncs, one at a time.

    The feed is fetched before the data document is loaded, so writes made
    while a fetch is in flight are kept. A failed fetch leaves the cached
    activities untouched and records the error in the sync state.

    Usage:
        service = ExternalActivitySyncService(repo, IntervalsIcuClient(...))
        result = await service.sync()
    """

    def __init__(
        self,
        activities: ExternalActivityRepository,
        feed: Optional[WorkoutFeed] = None,
        clock: Optional[Clock] = None,
    ):
        self.activities = activities
        self.feed = feed
        self.clock = clock or datetime.now
        self._busy = False

    @property
    def is_configured(self) -> bool:
        return self.feed is not None

    @property
    def is_syncing(self) -> bool:
        return self._busy

    def get_sync_state(self) -> SyncState:
        return self.activities.get_sync_state()

    def update_config(self, **changes: Any) -> SyncState:
        return self.activities.update_sync_config(**changes)

    async def sync(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> SyncResult:
        """
        Fetch, normalize and merge external activities.

        Args:
            start: Explicit window start; overrides the configured start
            end: Explicit window end; defaults to today

        Returns:
            SyncResult with added/updated counts

        Raises:
            FeedNotConfiguredError: If no feed is configured
            SyncInProgressError: If another sync is running
            IntegrationError: If the feed fails (cache left untouched)
            StorageError: If the document cannot be written
        """
        if self.feed is None:
            raise FeedNotConfiguredError()
        if self._busy:
            raise SyncInProgressError()

        self._busy = True
        try:
            return await self._run(start, end)
        finally:
            self._busy = False

    async def _run(self, start: Optional[date], end: Optional[date]) -> SyncResult:
        now = self.clock()
        state = self.activities.get_sync_state()
        start_date, end_date = resolve_sync_window(state, now.date(), start, end)
        sync_type = "incremental" if state.last_full_sync_at else "full"
        logger.info(f"Starting {sync_type} activity sync ({start_date} to {end_date})")

        try:
            raw = await self.feed.fetch_activities(start_date, end_date)
            incoming = [self.feed.normalize(item) for item in raw]
        except Exception as e:
            logger.error(f"Activity sync failed: {e}")
            self._record_failure(str(e))
            raise

        # Load only after the fetch so concurrent writes are not overwritten
        existing = self.activities.list_activities()
        merge = merge_activities(existing, incoming, now)

        state = self.activities.get_sync_state()
        if sync_type == "full":
            state.last_full_sync_at = now
        else:
            state.last_incremental_sync_at = now
        state.last_sync_status = "success"
        state.last_sync_error = None
        state.last_sync_added = merge.added
        state.last_sync_updated = merge.updated
        self.activities.save_sync_result(merge.merged, state)

        logger.info(
            f"Activity sync complete: {merge.added} added, "
            f"{merge.updated} updated, {merge.total} total"
        )
        return SyncResult(
            sync_type=sync_type,
            start_date=start_date,
            end_date=end_date,
            fetched=len(incoming),
            added=merge.added,
            updated=merge.updated,
            total=merge.total,
            synced_at=now,
        )

    def _record_failure(self, message: str) -> None:
        state = self.activities.get_sync_state()
        state.last_sync_status = "error"
        state.last_sync_error = message
        self.activities.save_sync_state(state)

    def clear_all(self) -> int:
        """
        Delete all cached activities and reset sync timestamps.

        Raises:
            SyncInProgressError: If a sync is running
        """
        if self._busy:
            raise SyncInProgressError()
        return self.activities.clear_all()

    def status(self) -> Dict[str, Any]:
        state = self.activities.get_sync_state()
        result = state.to_dict()
        last = state.last_sync_at
        result.update({
            "configured": self.is_configured,
            "is_syncing": self._busy,
            "last_sync_at": last.isoformat() if last else None,
            "activity_count": len(self.activities.list_activities()),
        })
        return result
