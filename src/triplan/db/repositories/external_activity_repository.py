"""Repository for synced external activities and sync bookkeeping."""

import logging
from datetime import date
from typing import Any, List, Optional

from ...exceptions import ValidationError
from ...models.records import ExternalActivity, SyncState
from ..store import Store
from .base import Clock, DocumentRepository

logger = logging.getLogger(__name__)

SYNC_CONFIG_FIELDS = frozenset({
    "auto_sync_enabled",
    "auto_sync_interval_hours",
    "sync_start_date",
    "sync_days_back",
})

# Config fields where None means "unset"
NULLABLE_CONFIG_FIELDS = frozenset({"sync_start_date"})


class ExternalActivityRepository(DocumentRepository):
    """
    The cached activity collection plus the persisted sync state.

    Activities are only ever written as a whole merged collection by the
    sync service, or wiped by ``clear_all``.
    """

    section = "external_activities"

    def __init__(
        self,
        store: Store,
        clock: Optional[Clock] = None,
        defaults: Optional[SyncState] = None,
    ):
        super().__init__(store, clock)
        self.defaults = defaults or SyncState()

    def list_activities(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[ExternalActivity]:
        """Stored activities, newest first, optionally limited to a date range."""
        activities = [
            ExternalActivity.from_dict(data)
            for data in self._load().get(self.section) or []
        ]
        if start is not None:
            activities = [a for a in activities if a.date is not None and a.date >= start]
        if end is not None:
            activities = [a for a in activities if a.date is not None and a.date <= end]
        return activities

    def get_sync_state(self) -> SyncState:
        return SyncState.from_dict(self._load().get("sync") or {}, defaults=self.defaults)

    def update_sync_config(self, **changes: Any) -> SyncState:
        """Change the sync settings; bookkeeping fields are not writable here."""
        unknown = set(changes) - SYNC_CONFIG_FIELDS
        if unknown:
            raise ValidationError(
                f"Not a sync config field: {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)},
            )
        nulls = sorted(k for k, v in changes.items() if v is None and k not in NULLABLE_CONFIG_FIELDS)
        if nulls:
            raise ValidationError(
                f"Sync config field cannot be null: {', '.join(nulls)}",
                details={"fields": nulls},
            )

        document = self._load()
        data = SyncState.from_dict(document.get("sync") or {}, defaults=self.defaults).to_dict()
        data.update(changes)
        state = SyncState(**data)
        document["sync"] = state.to_dict()
        self._save(document)
        return state

    def save_sync_result(self, activities: List[ExternalActivity], state: SyncState) -> None:
        """Write the merged collection and the sync state in one save."""
        document = self._load()
        document[self.section] = [a.to_dict() for a in activities]
        document["sync"] = state.to_dict()
        self._save(document)

    def save_sync_state(self, state: SyncState) -> None:
        document = self._load()
        document["sync"] = state.to_dict()
        self._save(document)

    def clear_all(self) -> int:
        """
        Delete every cached activity and reset sync timestamps.

        Returns:
            The number of activities removed
        """
        document = self._load()
        count = len(document.get(self.section) or [])
        state = SyncState.from_dict(document.get("sync") or {}, defaults=self.defaults)
        state.last_full_sync_at = None
        state.last_incremental_sync_at = None
        state.last_sync_status = "never"
        state.last_sync_error = None
        state.last_sync_added = 0
        state.last_sync_updated = 0
        document[self.section] = []
        document["sync"] = state.to_dict()
        self._save(document)
        logger.info(f"Cleared {count} external activities")
        return count
