"""Repository for session logs."""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from ...exceptions import SessionLogValidationError
from ...models.plan import Discipline
from ...models.records import SessionLog
from ...plan.library import TOTAL_WEEKS
from ..store import Store
from .base import Clock, IdentityRepository

logger = logging.getLogger(__name__)

# Fields a quick complete/skip may change; everything else keeps the prior value
QUICK_UPDATE_FIELDS = frozenset({
    "session_date",
    "session_type",
    "actual_duration_min",
    "actual_distance_km",
    "rpe",
    "notes",
    "completion_rate",
})


class SessionLogRepository(IdentityRepository[SessionLog]):
    """
    Stores at most one SessionLog per (session_id, week_number).

    ``upsert`` replaces the whole record. ``mark_complete`` and
    ``mark_skipped`` are the only paths that merge with the prior record.
    """

    section = "session_logs"

    def __init__(self, store: Store, clock: Optional[Clock] = None):
        super().__init__(store, clock)

    def _from_dict(self, data: Dict[str, Any]) -> SessionLog:
        return SessionLog.from_dict(data)

    def upsert(self, log: SessionLog) -> SessionLog:
        """
        Create or fully replace the log for a session.

        Args:
            log: The log to store; ``updated_at`` is stamped here

        Returns:
            The stored log

        Raises:
            SessionLogValidationError: If the week is outside the plan or the
                completion rate is out of range
            StorageError: If the document cannot be written
        """
        if not 1 <= log.week_number <= TOTAL_WEEKS:
            raise SessionLogValidationError(
                f"week_number must be between 1 and {TOTAL_WEEKS}, got {log.week_number}",
                field="week_number",
            )
        if not log.session_id:
            raise SessionLogValidationError("session_id is required", field="session_id")
        log.validate()

        log.updated_at = self._now()
        self._put(log.identity, log.to_dict())
        logger.debug(f"Saved session log {log.identity.key}")
        return log

    def list_all(self) -> List[SessionLog]:
        """All logs ordered by week, then session date."""
        logs = [self._from_dict(data) for data in self._records(self._load()).values()]
        return sorted(logs, key=lambda log: (log.week_number, log.session_date or date.min))

    def mark_complete(
        self,
        session_id: str,
        week_number: int,
        completed: bool = True,
        **updates: Any,
    ) -> SessionLog:
        """
        Quick-complete (or un-complete) a session, keeping prior log values.

        Args:
            session_id: Plan session id
            week_number: Plan week
            completed: False to clear the completed flag
            **updates: Values for any of ``QUICK_UPDATE_FIELDS``; None is ignored

        Returns:
            The stored log
        """
        log = self._merged(session_id, week_number, updates)
        if completed:
            log.mark_completed()
        else:
            log.completed = False
            log.skipped = False
            log.skip_reason = None
        return self.upsert(log)

    def mark_skipped(
        self,
        session_id: str,
        week_number: int,
        reason: Optional[str] = None,
        **updates: Any,
    ) -> SessionLog:
        """Mark a session skipped, keeping prior log values."""
        log = self._merged(session_id, week_number, updates)
        log.mark_skipped(reason)
        return self.upsert(log)

    def _merged(self, session_id: str, week_number: int, updates: Dict[str, Any]) -> SessionLog:
        unknown = set(updates) - QUICK_UPDATE_FIELDS
        if unknown:
            raise SessionLogValidationError(
                f"Unsupported fields for a quick update: {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)},
            )

        existing = self.get(session_id, week_number)
        data = existing.to_dict() if existing else {
            "session_id": session_id,
            "week_number": week_number,
            "session_date": self._now().date(),
            "session_type": Discipline.UNKNOWN,
        }
        data.update({k: v for k, v in updates.items() if v is not None})
        return SessionLog.from_dict(data)
