"""Repository for per-session schedule overrides (drag-and-drop moves)."""

import logging
from datetime import date
from typing import Any, Dict, Optional, Union

from ...exceptions import InvalidScheduleDateError
from ...models.records import ScheduleOverride, parse_date
from ...plan.source import PlanSource
from ..store import Store
from .base import Clock, IdentityRepository

logger = logging.getLogger(__name__)


class ScheduleOverrideRepository(IdentityRepository[ScheduleOverride]):
    """
    Stores at most one ScheduleOverride per (session_id, week_number).

    A session may only move within its own plan week, so every write is
    validated against the week's seven dates before anything is saved.
    """

    section = "schedule_overrides"

    def __init__(self, store: Store, plan_source: PlanSource, clock: Optional[Clock] = None):
        super().__init__(store, clock)
        self.plan_source = plan_source

    def _from_dict(self, data: Dict[str, Any]) -> ScheduleOverride:
        return ScheduleOverride.from_dict(data)

    def _validate_date(self, session_id: str, week_number: int, new_date: Union[date, str]) -> date:
        dates = self.plan_source.get_week_dates(week_number)
        try:
            parsed = parse_date(new_date)
        except ValueError:
            parsed = None
        if dates is None or parsed is None or not dates.contains(parsed):
            raise InvalidScheduleDateError(
                session_id=session_id,
                week_number=week_number,
                new_date=str(new_date),
                allowed_dates=[d.date.isoformat() for d in dates.days] if dates else None,
            )
        return parsed

    def set(self, session_id: str, week_number: int, new_date: Union[date, str]) -> ScheduleOverride:
        """
        Move a session to another day of its week.

        Overwrites any previous override for the same session.

        Raises:
            InvalidScheduleDateError: If ``new_date`` is not one of the
                week's seven dates (nothing is written)
            StorageError: If the document cannot be written
        """
        target = self._validate_date(session_id, week_number, new_date)
        override = ScheduleOverride(
            session_id=session_id,
            week_number=week_number,
            new_date=target,
            updated_at=self._now(),
        )
        self._put(override.identity, override.to_dict())
        logger.debug(f"Session {override.identity.key} moved to {target.isoformat()}")
        return override

    def clear(self, session_id: str, week_number: int) -> bool:
        """Remove an override, restoring the default date. True if one existed."""
        return self.delete(session_id, week_number)

    def move(self, session_id: str, week_number: int, new_date: Union[date, str]) -> Optional[ScheduleOverride]:
        """
        Drop a session onto a day.

        Dropping it back on its default day clears the override instead of
        storing one equal to the default.

        Returns:
            The stored override, or None if the override was cleared
        """
        target = self._validate_date(session_id, week_number, new_date)
        week = self.plan_source.get_week(week_number)
        planned = week.get_session(session_id) if week else None
        if planned is not None and planned.date == target:
            self.clear(session_id, week_number)
            return None
        return self.set(session_id, week_number, target)
