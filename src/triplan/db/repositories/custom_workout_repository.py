"""Repository for athlete-edited workout content."""

from typing import Any, Dict, Optional

from ...exceptions import ValidationError
from ...models.records import CustomWorkout
from ..store import Store
from .base import Clock, IdentityRepository


class CustomWorkoutRepository(IdentityRepository[CustomWorkout]):
    """Stores at most one custom workout per (session_id, week_number)."""

    section = "custom_workouts"

    def __init__(self, store: Store, clock: Optional[Clock] = None):
        super().__init__(store, clock)

    def _from_dict(self, data: Dict[str, Any]) -> CustomWorkout:
        return CustomWorkout.from_dict(data)

    def upsert(self, session_id: str, week_number: int, workout: Dict[str, Any]) -> CustomWorkout:
        if not session_id:
            raise ValidationError("session_id is required", field="session_id")
        custom = CustomWorkout(
            session_id=session_id,
            week_number=week_number,
            workout=dict(workout),
            updated_at=self._now(),
        )
        self._put(custom.identity, custom.to_dict())
        return custom
