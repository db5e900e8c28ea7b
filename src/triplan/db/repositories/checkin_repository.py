"""Repository for weekly check-ins and race results."""

from typing import Any, Dict, List, Optional

from ...exceptions import ValidationError
from ...plan.library import TOTAL_WEEKS
from ..store import Store
from .base import Clock, DocumentRepository


class CheckinRepository(DocumentRepository):
    """Weekly check-ins keyed by week number, and an append-only race log."""

    def __init__(self, store: Store, clock: Optional[Clock] = None):
        super().__init__(store, clock)

    def upsert_checkin(self, week_number: int, checkin: Dict[str, Any]) -> Dict[str, Any]:
        if not 1 <= week_number <= TOTAL_WEEKS:
            raise ValidationError(
                f"week_number must be between 1 and {TOTAL_WEEKS}, got {week_number}",
                field="week_number",
            )
        entry = dict(checkin)
        entry["week_number"] = week_number
        entry["checkin_date"] = self._now().isoformat()

        document = self._load()
        # JSON object keys are strings
        document.setdefault("weekly_checkins", {})[str(week_number)] = entry
        self._save(document)
        return entry

    def get_checkin(self, week_number: int) -> Optional[Dict[str, Any]]:
        return (self._load().get("weekly_checkins") or {}).get(str(week_number))

    def list_checkins(self) -> List[Dict[str, Any]]:
        checkins = (self._load().get("weekly_checkins") or {}).values()
        return sorted(checkins, key=lambda c: c.get("week_number", 0))

    def add_race_result(self, result: Dict[str, Any]) -> Dict[str, Any]:
        now = self._now()
        entry = {"id": int(now.timestamp() * 1000)}
        entry.update(result)
        entry["created_at"] = now.isoformat()

        document = self._load()
        document.setdefault("race_results", []).append(entry)
        self._save(document)
        return entry

    def list_race_results(self) -> List[Dict[str, Any]]:
        results = self._load().get("race_results") or []
        return sorted(results, key=lambda r: r.get("race_date") or "")
