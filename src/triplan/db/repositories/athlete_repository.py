"""Repository for the athlete profile, current metrics and testing history."""

import logging
from typing import Any, Dict, List, Optional

from ..store import DEFAULT_METRICS, DEFAULT_PROFILE, Store
from .base import Clock, DocumentRepository

logger = logging.getLogger(__name__)


class AthleteRepository(DocumentRepository):
    """Single-athlete profile data. Updates merge into the stored values."""

    def __init__(self, store: Store, clock: Optional[Clock] = None):
        super().__init__(store, clock)

    def get_profile(self) -> Dict[str, Any]:
        return dict(self._load().get("profile") or DEFAULT_PROFILE)

    def update_profile(self, updates: Dict[str, Any]) -> Dict[str, Any]:
        document = self._load()
        profile = dict(document.get("profile") or DEFAULT_PROFILE)
        profile.update(updates)
        profile["updated_at"] = self._now().isoformat()
        document["profile"] = profile
        self._save(document)
        return profile

    def get_metrics(self) -> Dict[str, Any]:
        return dict(self._load().get("metrics") or DEFAULT_METRICS)

    def update_metrics(
        self,
        updates: Dict[str, Any],
        test_type: Optional[str] = None,
        value: Any = None,
        unit: str = "",
        test_date: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Merge new values into the current metrics.

        When ``test_type`` is given the test is also recorded in the testing
        history, so a fresh FTP or CSS result shows up in both places.
        """
        document = self._load()
        metrics = dict(document.get("metrics") or DEFAULT_METRICS)
        metrics.update(updates)
        metrics["updated_at"] = self._now().isoformat()
        document["metrics"] = metrics
        if test_type:
            document.setdefault("testing_history", []).insert(
                0, self._test_entry(test_type, value, unit, test_date, notes)
            )
            logger.info(f"Recorded {test_type} test result")
        self._save(document)
        return metrics

    def add_test_result(
        self,
        test_type: str,
        value: Any,
        unit: str = "",
        test_date: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Add an entry to the testing history (newest first)."""
        entry = self._test_entry(test_type, value, unit, test_date, notes)
        document = self._load()
        document.setdefault("testing_history", []).insert(0, entry)
        self._save(document)
        return entry

    def get_testing_history(self, test_type: Optional[str] = None) -> List[Dict[str, Any]]:
        history = self._load().get("testing_history") or []
        if test_type:
            return [t for t in history if t.get("test_type") == test_type]
        return list(history)

    def _test_entry(
        self,
        test_type: str,
        value: Any,
        unit: str,
        test_date: Optional[str],
        notes: Optional[str],
    ) -> Dict[str, Any]:
        now = self._now()
        return {
            "id": int(now.timestamp() * 1000),
            "test_type": test_type,
            "value": value,
            "unit": unit or "",
            "test_date": test_date or now.date().isoformat(),
            "notes": notes,
            "created_at": now.isoformat(),
        }
