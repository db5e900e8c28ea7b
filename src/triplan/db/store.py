"""Whole-document JSON persistence.

All application data lives in a single JSON document. Every operation
loads the full document, changes it and writes it back, so the last
write wins; there is no partial update and no locking.
"""

import copy
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from ..exceptions import StorageError

logger = logging.getLogger(__name__)

DOCUMENT_VERSION = 1

DEFAULT_PROFILE: Dict[str, Any] = {
    "name": "Athlete",
    "age": 28,
    "weight_kg": 75,
    "max_hr": 192,
}

DEFAULT_METRICS: Dict[str, Any] = {
    "ftp_watts": 212,
    "ftp_test_date": None,
    "ftp_test_type": "ramp",
    "ftp_weight_kg": 75,
    "css_seconds_per_100m": 125,
    "css_test_date": None,
    "run_5k_seconds": 1656,
    "run_5k_test_date": None,
    "run_10k_seconds": 3612,
    "run_10k_test_date": None,
    "threshold_pace_per_km_seconds": 315,
    "easy_pace_per_km_seconds": 360,
}


def default_document() -> Dict[str, Any]:
    """A fresh, empty data document."""
    now = datetime.now().isoformat()
    return {
        "version": DOCUMENT_VERSION,
        "profile": dict(DEFAULT_PROFILE, updated_at=now),
        "metrics": dict(DEFAULT_METRICS, updated_at=now),
        "testing_history": [],
        "session_logs": {},
        "weekly_checkins": {},
        "race_results": [],
        "schedule_overrides": {},
        "custom_workouts": {},
        "external_activities": [],
        "sync": {},
    }


class Store(ABC):
    """Loads and saves the whole data document."""

    @abstractmethod
    def load(self) -> Dict[str, Any]:
        """
        Load the data document.

        Returns:
            The document, with defaults filled in for any missing section.

        Raises:
            StorageError: If the document cannot be read or parsed.
        """
        pass

    @abstractmethod
    def save(self, document: Dict[str, Any]) -> None:
        """
        Replace the stored document.

        Raises:
            StorageError: If the document cannot be written.
        """
        pass


def _with_defaults(document: Dict[str, Any]) -> Dict[str, Any]:
    merged = default_document()
    merged.update(document)
    return merged


class JsonFileStore(Store):
    """Store backed by a single JSON file.

    A missing file reads as the default document. Writes go to a temporary
    file in the same directory which then replaces the target, so a crash
    mid-write never leaves a truncated document behind.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> Dict[str, Any]:
        if not self.path.exists():
            logger.debug(f"No data file at {self.path}, using defaults")
            return default_document()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupt data file {self.path}: {e}")
            raise StorageError(
                f"Data file is not valid JSON: {e}",
                operation="load",
                details={"path": str(self.path)},
            )
        except OSError as e:
            logger.error(f"Failed to read data file {self.path}: {e}")
            raise StorageError(
                f"Failed to read data file: {e}",
                operation="load",
                details={"path": str(self.path)},
            )

        if not isinstance(document, dict):
            raise StorageError(
                "Data file does not contain a JSON object",
                operation="load",
                details={"path": str(self.path)},
            )
        return _with_defaults(document)

    def save(self, document: Dict[str, Any]) -> None:
        tmp_path: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write data file {self.path}: {e}")
            raise StorageError(
                f"Failed to write data file: {e}",
                operation="save",
                details={"path": str(self.path)},
            )
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
        logger.debug(f"Saved data file {self.path}")


class InMemoryStore(Store):
    """Store kept in memory, for tests and embedding."""

    def __init__(self, document: Optional[Dict[str, Any]] = None):
        self._document = _with_defaults(copy.deepcopy(document or {}))

    def load(self) -> Dict[str, Any]:
        return copy.deepcopy(self._document)

    def save(self, document: Dict[str, Any]) -> None:
        self._document = copy.deepcopy(document)
