"""Base repository classes over the whole-document store.

Each repository owns one section of the data document. Operations load the
document, change their section and save it back immediately.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from ...models.identity import SessionIdentity
from ..store import Store

# Type variable for the entity type stored in the repository
T = TypeVar("T")

Clock = Callable[[], datetime]


class DocumentRepository:
    """
    Base class for repositories backed by a section of the data document.

    Attributes:
        store: The document store
        clock: Returns the current time; injectable for deterministic tests
    """

    section: str = ""

    def __init__(self, store: Store, clock: Optional[Clock] = None):
        self.store = store
        self.clock = clock or datetime.now

    def _now(self) -> datetime:
        return self.clock()

    def _load(self) -> Dict[str, Any]:
        return self.store.load()

    def _save(self, document: Dict[str, Any]) -> None:
        self.store.save(document)


class IdentityRepository(DocumentRepository, ABC, Generic[T]):
    """
    Repository of at most one record per session identity.

    Records are stored in a dict keyed by ``SessionIdentity.key``; writes
    replace the whole record for that key.

    Type Parameters:
        T: The record type stored in this repository
    """

    @abstractmethod
    def _from_dict(self, data: Dict[str, Any]) -> T:
        """Deserialize one stored record."""
        pass

    def _records(self, document: Dict[str, Any]) -> Dict[str, Any]:
        return document.setdefault(self.section, {})

    def _put(self, identity: SessionIdentity, data: Dict[str, Any]) -> None:
        document = self._load()
        self._records(document)[identity.key] = data
        self._save(document)

    def get(self, session_id: str, week_number: int) -> Optional[T]:
        """
        Get the record for one session.

        Args:
            session_id: Plan session id
            week_number: Plan week

        Returns:
            The record if present, None otherwise
        """
        key = SessionIdentity(session_id, week_number).key
        data = self._records(self._load()).get(key)
        return self._from_dict(data) if data else None

    def delete(self, session_id: str, week_number: int) -> bool:
        """
        Delete the record for one session.

        Returns:
            True if a record was removed, False if there was none
        """
        key = SessionIdentity(session_id, week_number).key
        document = self._load()
        records = self._records(document)
        if key not in records:
            return False
        del records[key]
        self._save(document)
        return True

    def get_all(self) -> Dict[SessionIdentity, T]:
        return {
            SessionIdentity.from_key(key): self._from_dict(data)
            for key, data in self._records(self._load()).items()
        }

    def list_by_week(self, week_number: int) -> List[T]:
        """All records for one week, in no particular order."""
        return [
            self._from_dict(data)
            for data in self._records(self._load()).values()
            if int(data.get("week_number", 0)) == week_number
        ]
