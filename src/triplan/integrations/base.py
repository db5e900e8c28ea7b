"""
Base classes for workout feed integrations.

A feed yields raw activity records for a date range and knows how to turn
one raw record into an :class:`ExternalActivity`. Feeds never touch the
store; merging is the sync service's job.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, List, Optional

from ..models.records import ExternalActivity


class IntegrationError(Exception):
    """Base exception for integration errors."""

    status_code: int = 502

    def __init__(self, message: str, provider: str = "", code: Optional[str] = None):
        self.message = message
        self.provider = provider
        self.code = code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the API error body."""
        details: Dict[str, Any] = {"provider": self.provider}
        if self.code:
            details["provider_code"] = self.code
        return {
            "error": {
                "code": "INTEGRATION_ERROR",
                "message": self.message,
                "details": details,
            }
        }


class RateLimitError(IntegrationError):
    """Rate limit exceeded."""

    status_code = 429

    def __init__(
        self,
        message: str,
        provider: str,
        retry_after: Optional[int] = None,
    ):
        self.retry_after = retry_after
        super().__init__(message, provider, "rate_limit")


class AuthenticationError(IntegrationError):
    """Authentication failed (bad API key or athlete id)."""

    status_code = 401


class NetworkError(IntegrationError):
    """The provider could not be reached."""

    status_code = 503

    def __init__(self, message: str, provider: str = ""):
        super().__init__(message, provider, "network")


class WorkoutFeed(ABC):
    """
    Abstract source of externally recorded activities.
    """

    provider: str = "base"

    @abstractmethod
    async def fetch_activities(self, start: date, end: date) -> List[Dict[str, Any]]:
        """
        Fetch raw activities between two dates (inclusive).

        Args:
            start: Oldest activity date.
            end: Newest activity date.

        Returns:
            Raw activity records as returned by the provider.

        Raises:
            AuthenticationError: If credentials are rejected.
            RateLimitError: If the provider throttles the request.
            NetworkError: If the provider cannot be reached.
        """
        pass

    @abstractmethod
    def normalize(self, raw: Dict[str, Any]) -> ExternalActivity:
        """
        Map one raw record to an ExternalActivity. Pure, no I/O.
        """
        pass

    async def test_connection(self) -> bool:
        """Check that the feed accepts the configured credentials."""
        today = date.today()
        try:
            await self.fetch_activities(today, today)
        except IntegrationError:
            return False
        return True

    async def close(self) -> None:
        """Release any open connections."""
        return None
