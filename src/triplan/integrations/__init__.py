"""External workout feed integrations."""

from .base import (
    AuthenticationError,
    IntegrationError,
    NetworkError,
    RateLimitError,
    WorkoutFeed,
)
from .intervals_icu import IntervalsIcuClient, classify_activity_type, normalize_activity

__all__ = [
    "AuthenticationError",
    "IntegrationError",
    "NetworkError",
    "RateLimitError",
    "WorkoutFeed",
    "IntervalsIcuClient",
    "classify_activity_type",
    "normalize_activity",
]
