"""
Custom exceptions for TriPlan.

This module defines a hierarchy of exceptions that provide clear error
handling throughout the application. Each exception includes:
- A descriptive message
- An error code for API responses
- HTTP status code mapping
- Optional details for debugging
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent API error responses."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # Plan / calendar errors
    WEEK_NOT_FOUND = "WEEK_NOT_FOUND"
    INVALID_SCHEDULE_DATE = "INVALID_SCHEDULE_DATE"

    # Session log errors
    SESSION_LOG_NOT_FOUND = "SESSION_LOG_NOT_FOUND"
    SESSION_LOG_VALIDATION_ERROR = "SESSION_LOG_VALIDATION_ERROR"

    # Sync errors
    SYNC_IN_PROGRESS = "SYNC_IN_PROGRESS"
    FEED_NOT_CONFIGURED = "FEED_NOT_CONFIGURED"

    # Storage errors
    STORAGE_ERROR = "STORAGE_ERROR"


class TriPlanError(Exception):
    """
    Base exception for all TriPlan errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code for API responses
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors (400)
# ============================================================================

class ValidationError(TriPlanError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=error_details,
        )


class SessionLogValidationError(ValidationError):
    """Raised when a session log fails validation."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, field=field, details=details)
        self.code = ErrorCode.SESSION_LOG_VALIDATION_ERROR


class InvalidScheduleDateError(ValidationError):
    """Raised when a reschedule target date falls outside the session's week."""

    def __init__(
        self,
        session_id: str,
        week_number: int,
        new_date: str,
        allowed_dates: Optional[list] = None,
    ) -> None:
        details: Dict[str, Any] = {
            "session_id": session_id,
            "week_number": week_number,
            "new_date": new_date,
        }
        if allowed_dates:
            details["allowed_dates"] = allowed_dates
        super().__init__(
            message=f"Date {new_date} is not within week {week_number} of the plan",
            field="new_date",
            details=details,
        )
        self.code = ErrorCode.INVALID_SCHEDULE_DATE


# ============================================================================
# Not Found Errors (404)
# ============================================================================

class NotFoundError(TriPlanError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        if message is None:
            if resource_id:
                message = f"{resource_type} with ID '{resource_id}' not found"
            else:
                message = f"{resource_type} not found"

        details: Dict[str, Any] = {"resource_type": resource_type}
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            code=ErrorCode.NOT_FOUND,
            status_code=404,
            details=details,
        )


class WeekNotFoundError(NotFoundError):
    """Raised when a week number has no plan data."""

    def __init__(self, week_number: int) -> None:
        super().__init__(
            resource_type="Week",
            resource_id=str(week_number),
            message=f"No such week: {week_number}",
        )
        self.code = ErrorCode.WEEK_NOT_FOUND


class SessionLogNotFoundError(NotFoundError):
    """Raised when no log exists for a session identity."""

    def __init__(self, session_id: str, week_number: int) -> None:
        super().__init__(
            resource_type="SessionLog",
            resource_id=f"{session_id}_{week_number}",
        )
        self.code = ErrorCode.SESSION_LOG_NOT_FOUND


# ============================================================================
# Conflict Errors (409)
# ============================================================================

class ConflictError(TriPlanError):
    """Raised when there's a conflict with existing data."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.CONFLICT,
            status_code=409,
            details=details,
        )


class SyncInProgressError(ConflictError):
    """Raised when a sync is requested while another one is still running."""

    def __init__(self) -> None:
        super().__init__(message="A sync is already in progress")
        self.code = ErrorCode.SYNC_IN_PROGRESS


# ============================================================================
# Storage Errors (500)
# ============================================================================

class StorageError(TriPlanError):
    """Raised when the data document cannot be read or written."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if operation:
            error_details["operation"] = operation
        super().__init__(
            message=message,
            code=ErrorCode.STORAGE_ERROR,
            status_code=500,
            details=error_details,
        )


# ============================================================================
# Configuration Errors (501)
# ============================================================================

class FeedNotConfiguredError(TriPlanError):
    """Raised when intervals.icu credentials are missing."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            message=message or (
                "intervals.icu is not configured. "
                "Set TRIPLAN_INTERVALS_ICU_ATHLETE_ID and TRIPLAN_INTERVALS_ICU_API_KEY."
            ),
            code=ErrorCode.FEED_NOT_CONFIGURED,
            status_code=501,
        )
