"""
API schemas for request/response validation.

This module defines Pydantic models for the request bodies of all API
endpoints. Responses are the domain objects' ``to_dict()`` output.
"""

from datetime import date
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Base Response Models
# ============================================================================

class ErrorDetail(BaseModel):
    """Error detail for API responses."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: ErrorDetail

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": {
                    "code": "WEEK_NOT_FOUND",
                    "message": "No such week: 33",
                }
            }
        }
    )


class SuccessResponse(BaseModel):
    """Simple success response."""

    success: bool = True
    message: Optional[str] = None


# ============================================================================
# Athlete Schemas
# ============================================================================

class ProfileUpdate(BaseModel):
    """Profile fields to merge; unknown fields are kept as-is."""

    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, max_length=100)
    age: Optional[int] = Field(None, ge=10, le=100)
    weight_kg: Optional[float] = Field(None, gt=0, le=300)
    max_hr: Optional[int] = Field(None, ge=100, le=230)


class MetricsUpdate(BaseModel):
    """Current metric values to merge, optionally recorded as a test."""

    model_config = ConfigDict(extra="allow")

    test_type: Optional[str] = Field(None, description="Also record a testing-history entry")
    value: Optional[Any] = None
    unit: Optional[str] = None
    test_date: Optional[date] = None
    notes: Optional[str] = None


class FitnessTestCreate(BaseModel):
    """A fitness test result (FTP, CSS, 5k...)."""

    test_type: str = Field(..., min_length=1, max_length=50)
    value: Any
    unit: str = ""
    test_date: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=1000)


# ============================================================================
# Session Log Schemas
# ============================================================================

class SessionLogRequest(BaseModel):
    """A full session log; replaces any existing log for the session."""

    session_id: str = Field(..., min_length=1)
    week_number: int
    session_date: Optional[date] = None
    session_type: Optional[str] = None
    completed: bool = False
    skipped: bool = False
    skip_reason: Optional[str] = None

    actual_duration_min: Optional[float] = Field(None, ge=0)
    actual_distance_km: Optional[float] = Field(None, ge=0)
    actual_distance_m: Optional[float] = Field(None, ge=0)
    actual_avg_hr: Optional[int] = Field(None, ge=0)
    actual_max_hr: Optional[int] = Field(None, ge=0)
    actual_pace_sec_per_km: Optional[float] = Field(None, ge=0)
    actual_avg_power: Optional[float] = Field(None, ge=0)
    actual_np_power: Optional[float] = Field(None, ge=0)
    actual_tss: Optional[float] = Field(None, ge=0)
    actual_css_pace: Optional[str] = None
    bike_duration_min: Optional[float] = Field(None, ge=0)
    run_duration_min: Optional[float] = Field(None, ge=0)
    foot_numbness_onset_km: Optional[float] = Field(None, ge=0)
    walk_breaks_taken: Optional[int] = Field(None, ge=0)

    completion_rate: Optional[int] = None
    rpe: Optional[int] = Field(None, ge=1, le=10)
    fatigue_before: Optional[int] = Field(None, ge=1, le=10)
    fatigue_after: Optional[int] = Field(None, ge=1, le=10)
    notes: Optional[str] = Field(None, max_length=2000)
    activity_url: Optional[str] = None


class QuickCompleteRequest(BaseModel):
    """Quick complete; omitted fields keep their previous value."""

    completed: bool = True
    session_date: Optional[date] = None
    session_type: Optional[str] = None
    actual_duration_min: Optional[float] = Field(None, ge=0)
    actual_distance_km: Optional[float] = Field(None, ge=0)
    rpe: Optional[int] = Field(None, ge=1, le=10)
    notes: Optional[str] = Field(None, max_length=2000)
    completion_rate: Optional[int] = None


class SkipRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=500)
    session_date: Optional[date] = None
    session_type: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=2000)


# ============================================================================
# Schedule / Custom Workout Schemas
# ============================================================================

class ScheduleOverrideRequest(BaseModel):
    """Move a session to another day of its week."""

    session_id: str = Field(..., min_length=1)
    week_number: int
    new_date: date


class CustomWorkoutRequest(BaseModel):
    session_id: str = Field(..., min_length=1)
    week_number: int = Field(..., ge=1)
    workout: Dict[str, Any] = Field(default_factory=dict)


# ============================================================================
# Check-in / Race Schemas
# ============================================================================

class CheckinRequest(BaseModel):
    """Weekly check-in; extra fields are stored as sent."""

    model_config = ConfigDict(extra="allow")

    week_number: int
    fatigue_level: Optional[int] = Field(None, ge=1, le=10)
    motivation_level: Optional[int] = Field(None, ge=1, le=10)
    sleep_quality: Optional[int] = Field(None, ge=1, le=10)
    foot_issues: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=2000)


class RaceResultCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    race_name: str = Field(..., min_length=1, max_length=200)
    race_date: Optional[date] = None
    race_type: Optional[str] = None
    total_time_seconds: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=2000)


# ============================================================================
# Sync Schemas
# ============================================================================

class SyncRequest(BaseModel):
    """Optional explicit sync window."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None


class SyncConfigUpdate(BaseModel):
    auto_sync_enabled: Optional[bool] = None
    auto_sync_interval_hours: Optional[int] = Field(None, ge=1, le=168)
    sync_start_date: Optional[date] = None
    sync_days_back: Optional[int] = Field(None, ge=1, le=3650)
