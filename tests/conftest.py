"""Shared fixtures for TriPlan tests."""

from datetime import datetime

import pytest

from triplan.db.repositories import (
    AthleteRepository,
    CheckinRepository,
    CustomWorkoutRepository,
    ExternalActivityRepository,
    ScheduleOverrideRepository,
    SessionLogRepository,
)
from triplan.db.store import InMemoryStore, JsonFileStore
from triplan.plan.source import TriathlonPlan
from triplan.services.calendar_projector import CalendarProjector


FIXED_NOW = datetime(2026, 2, 10, 9, 30, 0)


@pytest.fixture
def clock():
    """A clock frozen at Tuesday of plan week 3."""
    return lambda: FIXED_NOW


@pytest.fixture
def plan():
    return TriathlonPlan()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "training-data.json"


@pytest.fixture
def file_store(data_file):
    return JsonFileStore(data_file)


@pytest.fixture
def session_logs(store, clock):
    return SessionLogRepository(store, clock=clock)


@pytest.fixture
def overrides(store, plan, clock):
    return ScheduleOverrideRepository(store, plan, clock=clock)


@pytest.fixture
def custom_workouts(store, clock):
    return CustomWorkoutRepository(store, clock=clock)


@pytest.fixture
def athlete(store, clock):
    return AthleteRepository(store, clock=clock)


@pytest.fixture
def checkins(store, clock):
    return CheckinRepository(store, clock=clock)


@pytest.fixture
def activity_repo(store, clock):
    return ExternalActivityRepository(store, clock=clock)


@pytest.fixture
def projector(plan, session_logs, overrides, custom_workouts, activity_repo):
    return CalendarProjector(
        plan_source=plan,
        session_logs=session_logs,
        overrides=overrides,
        custom_workouts=custom_workouts,
        activities=activity_repo,
    )
