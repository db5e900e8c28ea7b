"""Tests for the TriPlan API routes."""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from triplan.api import deps
from triplan.db.repositories import (
    AthleteRepository,
    CheckinRepository,
    CustomWorkoutRepository,
    ExternalActivityRepository,
    ScheduleOverrideRepository,
    SessionLogRepository,
)
from triplan.db.store import InMemoryStore
from triplan.main import app
from triplan.models.records import ExternalActivity, SyncState
from triplan.plan.source import TriathlonPlan
from triplan.services.calendar_projector import CalendarProjector
from triplan.services.stats_service import StatsService
from triplan.services.sync_scheduler import ActivitySyncScheduler
from triplan.services.sync_service import ExternalActivitySyncService


# Test client
client = TestClient(app)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def wired(clock):
    """Point every dependency at one in-memory store."""
    store = InMemoryStore()
    plan = TriathlonPlan()
    session_logs = SessionLogRepository(store, clock=clock)
    overrides = ScheduleOverrideRepository(store, plan, clock=clock)
    custom_workouts = CustomWorkoutRepository(store, clock=clock)
    athlete = AthleteRepository(store, clock=clock)
    checkins = CheckinRepository(store, clock=clock)
    activities = ExternalActivityRepository(store, clock=clock)
    sync_service = ExternalActivitySyncService(activities, feed=None, clock=clock)
    scheduler = ActivitySyncScheduler(sync_service)
    projector = CalendarProjector(plan, session_logs, overrides, custom_workouts, activities)
    stats = StatsService(session_logs, checkins, athlete)

    overrides_map = {
        deps.get_plan_source: lambda: plan,
        deps.get_store: lambda: store,
        deps.get_session_log_repository: lambda: session_logs,
        deps.get_schedule_override_repository: lambda: overrides,
        deps.get_custom_workout_repository: lambda: custom_workouts,
        deps.get_athlete_repository: lambda: athlete,
        deps.get_checkin_repository: lambda: checkins,
        deps.get_external_activity_repository: lambda: activities,
        deps.get_workout_feed: lambda: None,
        deps.get_sync_service: lambda: sync_service,
        deps.get_sync_scheduler: lambda: scheduler,
        deps.get_calendar_projector: lambda: projector,
        deps.get_stats_service: lambda: stats,
    }
    app.dependency_overrides.update(overrides_map)

    yield {"store": store, "activities": activities, "sync_service": sync_service}

    for dependency in overrides_map:
        app.dependency_overrides.pop(dependency, None)


# ============================================================================
# Health
# ============================================================================

class TestHealth:
    def test_root(self):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "TriPlan API"

    def test_health(self):
        assert client.get("/health").json() == {"status": "healthy"}


# ============================================================================
# Plan and calendar
# ============================================================================

class TestPlanRoutes:
    """Tests for /api/v1/plan."""

    def test_list_weeks(self):
        weeks = client.get("/api/v1/plan/weeks").json()

        assert len(weeks) == 32
        assert weeks[0]["start"] == "2026-01-26"

    def test_get_week(self):
        week = client.get("/api/v1/plan/weeks/3").json()

        assert week["week_number"] == 3
        assert len(week["dates"]["days"]) == 7
        assert any(s["id"] == "w3_run_tempo_20min" for s in week["sessions"])

    def test_unknown_week(self):
        response = client.get("/api/v1/plan/weeks/33")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "WEEK_NOT_FOUND"

    def test_races(self):
        races = client.get("/api/v1/plan/races").json()

        assert races[0]["week"] == 9
        assert races[0]["date"] == "2026-03-28"
        assert races[-1]["date"] == "2026-09-06"

    def test_current_week(self):
        response = client.get("/api/v1/plan/current", params={"on": "2026-02-11"})

        assert response.json() == {"date": "2026-02-11", "week_number": 3}

    def test_current_week_outside_plan(self):
        response = client.get("/api/v1/plan/current", params={"on": "2025-01-01"})

        assert response.status_code == 404

    def test_calendar(self):
        data = client.get("/api/v1/plan/calendar/3").json()

        assert data["week_number"] == 3
        assert [d["date"] for d in data["days"]][0] == "2026-02-09"
        assert data["stats"]["completed_sessions"] == 0

    def test_calendar_unknown_week(self):
        assert client.get("/api/v1/plan/calendar/33").status_code == 404


# ============================================================================
# Session logs
# ============================================================================

class TestSessionRoutes:
    """Tests for /api/v1/sessions."""

    def test_upsert_and_get(self):
        response = client.post("/api/v1/sessions", json={
            "session_id": "w1_bike_ftp_test",
            "week_number": 1,
            "session_date": "2026-01-27",
            "session_type": "bike",
            "completed": True,
            "actual_avg_power": 215,
        })

        assert response.status_code == 200
        stored = client.get("/api/v1/sessions/w1_bike_ftp_test/1").json()
        assert stored["completed"] is True
        assert stored["actual_avg_power"] == 215

    def test_get_missing(self):
        response = client.get("/api/v1/sessions/w1_bike_ftp_test/1")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SESSION_LOG_NOT_FOUND"

    def test_completion_rate_out_of_range(self):
        response = client.post("/api/v1/sessions", json={
            "session_id": "w1_bike_ftp_test",
            "week_number": 1,
            "completion_rate": 150,
        })

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "SESSION_LOG_VALIDATION_ERROR"

    def test_week_outside_plan(self):
        response = client.post("/api/v1/sessions", json={"session_id": "x", "week_number": 33})

        assert response.status_code == 400

    def test_quick_complete_then_skip(self):
        client.patch("/api/v1/sessions/w3_run_tempo_20min/3/complete", json={"rpe": 7})

        skipped = client.patch("/api/v1/sessions/w3_run_tempo_20min/3/skip", json={"reason": "sick"}).json()

        assert skipped["skipped"] is True
        assert skipped["completed"] is False
        assert skipped["rpe"] == 7

    def test_completed_shows_in_calendar(self):
        client.patch("/api/v1/sessions/w3_run_tempo_20min/3/complete", json={})

        data = client.get("/api/v1/plan/calendar/3").json()

        assert data["stats"]["completed_sessions"] == 1

    def test_week_listing_and_delete(self):
        client.patch("/api/v1/sessions/w3_run_tempo_20min/3/complete", json={})

        assert len(client.get("/api/v1/sessions/week/3").json()) == 1
        assert client.delete("/api/v1/sessions/w3_run_tempo_20min/3").json() == {"success": True}
        assert client.delete("/api/v1/sessions/w3_run_tempo_20min/3").json() == {"success": False}
        assert client.get("/api/v1/sessions").json() == []


# ============================================================================
# Schedule overrides
# ============================================================================

class TestScheduleRoutes:
    """Tests for /api/v1/schedule-overrides."""

    def test_set_and_list(self):
        response = client.post("/api/v1/schedule-overrides", json={
            "session_id": "w3_run_tempo_20min",
            "week_number": 3,
            "new_date": "2026-02-13",
        })

        assert response.status_code == 200
        assert client.get("/api/v1/schedule-overrides/week/3").json()[0]["new_date"] == "2026-02-13"

    def test_date_outside_week(self):
        response = client.post("/api/v1/schedule-overrides", json={
            "session_id": "w3_run_tempo_20min",
            "week_number": 3,
            "new_date": "2099-01-01",
        })

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_SCHEDULE_DATE"
        assert client.get("/api/v1/schedule-overrides").json() == []

    def test_move_and_move_back(self):
        moved = client.post("/api/v1/schedule-overrides/move", json={
            "session_id": "w3_run_tempo_20min",
            "week_number": 3,
            "new_date": "2026-02-12",
        }).json()
        assert moved["rescheduled"] is True

        back = client.post("/api/v1/schedule-overrides/move", json={
            "session_id": "w3_run_tempo_20min",
            "week_number": 3,
            "new_date": "2026-02-11",
        }).json()

        assert back == {"rescheduled": False, "override": None}
        assert client.get("/api/v1/schedule-overrides").json() == []

    def test_moved_session_in_calendar(self):
        client.post("/api/v1/schedule-overrides", json={
            "session_id": "w3_run_tempo_20min",
            "week_number": 3,
            "new_date": "2026-02-13",
        })

        days = {d["date"]: d for d in client.get("/api/v1/plan/calendar/3").json()["days"]}
        friday = [s for s in days["2026-02-13"]["sessions"] if s["id"] == "w3_run_tempo_20min"]

        assert friday[0]["rescheduled"] is True
        assert friday[0]["default_date"] == "2026-02-11"

    def test_clear(self):
        client.post("/api/v1/schedule-overrides", json={
            "session_id": "w3_run_tempo_20min",
            "week_number": 3,
            "new_date": "2026-02-13",
        })

        response = client.delete("/api/v1/schedule-overrides/w3_run_tempo_20min/3")

        assert response.json() == {"success": True}


# ============================================================================
# Athlete, check-ins, races, custom workouts, stats
# ============================================================================

class TestAthleteRoutes:
    """Tests for /api/v1/athlete."""

    def test_update_profile(self):
        profile = client.put("/api/v1/athlete/profile", json={"name": "Sam"}).json()

        assert profile["name"] == "Sam"
        assert profile["max_hr"] == 192

    def test_update_metrics_with_test(self):
        metrics = client.put("/api/v1/athlete/metrics", json={
            "ftp_watts": 230,
            "test_type": "ftp",
            "value": 230,
            "unit": "W",
        }).json()

        assert metrics["ftp_watts"] == 230
        assert "test_type" not in metrics
        history = client.get("/api/v1/athlete/testing-history", params={"test_type": "ftp"}).json()
        assert history[0]["value"] == 230

    def test_add_test_result(self):
        response = client.post("/api/v1/athlete/testing-history", json={
            "test_type": "css",
            "value": 122,
            "unit": "s/100m",
            "test_date": "2026-01-29",
        })

        assert response.status_code == 201
        assert response.json()["test_date"] == "2026-01-29"


class TestCheckinAndRaceRoutes:
    def test_checkin(self):
        client.post("/api/v1/checkins", json={"week_number": 3, "fatigue_level": 6, "foot_issues": "none"})

        checkin = client.get("/api/v1/checkins/3").json()

        assert checkin["fatigue_level"] == 6
        assert checkin["foot_issues"] == "none"

    def test_missing_checkin(self):
        assert client.get("/api/v1/checkins/4").status_code == 404

    def test_checkin_invalid_level(self):
        response = client.post("/api/v1/checkins", json={"week_number": 3, "fatigue_level": 11})

        assert response.status_code == 422

    def test_race_results(self):
        response = client.post("/api/v1/races", json={
            "race_name": "Sprint Tri",
            "race_date": "2026-03-28",
            "total_time_seconds": 4980,
        })

        assert response.status_code == 201
        assert client.get("/api/v1/races").json()[0]["race_name"] == "Sprint Tri"


class TestCustomWorkoutRoutes:
    def test_upsert_get_delete(self):
        client.put("/api/v1/custom-workouts", json={
            "session_id": "w3_run_tempo_20min",
            "week_number": 3,
            "workout": {"title": "Hill tempo"},
        })

        assert client.get("/api/v1/custom-workouts/w3_run_tempo_20min/3").json()["workout"] == {
            "title": "Hill tempo",
        }
        assert client.delete("/api/v1/custom-workouts/w3_run_tempo_20min/3").json() == {"success": True}
        assert client.get("/api/v1/custom-workouts/w3_run_tempo_20min/3").status_code == 404


class TestStatsRoutes:
    def test_summary(self):
        client.patch("/api/v1/sessions/w3_run_tempo_20min/3/complete", json={"rpe": 6})
        client.patch("/api/v1/sessions/w3_bike_threshold/3/skip", json={})

        summary = client.get("/api/v1/stats/summary").json()

        assert summary["total_sessions_logged"] == 2
        assert summary["overall_completion_rate"] == 50
        assert client.get("/api/v1/stats/completion").json()[0]["week_number"] == 3
        assert client.get("/api/v1/stats/session-types").json()[0]["total"] == 2


# ============================================================================
# Activities and sync
# ============================================================================

class TestActivityRoutes:
    """Tests for /api/v1/activities."""

    def test_list_filtered(self, wired):
        wired["activities"].save_sync_result([
            ExternalActivity("2", date=date(2026, 2, 12), title="Run"),
            ExternalActivity("1", date=date(2026, 1, 2), title="Old"),
        ], SyncState())

        activities = client.get("/api/v1/activities", params={"start": "2026-02-01"}).json()

        assert [a["id"] for a in activities] == ["intervals_2"]

    def test_sync_not_configured(self):
        response = client.post("/api/v1/activities/sync")

        assert response.status_code == 501
        assert response.json()["error"]["code"] == "FEED_NOT_CONFIGURED"

    def test_test_connection_not_configured(self):
        assert client.get("/api/v1/activities/sync/test-connection").status_code == 501

    def test_clear_while_syncing(self, wired):
        wired["sync_service"]._busy = True

        response = client.delete("/api/v1/activities")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "SYNC_IN_PROGRESS"

    def test_clear(self, wired):
        wired["activities"].save_sync_result([ExternalActivity("2", date=date(2026, 2, 12))], SyncState())

        assert client.delete("/api/v1/activities").json() == {"success": True, "removed": 1}

    def test_status(self):
        status = client.get("/api/v1/activities/sync/status").json()

        assert status["configured"] is False
        assert status["scheduler_running"] is False
        assert status["last_sync_status"] == "never"

    def test_update_config(self):
        response = client.put("/api/v1/activities/sync/config", json={
            "auto_sync_enabled": False,
            "sync_days_back": 60,
        })

        assert response.status_code == 200
        assert response.json()["sync_days_back"] == 60
        assert client.get("/api/v1/activities/sync/status").json()["auto_sync_enabled"] is False

    def test_update_config_rejects_null_interval(self):
        response = client.put("/api/v1/activities/sync/config", json={"auto_sync_interval_hours": None})

        assert response.status_code == 400
        assert client.get("/api/v1/activities/sync/status").json()["auto_sync_interval_hours"] == 6

    def test_update_config_null_start_date(self):
        client.put("/api/v1/activities/sync/config", json={"sync_start_date": "2026-01-26"})

        response = client.put("/api/v1/activities/sync/config", json={"sync_start_date": None})

        assert response.status_code == 200
        assert response.json()["sync_start_date"] is None
