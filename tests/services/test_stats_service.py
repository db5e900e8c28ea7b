"""Tests for progress statistics."""

import pytest

from triplan.models.records import SessionLog
from triplan.services.stats_service import StatsService, completion_by_week, stats_by_session_type


@pytest.fixture
def stats(session_logs, checkins, athlete):
    return StatsService(session_logs, checkins, athlete)


def _logs():
    return [
        SessionLog("w1_bike_ftp_test", 1, session_type="bike", completed=True, rpe=9, actual_duration_min=50),
        SessionLog("w1_run_baseline_5k_tt", 1, session_type="run", completed=True, rpe=7, actual_duration_min=30),
        SessionLog("w1_swim_css_test", 1, session_type="swim", skipped=True),
        SessionLog("w2_run_easy", 2, session_type="run", completed=True, actual_duration_min=40),
    ]


class TestCompletionByWeek:
    """Tests for completion_by_week."""

    def test_counts_per_week(self):
        weeks = completion_by_week(_logs())

        assert [w["week_number"] for w in weeks] == [1, 2]
        assert weeks[0]["total_sessions"] == 3
        assert weeks[0]["completed_sessions"] == 2
        assert weeks[0]["skipped_sessions"] == 1
        assert weeks[0]["avg_rpe"] == 8
        assert weeks[1]["avg_rpe"] is None

    def test_empty(self):
        assert completion_by_week([]) == []


class TestStatsBySessionType:
    """Tests for stats_by_session_type."""

    def test_grouped(self):
        by_type = {s["session_type"]: s for s in stats_by_session_type(_logs())}

        assert by_type["run"]["total"] == 2
        assert by_type["run"]["completed"] == 2
        assert by_type["run"]["avg_duration"] == 35
        assert by_type["swim"]["avg_duration"] is None
        assert by_type["bike"]["avg_rpe"] == 9

    def test_missing_type_grouped_as_unknown(self):
        by_type = stats_by_session_type([SessionLog("x", 1)])

        assert by_type[0]["session_type"] == "unknown"


class TestStatsService:
    """Tests for StatsService.summary."""

    def test_empty_summary(self, stats):
        summary = stats.summary()

        assert summary["total_weeks_tracked"] == 0
        assert summary["overall_completion_rate"] == 0
        assert summary["avg_fatigue"] is None
        assert summary["current_metrics"]["ftp_watts"] == 212

    def test_summary(self, stats, session_logs, checkins):
        for log in _logs():
            session_logs.upsert(log)
        checkins.upsert_checkin(1, {"fatigue_level": 6, "motivation_level": 8})
        checkins.upsert_checkin(2, {"fatigue_level": 7})

        summary = stats.summary()

        assert summary["total_weeks_tracked"] == 2
        assert summary["total_sessions_completed"] == 3
        assert summary["total_sessions_logged"] == 4
        assert summary["overall_completion_rate"] == 75
        assert summary["avg_fatigue"] == 6.5
        assert summary["avg_motivation"] == 4.0
        assert len(summary["weekly_progress"]) == 2
