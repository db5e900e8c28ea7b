"""Tests for the calendar projection."""

from datetime import date

from triplan.db.repositories import (
    CustomWorkoutRepository,
    ExternalActivityRepository,
    ScheduleOverrideRepository,
    SessionLogRepository,
)
from triplan.db.store import InMemoryStore
from triplan.models.records import ExternalActivity, SessionLog, SyncState
from triplan.services.calendar_projector import CalendarProjector


def _projector_over(document, plan):
    store = InMemoryStore(document)
    return CalendarProjector(
        plan_source=plan,
        session_logs=SessionLogRepository(store),
        overrides=ScheduleOverrideRepository(store, plan),
        custom_workouts=CustomWorkoutRepository(store),
        activities=ExternalActivityRepository(store),
    )


class TestProjectWeek:
    """Tests for CalendarProjector.project_week."""

    def test_unknown_week(self, projector):
        assert projector.project_week(33) is None
        assert projector.project_week(0) is None

    def test_seven_days_monday_first(self, projector):
        view = projector.project_week(3)

        assert [d.date for d in view.days][0] == date(2026, 2, 9)
        assert [d.day_name for d in view.days][-1] == "Sunday"
        assert len(view.days) == 7

    def test_sessions_on_default_days(self, projector):
        view = projector.project_week(3)

        tempo = view.find_session("w3_run_tempo_20min")
        assert tempo.effective_date == date(2026, 2, 11)
        assert tempo.rescheduled is False
        assert tempo in view.get_day(date(2026, 2, 11)).sessions

    def test_every_session_projected_once(self, projector, plan):
        view = projector.project_week(3)

        projected = [p.session.session_id for d in view.days for p in d.sessions]
        assert sorted(projected) == sorted(s.session_id for s in plan.get_week(3).sessions)

    def test_override_moves_session(self, projector, overrides):
        overrides.set("w3_run_tempo_20min", 3, date(2026, 2, 14))

        view = projector.project_week(3)

        tempo = view.find_session("w3_run_tempo_20min")
        assert tempo.effective_date == date(2026, 2, 14)
        assert tempo.day_name == "Saturday"
        assert tempo.rescheduled is True
        assert tempo not in view.get_day(date(2026, 2, 11)).sessions
        assert tempo in view.get_day(date(2026, 2, 14)).sessions

    def test_override_on_default_date_still_rescheduled(self, projector, overrides):
        overrides.set("w3_run_tempo_20min", 3, date(2026, 2, 11))

        tempo = projector.project_week(3).find_session("w3_run_tempo_20min")

        assert tempo.effective_date == date(2026, 2, 11)
        assert tempo.rescheduled is True
        assert overrides.get("w3_run_tempo_20min", 3) is not None

        overrides.clear("w3_run_tempo_20min", 3)

        assert overrides.get("w3_run_tempo_20min", 3) is None
        assert projector.project_week(3).find_session("w3_run_tempo_20min").rescheduled is False

    def test_projection_is_deterministic(self, projector, overrides, session_logs, activity_repo):
        overrides.set("w3_run_tempo_20min", 3, date(2026, 2, 14))
        session_logs.upsert(SessionLog("w3_run_tempo_20min", 3, completed=True))
        activity_repo.save_sync_result(
            [ExternalActivity("10", date=date(2026, 2, 12), title="Lunch Run")], SyncState(),
        )

        assert projector.project_week(3).to_dict() == projector.project_week(3).to_dict()

    def test_override_for_other_week_does_not_apply(self, projector, overrides):
        overrides.set("w3_run_tempo_20min", 4, date(2026, 2, 20))

        tempo = projector.project_week(3).find_session("w3_run_tempo_20min")

        assert tempo.effective_date == date(2026, 2, 11)
        assert tempo.rescheduled is False

    def test_out_of_week_override_ignored(self, plan):
        projector = _projector_over({
            "schedule_overrides": {
                "w3_run_tempo_20min_3": {
                    "session_id": "w3_run_tempo_20min",
                    "week_number": 3,
                    "new_date": "2099-01-01",
                },
            },
        }, plan)

        tempo = projector.project_week(3).find_session("w3_run_tempo_20min")

        assert tempo.effective_date == date(2026, 2, 11)

    def test_orphan_records_ignored(self, plan):
        projector = _projector_over({
            "session_logs": {
                "w3_gone_3": {"session_id": "w3_gone", "week_number": 3, "completed": True},
            },
            "schedule_overrides": {
                "w3_gone_3": {"session_id": "w3_gone", "week_number": 3, "new_date": "2026-02-12"},
            },
        }, plan)

        view = projector.project_week(3)

        assert view.find_session("w3_gone") is None
        assert view.stats.completed_sessions == 0

    def test_stored_log_with_bad_rate_still_projects(self, plan):
        projector = _projector_over({
            "session_logs": {
                "w3_run_tempo_20min_3": {
                    "session_id": "w3_run_tempo_20min",
                    "week_number": 3,
                    "completed": True,
                    "completion_rate": 150,
                },
            },
        }, plan)

        tempo = projector.project_week(3).find_session("w3_run_tempo_20min")

        assert tempo.completed is True
        assert tempo.log.completion_rate == 150

    def test_log_and_custom_workout_joined(self, projector, session_logs, custom_workouts):
        session_logs.upsert(SessionLog("w3_run_tempo_20min", 3, completed=True))
        custom_workouts.upsert("w3_run_tempo_20min", 3, {"title": "Hill tempo"})

        tempo = projector.project_week(3).find_session("w3_run_tempo_20min")

        assert tempo.completed is True
        assert tempo.custom_workout.workout == {"title": "Hill tempo"}
        assert tempo.to_dict()["custom_workout"] == {"title": "Hill tempo"}

    def test_log_from_another_week_not_joined(self, projector, session_logs):
        session_logs.upsert(SessionLog("w3_run_tempo_20min", 4, completed=True))

        assert projector.project_week(3).find_session("w3_run_tempo_20min").log is None

    def test_activities_attached_to_their_day(self, projector, activity_repo):
        activity_repo.save_sync_result([
            ExternalActivity("10", date=date(2026, 2, 12), title="Lunch Run"),
            ExternalActivity("11", date=date(2026, 2, 20), title="Next week"),
        ], SyncState())

        view = projector.project_week(3)

        assert [a.title for a in view.get_day(date(2026, 2, 12)).activities] == ["Lunch Run"]
        assert sum(len(d.activities) for d in view.days) == 1

    def test_to_dict(self, projector):
        data = projector.project_week(9).to_dict()

        assert data["week_number"] == 9
        assert data["is_race_week"] is True
        assert len(data["days"]) == 7
        assert "stats" in data


class TestWeeklyStats:
    """Tests for the weekly stats of a projected week."""

    def test_untouched_week(self, projector, plan):
        week = plan.get_week(3)
        trainable = [s for s in week.sessions if s.is_trainable]

        stats = projector.project_week(3).stats

        assert stats.total_sessions == len(trainable)
        assert stats.completed_sessions == 0
        assert stats.completion_rate == 0
        assert stats.logged_hours == 0
        assert stats.planned_hours == round(sum(s.duration_min for s in trainable) / 60, 1)
        assert stats.target_hours == week.weekly_hours

    def test_rest_day_not_counted(self, projector, session_logs):
        session_logs.upsert(SessionLog("w3_monday_rest", 3, completed=True))

        stats = projector.project_week(3).stats

        assert stats.completed_sessions == 0
        assert stats.logged_hours == 0

    def test_completion_and_logged_hours(self, projector, session_logs, plan):
        trainable = [s for s in plan.get_week(3).sessions if s.is_trainable]
        session_logs.upsert(SessionLog("w3_run_tempo_20min", 3, completed=True, actual_duration_min=60))
        session_logs.upsert(SessionLog(trainable[0].session_id, 3, skipped=True))

        stats = projector.project_week(3).stats

        assert stats.completed_sessions == 1
        assert stats.skipped_sessions == 1
        assert stats.logged_hours == 1.0
        assert stats.completion_rate == round(100 / len(trainable))

    def test_logged_hours_fall_back_to_plan(self, projector, session_logs):
        session_logs.upsert(SessionLog("w3_run_tempo_20min", 3, completed=True))

        assert projector.project_week(3).stats.logged_hours == round(45 / 60, 1)

    def test_logged_hours_from_brick_legs(self, projector, session_logs):
        session_logs.upsert(SessionLog(
            "w3_run_tempo_20min", 3, completed=True, bike_duration_min=60, run_duration_min=30,
        ))

        assert projector.project_week(3).stats.logged_hours == 1.5

    def test_skipped_not_logged(self, projector, session_logs):
        session_logs.upsert(SessionLog("w3_run_tempo_20min", 3, skipped=True, actual_duration_min=60))

        assert projector.project_week(3).stats.logged_hours == 0
