"""Tests for the deterministic training plan."""

from datetime import date

import pytest

from triplan.models.plan import Discipline
from triplan.plan.source import TriathlonPlan, get_phase_info, get_week_load, is_race_week


class TestWeekDates:
    """Tests for week date computation."""

    def test_week_one_starts_on_plan_start(self, plan):
        dates = plan.get_week_dates(1)

        assert dates.start == date(2026, 1, 26)
        assert dates.end == date(2026, 2, 1)
        assert [d.day_name for d in dates.days] == [
            "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
        ]

    def test_week_dates_follow_seven_day_offset(self, plan):
        dates = plan.get_week_dates(3)

        assert dates.start == date(2026, 2, 9)
        assert dates.days[2].date == date(2026, 2, 11)

    @pytest.mark.parametrize("week_number", [0, 33, -1])
    def test_out_of_range_week(self, plan, week_number):
        assert plan.get_week_dates(week_number) is None
        assert plan.get_week(week_number) is None

    def test_find_week_for_date(self, plan):
        assert plan.find_week_for_date(date(2026, 2, 11)) == 3
        assert plan.find_week_for_date(date(2025, 12, 31)) is None

    def test_custom_start_date(self):
        plan = TriathlonPlan(start_date=date(2027, 1, 4))

        assert plan.get_week_dates(2).start == date(2027, 1, 11)


class TestTrainingWeek:
    """Tests for regular training weeks."""

    def test_week_one_tuesday_is_ftp_test(self, plan):
        week = plan.get_week(1)
        session = week.get_session("w1_bike_ftp_test")

        assert session is not None
        assert session.day_name == "Tuesday"
        assert session.date == date(2026, 1, 27)
        assert session.discipline == Discipline.BIKE
        assert session.title == "FTP Test"
        assert session.duration_min == 50

    def test_week_three_wednesday_tempo(self, plan):
        session = plan.get_week(3).get_session("w3_run_tempo_20min")

        assert session.day_name == "Wednesday"
        assert session.date == date(2026, 2, 11)
        assert session.duration_min == 45
        assert session.details["foot_monitoring"] is True

    def test_monday_is_rest(self, plan):
        week = plan.get_week(2)
        monday = week.get_session("w2_monday_rest")

        assert monday.discipline == Discipline.REST
        assert monday.duration_min == 0

    def test_training_week_layout(self, plan):
        week = plan.get_week(1)
        disciplines = [s.discipline for s in week.sessions]

        assert len(week.sessions) == 8
        assert disciplines.count(Discipline.RUN) == 2
        assert Discipline.CLIMBING in disciplines
        climbing = week.get_session("w1_climbing")
        assert climbing.day_name == "Wednesday"

    def test_swim_duration_from_distance(self, plan):
        swim = plan.get_week(1).get_session("w1_swim_css_test")

        # 1200 m at 35 m/min, rounded
        assert swim.duration_min == 34

    def test_long_run_carries_distance(self, plan):
        long_run = plan.get_week(3).get_session("w3_run_long_run")

        assert long_run.day_name == "Sunday"
        assert long_run.details["long_run_km"] == 12

    def test_brick_duration_is_sum_of_legs(self, plan):
        brick = next(s for s in plan.get_week(2).sessions if s.discipline == Discipline.BRICK)
        bike = brick.details["bike"] or {}
        run = brick.details["run"] or {}

        assert brick.duration_min == bike.get("duration", 0) + run.get("duration", 0)

    def test_session_ids_unique_within_week(self, plan):
        for week in plan.get_all_weeks():
            ids = [s.session_id for s in week.sessions]
            assert len(ids) == len(set(ids)), f"duplicate ids in week {week.week_number}"

    def test_sessions_fall_inside_their_week(self, plan):
        for week in plan.get_all_weeks():
            for session in week.sessions:
                assert week.dates.contains(session.date)


class TestRaceAndRecoveryWeeks:
    """Tests for race weeks and recovery weeks."""

    def test_half_marathon_week(self, plan):
        week = plan.get_week(9)
        races = [s for s in week.sessions if s.discipline == Discipline.RACE]

        assert week.is_race_week
        assert week.race_name == "Half Marathon"
        assert len(races) == 1
        assert races[0].day_name == "Saturday"
        assert races[0].date == date(2026, 3, 28)
        assert races[0].details["race_mode"] is True

    def test_final_race_is_on_sunday(self, plan):
        race = plan.get_week(32).get_session("w32_race_day")

        assert race.day_name == "Sunday"
        assert race.date == date(2026, 9, 6)

    def test_race_calendar(self, plan):
        races = plan.get_races()

        assert [r["week"] for r in races] == [9, 19, 32]
        assert races[0]["date"] == "2026-03-28"

    def test_week_18_is_a_recovery_week(self, plan):
        week = plan.get_week(18)

        assert week.load_level == "recovery"
        assert [s.session_id for s in week.sessions] == [f"w18_day{i}" for i in range(7)]

    def test_phase_and_load(self):
        assert get_phase_info(1).name == "Base Phase 1"
        assert get_phase_info(19).name == "Race Week: Olympic"
        assert get_week_load(9) == (4, "race")
        assert get_week_load(30) == (5, "taper")
        assert is_race_week(19)
        assert not is_race_week(18)


class TestDeterminism:
    """The plan is a pure function of the week number."""

    def test_repeated_calls_agree(self, plan):
        assert plan.get_week(12) == plan.get_week(12)

    def test_separate_instances_agree(self):
        assert TriathlonPlan().get_week(25) == TriathlonPlan().get_week(25)
