"""
Deterministic 32-week triathlon plan.

The plan is a pure function of the start date and the week number: every
call to :meth:`TriathlonPlan.get_week` rebuilds the week from the static
tables in :mod:`triplan.plan.library`, so two calls always agree and no
state is shared between callers.

Week structure:
- Race weeks (9, 19, 32): taper days, race day and a recovery day
- Recovery weeks (load level "recovery"): one easy session per day
- Every other week: rest Monday, bike, run, swim, strength, brick,
  Sunday long run, plus a climbing session on Wednesday
"""

from abc import ABC, abstractmethod
from datetime import date, timedelta
from typing import Callable, Dict, List, Optional, Tuple

from ..models.plan import (
    DayInfo,
    Discipline,
    PhaseInfo,
    PlannedSession,
    WeekDates,
    WeekPlan,
)
from . import library as lib


class PlanSource(ABC):
    """Read-only access to the training plan."""

    total_weeks: int = lib.TOTAL_WEEKS

    @abstractmethod
    def get_week(self, week_number: int) -> Optional[WeekPlan]:
        """
        Get one week of the plan.

        Args:
            week_number: 1-based week number.

        Returns:
            The week, or None if the plan has no such week.
        """
        pass

    @abstractmethod
    def get_week_dates(self, week_number: int) -> Optional[WeekDates]:
        """
        Get the seven calendar dates of a week.

        Args:
            week_number: 1-based week number.

        Returns:
            The week dates, or None if the plan has no such week.
        """
        pass

    def has_week(self, week_number: int) -> bool:
        return 1 <= week_number <= self.total_weeks

    def get_all_weeks(self) -> List[WeekPlan]:
        return [self.get_week(n) for n in range(1, self.total_weeks + 1)]

    def find_week_for_date(self, value: date) -> Optional[int]:
        """Return the plan week containing ``value``, if any."""
        for week_number in range(1, self.total_weeks + 1):
            dates = self.get_week_dates(week_number)
            if dates is not None and dates.contains(value):
                return week_number
        return None


def get_phase_info(week_number: int) -> PhaseInfo:
    """Phase name, focus and macrocycle for a week."""
    if week_number <= 4:
        return PhaseInfo("Base Phase 1", "aerobic_base", 1)
    if week_number <= 8:
        return PhaseInfo("Build Phase 1", "run_volume_and_threshold", 1)
    if week_number == 9:
        return PhaseInfo("Race Week: Half Marathon", "race_execution", 1)
    if week_number <= 13:
        return PhaseInfo("Base Phase 2", "triathlon_base", 2)
    if week_number <= 17:
        return PhaseInfo("Build Phase 2", "olympic_specificity", 2)
    if week_number == 19:
        return PhaseInfo("Race Week: Olympic", "race_execution", 2)
    # Week 18 falls through to recovery along with 20 and 21
    if week_number <= 21:
        return PhaseInfo("Recovery Phase", "recover_and_consolidate", 3)
    if week_number <= 25:
        return PhaseInfo("Base Phase 3", "long_course_base", 3)
    if week_number <= 29:
        return PhaseInfo("Build Phase 3", "70_3_specificity", 3)
    if week_number in (30, 31):
        return PhaseInfo("Taper Phase", "70_3_taper", 3)
    return PhaseInfo("Race Week: 70.3", "race_execution", 3)


def is_race_week(week_number: int) -> bool:
    return week_number in lib.RACES


def get_week_load(week_number: int) -> Tuple[float, str]:
    """Target hours and load level for a week."""
    phase = get_phase_info(week_number)
    if is_race_week(week_number):
        return 4, "race"
    if "Recovery" in phase.name:
        return 6, "recovery"
    if "Taper" in phase.name:
        return 5, "taper"
    if "base" in phase.focus:
        return 8, "base"
    if "build" in phase.focus:
        return 10, "build"
    return 9, "maintenance"


def get_week_notes(week_number: int, phase: PhaseInfo) -> str:
    if week_number in lib.WEEK_NOTES:
        return lib.WEEK_NOTES[week_number]
    description = lib.PHASE_FOCUS_DESCRIPTIONS.get(phase.focus, "Training phase")
    return f"{phase.name}: {description}"


def _rotate(variants: List[str], week_number: int, first_week: int = 1) -> str:
    return variants[(week_number - first_week) % len(variants)]


class TriathlonPlan(PlanSource):
    """The 32-week plan towards a half marathon, an Olympic tri and a 70.3."""

    def __init__(self, start_date: date = lib.PLAN_START_DATE, total_weeks: int = lib.TOTAL_WEEKS):
        self.start_date = start_date
        self.total_weeks = total_weeks
        self._builders: Dict[Discipline, Callable[..., PlannedSession]] = {
            Discipline.RUN: self._build_run,
            Discipline.BIKE: self._build_bike,
            Discipline.SWIM: self._build_swim,
            Discipline.STRENGTH: self._build_strength,
            Discipline.BRICK: self._build_brick,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_week_dates(self, week_number: int) -> Optional[WeekDates]:
        if not self.has_week(week_number):
            return None
        start = self.start_date + timedelta(days=(week_number - 1) * 7)
        days = tuple(
            DayInfo(day_name=name, date=start + timedelta(days=i))
            for i, name in enumerate(lib.DAY_NAMES)
        )
        return WeekDates(start=start, end=start + timedelta(days=6), days=days)

    def get_week(self, week_number: int) -> Optional[WeekPlan]:
        dates = self.get_week_dates(week_number)
        if dates is None:
            return None

        phase = get_phase_info(week_number)
        hours, level = get_week_load(week_number)

        if is_race_week(week_number):
            sessions = self._race_week_sessions(week_number, dates.days)
        elif level == "recovery":
            sessions = self._recovery_week_sessions(week_number, dates.days)
        else:
            sessions = self._training_week_sessions(week_number, dates.days, phase.macrocycle)

        return WeekPlan(
            week_number=week_number,
            dates=dates,
            phase=phase,
            load_level=level,
            weekly_hours=hours,
            sessions=tuple(sessions),
            notes=get_week_notes(week_number, phase),
            is_race_week=is_race_week(week_number),
            race_name=lib.RACES.get(week_number),
        )

    def get_phase_info(self, week_number: int) -> Optional[PhaseInfo]:
        if not self.has_week(week_number):
            return None
        return get_phase_info(week_number)

    def get_races(self) -> List[dict]:
        """Race calendar, dated by each race week's race-day session."""
        races = []
        for week_number, name in sorted(lib.RACES.items()):
            week = self.get_week(week_number)
            if week is None:
                continue
            race_day = week.get_session(f"w{week_number}_race_day")
            races.append({
                "week": week_number,
                "name": name,
                "date": race_day.date.isoformat() if race_day else None,
            })
        return races

    @staticmethod
    def long_run_distance(week_number: int) -> float:
        return lib.LONG_RUN_PROGRESSION.get(week_number, lib.DEFAULT_LONG_RUN_KM)

    # ------------------------------------------------------------------
    # Week layouts
    # ------------------------------------------------------------------

    def _training_week_sessions(
        self, week_number: int, days: Tuple[DayInfo, ...], macrocycle: int
    ) -> List[PlannedSession]:
        brick_first_week, brick_variants = lib.BRICK_VARIANTS[macrocycle]
        layout = [
            (Discipline.BIKE, _rotate(lib.BIKE_VARIANTS, week_number)),
            (Discipline.RUN, _rotate(lib.RUN_VARIANTS, week_number)),
            (Discipline.SWIM, _rotate(lib.SWIM_VARIANTS, week_number)),
            (Discipline.STRENGTH, _rotate(lib.STRENGTH_VARIANTS, week_number)),
            (Discipline.BRICK, _rotate(brick_variants, week_number, brick_first_week)),
            (Discipline.RUN, "long_run"),
        ]

        sessions = [self._rest_session(days[0], week_number)]
        for day, (discipline, variant) in zip(days[1:], layout):
            sessions.append(self.create_session(day, discipline, variant, week_number))
        sessions.append(self._climbing_session(days[2], week_number))
        return sessions

    def _race_week_sessions(self, week_number: int, days: Tuple[DayInfo, ...]) -> List[PlannedSession]:
        # The 70.3 is on Sunday, the other races on Saturday
        sunday_race = week_number == 32
        race_day = days[6] if sunday_race else days[5]
        recovery_day = days[5] if sunday_race else days[6]
        race_name = lib.RACES.get(week_number)

        def session(sid, day, discipline, title, description, duration, **details):
            return PlannedSession(
                session_id=f"w{week_number}_{sid}",
                week_number=week_number,
                discipline=discipline,
                day_name=day.day_name,
                date=day.date,
                title=title,
                description=description,
                duration_min=duration,
                details=details,
            )

        if week_number in (9, 19):
            openers = session(
                "wednesday_openers", days[2], Discipline.RUN, "Openers",
                "20 min easy + 4 x 100m strides. Wake up the legs.", 35,
            )
        else:
            openers = session(
                "wednesday_openers", days[2], Discipline.BIKE, "Bike Openers",
                "30 min easy spin + 3 x 3 min @ race power.", 45,
            )

        return [
            session("monday_rest", days[0], Discipline.REST, "Rest Day",
                    "Complete rest. Light mobility if desired.", 0),
            session("tuesday_activity", days[1],
                    Discipline.SWIM if sunday_race else Discipline.BIKE,
                    "Short Active Day", "30-40 min easy. Keep legs fresh.", 35),
            openers,
            session("thursday_rest", days[3], Discipline.REST, "Rest Day",
                    "Complete rest. Prepare all race gear.", 0),
            session("friday_prep", days[4], Discipline.PREP, "Race Prep",
                    "Check equipment, review race plan, carb load.", 60),
            session("race_day", race_day, Discipline.RACE, f"RACE DAY: {race_name}",
                    "Execute your race plan. Trust your training.", 0, race_mode=True),
            session("recovery", recovery_day, Discipline.RECOVERY, "Post-Race Recovery",
                    "Light walking, easy stretching, celebrate!", 30),
        ]

    def _recovery_week_sessions(self, week_number: int, days: Tuple[DayInfo, ...]) -> List[PlannedSession]:
        sessions = []
        for idx, (discipline, title, duration, focus) in enumerate(lib.RECOVERY_WEEK_TEMPLATE):
            sessions.append(PlannedSession(
                session_id=f"w{week_number}_day{idx}",
                week_number=week_number,
                discipline=Discipline(discipline),
                day_name=days[idx].day_name,
                date=days[idx].date,
                title=title,
                description=lib.RECOVERY_DESCRIPTIONS.get(discipline, "Recovery focus"),
                duration_min=duration,
                details={"recovery_focus": focus} if focus else {},
            ))
        return sessions

    # ------------------------------------------------------------------
    # Session builders
    # ------------------------------------------------------------------

    def create_session(
        self, day: DayInfo, discipline: Discipline, variant: str, week_number: int
    ) -> PlannedSession:
        """Build one session, dispatching on discipline."""
        builder = self._builders.get(discipline, self._build_unknown)
        return builder(day, variant, week_number, discipline=discipline)

    def _rest_session(self, day: DayInfo, week_number: int) -> PlannedSession:
        return PlannedSession(
            session_id=f"w{week_number}_{day.day_name.lower()}_rest",
            week_number=week_number,
            discipline=Discipline.REST,
            day_name=day.day_name,
            date=day.date,
            title="Rest Day",
            description="Complete rest. Optional: 15-30 min easy walk, mobility work, or light stretching.",
            duration_min=0,
            details={"intensity": "rest"},
        )

    def _build_run(self, day: DayInfo, variant: str, week_number: int, **_) -> PlannedSession:
        template = lib.RUN_SESSIONS.get(variant) or lib.RUN_SESSIONS[lib.RUN_FALLBACK]
        details = {"foot_monitoring": True}
        if variant == "long_run":
            details["long_run_km"] = self.long_run_distance(week_number)
        return PlannedSession(
            session_id=f"w{week_number}_run_{variant}",
            week_number=week_number,
            discipline=Discipline.RUN,
            day_name=day.day_name,
            date=day.date,
            title=template["title"],
            description=template["description"],
            duration_min=template["target"]["duration"],
            target=dict(template["target"]),
            details=details,
        )

    def _build_bike(self, day: DayInfo, variant: str, week_number: int, **_) -> PlannedSession:
        template = lib.BIKE_SESSIONS.get(variant) or lib.BIKE_SESSIONS[lib.BIKE_FALLBACK]
        return PlannedSession(
            session_id=f"w{week_number}_bike_{variant}",
            week_number=week_number,
            discipline=Discipline.BIKE,
            day_name=day.day_name,
            date=day.date,
            title=template["title"],
            description=template["description"],
            duration_min=template["target"]["duration"],
            target=dict(template["target"]),
        )

    def _build_swim(self, day: DayInfo, variant: str, week_number: int, **_) -> PlannedSession:
        template = lib.SWIM_SESSIONS.get(variant) or lib.SWIM_SESSIONS[lib.SWIM_FALLBACK]
        distance = template["target"]["distance"]
        return PlannedSession(
            session_id=f"w{week_number}_swim_{variant}",
            week_number=week_number,
            discipline=Discipline.SWIM,
            day_name=day.day_name,
            date=day.date,
            title=template["title"],
            description=template["description"],
            duration_min=int(distance / lib.SWIM_METERS_PER_MINUTE + 0.5),
            target=dict(template["target"]),
        )

    def _build_strength(self, day: DayInfo, variant: str, week_number: int, **_) -> PlannedSession:
        template = lib.STRENGTH_SESSIONS.get(variant) or lib.STRENGTH_SESSIONS[lib.STRENGTH_FALLBACK]
        return PlannedSession(
            session_id=f"w{week_number}_strength_{variant}",
            week_number=week_number,
            discipline=Discipline.STRENGTH,
            day_name=day.day_name,
            date=day.date,
            title=template["title"],
            description=template["description"],
            duration_min=template["duration"],
            details={"exercises": [dict(e) for e in template["exercises"]]},
        )

    def _build_brick(self, day: DayInfo, variant: str, week_number: int, **_) -> PlannedSession:
        template = lib.BRICK_SESSIONS.get(variant) or lib.BRICK_SESSIONS[lib.BRICK_FALLBACK]
        bike = template["bike"]
        run = template["run"]
        total = (bike or {}).get("duration", 0) + (run or {}).get("duration", 0)
        details = {
            "bike": dict(bike) if bike else None,
            "run": dict(run) if run else None,
            "nutrition": {"carbs_per_hour": 60} if bike and bike.get("nutrition") else None,
        }
        return PlannedSession(
            session_id=f"w{week_number}_brick_{variant}",
            week_number=week_number,
            discipline=Discipline.BRICK,
            day_name=day.day_name,
            date=day.date,
            title=template["title"],
            description=template["description"],
            duration_min=total,
            details=details,
        )

    def _climbing_session(self, day: DayInfo, week_number: int) -> PlannedSession:
        template = lib.CLIMBING_SESSIONS[_rotate(lib.CLIMBING_VARIANTS, week_number)]
        return PlannedSession(
            session_id=f"w{week_number}_climbing",
            week_number=week_number,
            discipline=Discipline.CLIMBING,
            day_name=day.day_name,
            date=day.date,
            title=template["title"],
            description=template["description"],
            duration_min=template["duration"],
            details={"intensity": template["intensity"], "focus": template["focus"]},
        )

    def _build_unknown(
        self, day: DayInfo, variant: str, week_number: int, discipline: Discipline = Discipline.UNKNOWN
    ) -> PlannedSession:
        return PlannedSession(
            session_id=f"w{week_number}_{discipline.value}_{variant}",
            week_number=week_number,
            discipline=Discipline.UNKNOWN,
            day_name=day.day_name,
            date=day.date,
            title=variant.replace("_", " ").title(),
            description="",
            duration_min=0,
        )
