"""
Project a plan week onto the calendar.

Joins the generated plan with the athlete's schedule overrides, session
logs, custom workouts and synced activities into a CalendarView. The
projection is a pure read: nothing is written, and orphaned records are
left where they are.
"""

import logging
from typing import Dict, List, Optional

from ..db.repositories import (
    CustomWorkoutRepository,
    ExternalActivityRepository,
    ScheduleOverrideRepository,
    SessionLogRepository,
)
from ..models.calendar import CalendarDay, CalendarView, ProjectedSession, WeeklyStats
from ..models.identity import SessionIdentity
from ..models.records import CustomWorkout
from ..models.plan import WeekPlan
from ..plan.source import PlanSource

logger = logging.getLogger(__name__)


def compute_weekly_stats(week: WeekPlan, sessions: List[ProjectedSession]) -> WeeklyStats:
    """Planned vs logged volume over the week's trainable sessions."""
    trainable = [p for p in sessions if p.session.is_trainable]
    completed = [p for p in trainable if p.completed]
    skipped = [p for p in trainable if p.skipped]

    planned_min = sum(p.session.duration_min for p in trainable)
    logged_min = sum(p.log.logged_duration_min(p.session.duration_min) for p in completed)

    return WeeklyStats(
        target_hours=week.weekly_hours,
        planned_hours=round(planned_min / 60, 1),
        logged_hours=round(logged_min / 60, 1),
        total_sessions=len(trainable),
        completed_sessions=len(completed),
        skipped_sessions=len(skipped),
        completion_rate=round(100 * len(completed) / len(trainable)) if trainable else 0,
    )


class CalendarProjector:
    """
    Builds the calendar view of one week.

    Usage:
        projector = CalendarProjector(plan, logs, overrides, custom, activities)
        view = projector.project_week(3)
    """

    def __init__(
        self,
        plan_source: PlanSource,
        session_logs: SessionLogRepository,
        overrides: ScheduleOverrideRepository,
        custom_workouts: Optional[CustomWorkoutRepository] = None,
        activities: Optional[ExternalActivityRepository] = None,
    ):
        self.plan_source = plan_source
        self.session_logs = session_logs
        self.overrides = overrides
        self.custom_workouts = custom_workouts
        self.activities = activities

    def project_week(self, week_number: int) -> Optional[CalendarView]:
        """
        Project one week.

        Args:
            week_number: Plan week

        Returns:
            The CalendarView, or None if the plan has no such week
        """
        week = self.plan_source.get_week(week_number)
        if week is None:
            return None

        logs = {log.identity: log for log in self.session_logs.list_by_week(week_number)}
        overrides = {o.identity: o for o in self.overrides.list_by_week(week_number)}
        custom: Dict[SessionIdentity, CustomWorkout] = {}
        if self.custom_workouts is not None:
            custom = {c.identity: c for c in self.custom_workouts.list_by_week(week_number)}

        days = [CalendarDay(day_name=d.day_name, date=d.date) for d in week.dates.days]
        by_date = {day.date: day for day in days}

        projected_sessions = []
        for session in week.sessions:
            identity = session.identity
            override = overrides.get(identity)
            effective_date = session.date
            if override is not None:
                if week.dates.contains(override.new_date):
                    effective_date = override.new_date
                else:
                    logger.warning(
                        f"Ignoring override for {identity.key}: "
                        f"{override.new_date.isoformat()} is outside week {week_number}"
                    )

            bucket = by_date[effective_date]
            projected = ProjectedSession(
                session=session,
                effective_date=effective_date,
                day_name=bucket.day_name,
                log=logs.get(identity),
                rescheduled=override is not None,
                custom_workout=custom.get(identity),
            )
            bucket.sessions.append(projected)
            projected_sessions.append(projected)

        if self.activities is not None:
            for activity in self.activities.list_activities(week.dates.start, week.dates.end):
                by_date[activity.date].activities.append(activity)

        return CalendarView(
            week=week,
            days=days,
            stats=compute_weekly_stats(week, projected_sessions),
        )
