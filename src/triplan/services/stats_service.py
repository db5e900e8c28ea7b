"""Progress statistics over session logs and weekly check-ins."""

from typing import Any, Dict, Iterable, List, Optional

from ..db.repositories import AthleteRepository, CheckinRepository, SessionLogRepository
from ..models.records import SessionLog


def _mean(values: List[float]) -> Optional[float]:
    return sum(values) / len(values) if values else None


def completion_by_week(logs: Iterable[SessionLog]) -> List[Dict[str, Any]]:
    """Logged, completed and skipped counts plus average RPE, per week."""
    by_week: Dict[int, Dict[str, Any]] = {}
    rpes: Dict[int, List[float]] = {}

    for log in logs:
        week = by_week.setdefault(log.week_number, {
            "week_number": log.week_number,
            "total_sessions": 0,
            "completed_sessions": 0,
            "skipped_sessions": 0,
        })
        week["total_sessions"] += 1
        if log.completed:
            week["completed_sessions"] += 1
        if log.skipped:
            week["skipped_sessions"] += 1
        if log.rpe:
            rpes.setdefault(log.week_number, []).append(log.rpe)

    result = []
    for week_number in sorted(by_week):
        week = by_week[week_number]
        week["avg_rpe"] = _mean(rpes.get(week_number, []))
        result.append(week)
    return result


def stats_by_session_type(logs: Iterable[SessionLog]) -> List[Dict[str, Any]]:
    """Counts, average duration and average RPE per session type."""
    by_type: Dict[str, Dict[str, Any]] = {}
    durations: Dict[str, List[float]] = {}
    rpes: Dict[str, List[float]] = {}

    for log in logs:
        key = log.session_type.value if log.session_type else "unknown"
        entry = by_type.setdefault(key, {"session_type": key, "total": 0, "completed": 0})
        entry["total"] += 1
        if log.completed:
            entry["completed"] += 1
        if log.actual_duration_min:
            durations.setdefault(key, []).append(log.actual_duration_min)
        if log.rpe:
            rpes.setdefault(key, []).append(log.rpe)

    for key, entry in by_type.items():
        entry["avg_duration"] = _mean(durations.get(key, []))
        entry["avg_rpe"] = _mean(rpes.get(key, []))
    return list(by_type.values())


class StatsService:
    """Builds the progress summary shown on the dashboard."""

    def __init__(
        self,
        session_logs: SessionLogRepository,
        checkins: CheckinRepository,
        athlete: AthleteRepository,
    ):
        self.session_logs = session_logs
        self.checkins = checkins
        self.athlete = athlete

    def completion(self) -> List[Dict[str, Any]]:
        return completion_by_week(self.session_logs.list_all())

    def session_types(self) -> List[Dict[str, Any]]:
        return stats_by_session_type(self.session_logs.list_all())

    def summary(self) -> Dict[str, Any]:
        logs = self.session_logs.list_all()
        weekly = completion_by_week(logs)
        checkins = self.checkins.list_checkins()

        total_completed = sum(w["completed_sessions"] for w in weekly)
        total_logged = sum(w["total_sessions"] for w in weekly)

        def checkin_average(field_name: str) -> Optional[float]:
            if not checkins:
                return None
            return round(sum(c.get(field_name) or 0 for c in checkins) / len(checkins), 1)

        return {
            "total_weeks_tracked": len(weekly),
            "total_sessions_completed": total_completed,
            "total_sessions_logged": total_logged,
            "overall_completion_rate": (
                round(100 * total_completed / total_logged) if total_logged else 0
            ),
            "current_metrics": self.athlete.get_metrics(),
            "by_session_type": stats_by_session_type(logs),
            "weekly_progress": weekly,
            "avg_fatigue": checkin_average("fatigue_level"),
            "avg_motivation": checkin_average("motivation_level"),
        }
