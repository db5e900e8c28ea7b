#!/usr/bin/env python3
"""
TriPlan CLI.

Usage:
    triplan week 3              # Calendar view of week 3 with logs and activities
    triplan week                # Current week
    triplan plan                # All 32 weeks at a glance
    triplan sync                # Pull activities from intervals.icu
    triplan sync --start 2026-01-26 --end 2026-02-28
    triplan clear-activities --yes
    triplan status              # Sync status and progress summary
    triplan serve --port 8000   # Run the API server
"""

import argparse
import asyncio
import sys
from datetime import date
from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .api import deps
from .config import get_settings
from .exceptions import TriPlanError
from .integrations.base import IntegrationError
from .models.calendar import ProjectedSession
from .utils.log_sanitizer import configure_logging

console = Console()


def get_load_color(load: str) -> str:
    """Get rich color for a week's load level."""
    colors = {
        "recovery": "green",
        "base": "blue",
        "build": "red",
        "maintenance": "yellow",
        "taper": "cyan",
        "race": "magenta",
    }
    return colors.get(load, "white")


def format_status(projected: ProjectedSession) -> Text:
    if projected.completed:
        return Text("done", style="green")
    if projected.skipped:
        return Text("skipped", style="red")
    return Text("planned", style="dim")


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD")


def cmd_week(args):
    """Show the calendar view of one week."""
    plan = deps.get_plan_source()
    week_number = args.week_number or plan.find_week_for_date(date.today())
    if week_number is None:
        console.print("[yellow]Today is outside the plan. Pass a week number.[/yellow]")
        sys.exit(1)

    view = deps.get_calendar_projector().project_week(week_number)
    if view is None:
        console.print(f"[red]No such week: {week_number}[/red]")
        sys.exit(1)

    week = view.week
    title = f"Week {week.week_number} - {week.phase.name}"
    if week.race_name:
        title += f" - {week.race_name}"
    color = get_load_color(week.load_level)
    console.print()
    console.print(Panel(
        f"[bold]{title}[/bold]\n"
        f"{week.dates.start.isoformat()} to {week.dates.end.isoformat()}  "
        f"Load: [{color}]{week.load_level}[/{color}]  Target: {week.weekly_hours}h\n"
        f"{week.notes}",
        box=box.ROUNDED,
    ))

    table = Table(box=box.ROUNDED)
    table.add_column("Day", style="cyan")
    table.add_column("Session")
    table.add_column("Type")
    table.add_column("Min", justify="right")
    table.add_column("Status")

    for day in view.days:
        label = f"{day.day_name[:3]} {day.date.strftime('%b')} {day.date.day}"
        for projected in day.sessions:
            session_title = projected.session.title
            if projected.rescheduled:
                session_title += " (moved)"
            table.add_row(
                label,
                session_title,
                projected.session.discipline.value,
                str(projected.session.duration_min),
                format_status(projected),
            )
            label = ""
        for activity in day.activities:
            table.add_row(
                label,
                Text(f"{activity.title} [{activity.source}]", style="blue"),
                activity.activity_type.value,
                str(round(activity.duration / 60)),
                Text("synced", style="blue"),
            )
            label = ""

    console.print(table)

    stats = view.stats
    console.print(
        f"Completed {stats.completed_sessions}/{stats.total_sessions} "
        f"({stats.completion_rate}%), skipped {stats.skipped_sessions}. "
        f"Hours: {stats.logged_hours} logged / {stats.planned_hours} planned "
        f"/ {stats.target_hours} target"
    )
    console.print()


def cmd_plan(args):
    """Show every week of the plan."""
    table = Table(title="Training Plan", box=box.ROUNDED)
    table.add_column("Week", justify="right", style="cyan")
    table.add_column("Dates")
    table.add_column("Phase")
    table.add_column("Load")
    table.add_column("Hours", justify="right")
    table.add_column("Race")

    for week in deps.get_plan_source().get_all_weeks():
        color = get_load_color(week.load_level)
        table.add_row(
            str(week.week_number),
            f"{week.dates.start.isoformat()} - {week.dates.end.isoformat()}",
            week.phase.name,
            Text(week.load_level, style=color),
            f"{week.weekly_hours:g}",
            week.race_name or "",
        )

    console.print()
    console.print(table)
    console.print()


async def _run_sync(start: Optional[date], end: Optional[date]):
    service = deps.get_sync_service()
    try:
        return await service.sync(start=start, end=end)
    finally:
        if service.feed is not None:
            await service.feed.close()


def cmd_sync(args):
    """Pull activities from intervals.icu."""
    with console.status("Syncing activities from intervals.icu..."):
        result = asyncio.run(_run_sync(args.start, args.end))

    console.print(
        f"[green]{result.sync_type.capitalize()} sync complete[/green] "
        f"({result.start_date} to {result.end_date}): "
        f"{result.added} added, {result.updated} updated, {result.total} total"
    )


def cmd_clear_activities(args):
    """Delete all synced activities."""
    if not args.yes:
        console.print("[yellow]This deletes every synced activity. Re-run with --yes.[/yellow]")
        sys.exit(1)
    removed = deps.get_sync_service().clear_all()
    console.print(f"Removed {removed} activities.")


def cmd_status(args):
    """Show sync status and overall progress."""
    status = deps.get_sync_service().status()
    summary = deps.get_stats_service().summary()

    table = Table(box=box.ROUNDED, show_header=False)
    table.add_column("Item", style="cyan")
    table.add_column("Value")

    table.add_row("Data file", str(get_settings().data_file))
    table.add_row("intervals.icu", "configured" if status["configured"] else "not configured")
    table.add_row("Auto-sync", f"{'on' if status['auto_sync_enabled'] else 'off'} "
                               f"(every {status['auto_sync_interval_hours']}h)")
    table.add_row("Last sync", status["last_sync_at"] or "never")
    sync_color = {"success": "green", "error": "red"}.get(status["last_sync_status"], "white")
    table.add_row("Last sync status", Text(status["last_sync_status"], style=sync_color))
    if status["last_sync_error"]:
        table.add_row("Last sync error", Text(status["last_sync_error"], style="red"))
    table.add_row("Cached activities", str(status["activity_count"]))
    table.add_row("Weeks tracked", str(summary["total_weeks_tracked"]))
    table.add_row(
        "Sessions completed",
        f"{summary['total_sessions_completed']}/{summary['total_sessions_logged']} "
        f"({summary['overall_completion_rate']}%)",
    )

    console.print()
    console.print(Panel("[bold]TriPlan - Status[/bold]"))
    console.print(table)
    console.print()


def cmd_serve(args):
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "triplan.main:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload,
    )


def main():
    parser = argparse.ArgumentParser(
        prog="triplan",
        description="32-week triathlon plan tracker",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    week_p = subparsers.add_parser("week", help="Show one week of the calendar")
    week_p.add_argument("week_number", type=int, nargs="?", help="Week number (default: current)")

    subparsers.add_parser("plan", help="Show all plan weeks")

    sync_p = subparsers.add_parser("sync", help="Sync activities from intervals.icu")
    sync_p.add_argument("--start", type=_parse_date, help="Start date (YYYY-MM-DD)")
    sync_p.add_argument("--end", type=_parse_date, help="End date (YYYY-MM-DD)")

    clear_p = subparsers.add_parser("clear-activities", help="Delete all synced activities")
    clear_p.add_argument("--yes", action="store_true", help="Confirm deletion")

    subparsers.add_parser("status", help="Show sync status and progress")

    serve_p = subparsers.add_parser("serve", help="Run the API server")
    serve_p.add_argument("--host", type=str, help="Bind address")
    serve_p.add_argument("--port", type=int, help="Port")
    serve_p.add_argument("--reload", action="store_true", help="Auto-reload on code changes")

    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level, secrets=[settings.intervals_icu_api_key])

    commands = {
        "week": cmd_week,
        "plan": cmd_plan,
        "sync": cmd_sync,
        "clear-activities": cmd_clear_activities,
        "status": cmd_status,
        "serve": cmd_serve,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return

    try:
        command(args)
    except (TriPlanError, IntegrationError) as e:
        console.print(f"[red]Error: {e.message}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
