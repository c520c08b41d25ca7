"""
Attendance commands.

Recording, listing and summarising check-ins, plus the readiness check that
tells a teacher what is missing before attendance can be taken.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from ..core.models import AttendanceStatus
from ..repositories.attendance import AttendanceStats
from ..services.readiness import blocker_feedback, check_readiness, warning_feedback
from .utils import provider_from_context, report_errors

StatusChoice = click.Choice([status.value for status in AttendanceStatus], case_sensitive=False)
DateOption = click.DateTime(formats=["%Y-%m-%d"])
DEFAULT_LOOKBACK_DAYS = 30


def _stats_table(title: str, stats: AttendanceStats) -> Table:
    table = Table(title=title)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Total check-ins", str(stats.total_check_ins))
    table.add_row("Today", str(stats.today_check_ins))
    table.add_row("Present", str(stats.present_count))
    table.add_row("Absent", str(stats.absent_count))
    table.add_row("Late", str(stats.late_count))
    table.add_row("Excused", str(stats.excused_count))
    table.add_row("Attendance rate", f"{stats.attendance_rate}%")
    return table


@click.group()
def attendance():
    """Record and review attendance."""


@attendance.command()
@click.argument("subject_id")
@click.argument("student_ids", nargs=-1)
@click.option("--teacher", "teacher_id", required=True, help="Teacher taking attendance")
@click.option(
    "--status",
    type=StatusChoice,
    default=AttendanceStatus.PRESENT.value,
    show_default=True,
    help="Status recorded for every listed student",
)
@click.option("--date", "on", type=DateOption, default=None, help="Date to record (YYYY-MM-DD)")
@click.pass_context
def record(ctx, subject_id, student_ids, teacher_id, status, on: Optional[datetime]):
    """Record a check-in in SUBJECT_ID for each listed student."""
    console = Console()
    with report_errors(console):
        repository = provider_from_context(ctx).attendance_repository
        chosen = AttendanceStatus(status.upper())
        count = repository.record_bulk_attendance(
            list(student_ids),
            subject_id,
            teacher_id,
            {student_id: chosen for student_id in student_ids},
            on=on.date() if on else None,
        )
        console.print(f"[green]Recorded {count} check-ins as {chosen.value}[/green]")


@attendance.command("list")
@click.option("--teacher", "teacher_id", required=True, help="Teacher whose records to list")
@click.option("--subject", "subject_id", default=None, help="Limit to one subject")
@click.option("--from", "start", type=DateOption, default=None, help="First date (default: 30 days ago)")
@click.option("--to", "end", type=DateOption, default=None, help="Last date (default: today)")
@click.pass_context
def list_check_ins(ctx, teacher_id, subject_id, start, end):
    """List check-ins in a date range."""
    console = Console()
    with report_errors(console):
        repository = provider_from_context(ctx).attendance_repository
        end_date = end.date() if end else datetime.now().date()
        start_date = start.date() if start else end_date - timedelta(days=DEFAULT_LOOKBACK_DAYS)
        if start_date > end_date:
            raise click.BadParameter("--from must not be after --to")

        check_ins = repository.get_filtered_check_ins(teacher_id, subject_id, start_date, end_date)
        if not check_ins:
            console.print("[yellow]No check-ins found[/yellow]")
            return

        table = Table(title=f"Check-ins {start_date.isoformat()} to {end_date.isoformat()}")
        table.add_column("Date", style="cyan")
        table.add_column("Time")
        table.add_column("Student", style="magenta")
        table.add_column("Subject", style="green")
        table.add_column("Status", style="yellow")
        for item in check_ins:
            table.add_row(
                item.check_in_date,
                item.check_in_time,
                item.student_id,
                item.subject_id,
                item.status.value,
            )
        console.print(table)


@attendance.command()
@click.option("--teacher", "teacher_id", default=None, help="Summarise a teacher's records")
@click.option("--subject", "subject_id", default=None, help="Summarise one subject")
@click.option("--student", "student_id", default=None, help="Summarise one student")
@click.pass_context
def stats(ctx, teacher_id, subject_id, student_id):
    """Show attendance statistics for a teacher, subject or student."""
    console = Console()
    if sum(1 for value in (teacher_id, subject_id, student_id) if value) != 1:
        raise click.UsageError("Pass exactly one of --teacher, --subject or --student")

    with report_errors(console):
        repository = provider_from_context(ctx).attendance_repository
        if teacher_id:
            summary, title = repository.get_attendance_stats(teacher_id), f"Teacher {teacher_id}"
        elif subject_id:
            summary, title = repository.get_subject_attendance_stats(subject_id), f"Subject {subject_id}"
        else:
            summary, title = repository.get_student_attendance_stats(student_id), f"Student {student_id}"
        console.print(_stats_table(title, summary))


@attendance.command()
@click.option("--teacher", "teacher_id", required=True, help="Teacher to check")
@click.pass_context
def readiness(ctx, teacher_id):
    """Report whether a teacher can start taking attendance."""
    console = Console()
    with report_errors(console):
        state = check_readiness(provider_from_context(ctx), teacher_id)
        for blocker in state.blockers:
            feedback = blocker_feedback(blocker)
            console.print(f"[red]{feedback.title}: {feedback.message}[/red]")
            console.print(f"  Next step: {feedback.action_label}")
        for warning in state.warnings:
            feedback = warning_feedback(warning)
            console.print(f"[yellow]{feedback.title}: {feedback.message}[/yellow]")
        if state.is_ready:
            console.print(
                f"[green]Ready: {state.student_count} students, "
                f"{state.subject_count} subjects, {state.course_count} courses[/green]"
            )
    if not state.is_ready:
        ctx.exit(1)
