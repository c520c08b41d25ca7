"""Course commands."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from .utils import provider_from_context, report_errors


@click.group()
def course():
    """Manage a teacher's courses."""


@course.command()
@click.argument("name")
@click.argument("code")
@click.option("--teacher", "teacher_id", required=True, help="Owning teacher id")
@click.pass_context
def add(ctx, name, code, teacher_id):
    """Create a course."""
    console = Console()
    with report_errors(console):
        created = provider_from_context(ctx).course_repository.create_course(name, code, teacher_id)
        console.print(
            f"[green]Created {created.course_code} {created.course_name} as {created.course_id}[/green]"
        )


@course.command("list")
@click.option("--teacher", "teacher_id", required=True, help="Owning teacher id")
@click.pass_context
def list_courses(ctx, teacher_id):
    """List a teacher's courses with their subjects."""
    console = Console()
    with report_errors(console):
        repository = provider_from_context(ctx).course_repository
        courses = repository.get_courses_with_subjects_by_teacher(teacher_id)
        if not courses:
            console.print("[yellow]No courses found[/yellow]")
            return

        table = Table(title=f"Courses of {teacher_id}")
        table.add_column("ID", style="cyan")
        table.add_column("Code", style="green")
        table.add_column("Name", style="magenta")
        table.add_column("Subjects")
        for entry in courses:
            table.add_row(
                entry.course.course_id,
                entry.course.course_code,
                entry.course.course_name,
                ", ".join(item.subject_code for item in entry.subjects) or "--",
            )
        console.print(table)


@course.command()
@click.argument("course_id")
@click.pass_context
def delete(ctx, course_id):
    """Delete a course; its students stay on the roster without a course."""
    console = Console()
    with report_errors(console):
        repository = provider_from_context(ctx).course_repository
        record = repository.get_course_by_id(course_id)
        if record is None:
            raise click.ClickException(f"Course not found: {course_id}")
        repository.delete_course(record)
        console.print(f"[green]Deleted course {record.course_code}[/green]")
