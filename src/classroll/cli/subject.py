"""Subject commands."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from .utils import provider_from_context, report_errors


@click.group()
def subject():
    """Manage a teacher's subjects."""


@subject.command()
@click.argument("name")
@click.argument("code")
@click.option("--teacher", "teacher_id", required=True, help="Owning teacher id")
@click.option("--description", default="", help="Free-form description")
@click.option("--course", "course_ids", multiple=True, help="Course to link (repeatable)")
@click.pass_context
def add(ctx, name, code, teacher_id, description, course_ids):
    """Create a subject, optionally linked to courses."""
    console = Console()
    with report_errors(console):
        repository = provider_from_context(ctx).subject_repository
        created = repository.create_subject_with_courses(
            name, code, teacher_id, course_ids, description
        )
        console.print(
            f"[green]Created {created.subject_code} {created.subject_name} as {created.subject_id}[/green]"
        )


@subject.command("list")
@click.option("--teacher", "teacher_id", required=True, help="Owning teacher id")
@click.option("--search", "query", default=None, help="Filter by name or code")
@click.pass_context
def list_subjects(ctx, teacher_id, query):
    """List a teacher's subjects."""
    console = Console()
    with report_errors(console):
        repository = provider_from_context(ctx).subject_repository
        if query:
            subjects = repository.search_subjects(query, teacher_id)
        else:
            subjects = repository.get_subjects_by_teacher(teacher_id)
        if not subjects:
            console.print("[yellow]No subjects found[/yellow]")
            return

        table = Table(title=f"Subjects of {teacher_id}")
        table.add_column("ID", style="cyan")
        table.add_column("Code", style="green")
        table.add_column("Name", style="magenta")
        table.add_column("Courses")
        for record in subjects:
            courses = repository.get_course_ids_for_subject(record.subject_id)
            table.add_row(
                record.subject_id,
                record.subject_code,
                record.subject_name,
                ", ".join(courses) or "--",
            )
        console.print(table)


@subject.command()
@click.argument("subject_id")
@click.argument("course_id")
@click.pass_context
def link(ctx, subject_id, course_id):
    """Link a subject to a course."""
    console = Console()
    with report_errors(console):
        repository = provider_from_context(ctx).subject_repository
        if repository.assign_subject_to_course(subject_id, course_id):
            console.print(f"[green]Linked {subject_id} to {course_id}[/green]")
        else:
            console.print(f"[yellow]{subject_id} is already linked to {course_id}[/yellow]")
