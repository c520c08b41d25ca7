"""Enrollment commands."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from .utils import provider_from_context, report_errors


@click.group()
def enroll():
    """Enroll students in subjects."""


@enroll.command()
@click.argument("student_id")
@click.argument("subject_ids", nargs=-1, required=True)
@click.pass_context
def add(ctx, student_id, subject_ids):
    """Enroll a student in one or more subjects."""
    console = Console()
    with report_errors(console):
        provider_from_context(ctx).enrollment_repository.enroll_student_in_subjects(
            student_id, subject_ids
        )
        console.print(f"[green]Enrolled {student_id} in {', '.join(subject_ids)}[/green]")


@enroll.command()
@click.argument("student_id")
@click.argument("subject_id")
@click.pass_context
def remove(ctx, student_id, subject_id):
    """Drop a student from a subject."""
    console = Console()
    with report_errors(console):
        provider_from_context(ctx).enrollment_repository.unenroll_student(student_id, subject_id)
        console.print(f"[green]Removed {student_id} from {subject_id}[/green]")


@enroll.command("list")
@click.option("--student", "student_id", default=None, help="Show a student's subjects")
@click.option("--subject", "subject_id", default=None, help="Show a subject's students")
@click.pass_context
def list_enrollments(ctx, student_id, subject_id):
    """Show enrollments for one student or one subject."""
    console = Console()
    if bool(student_id) == bool(subject_id):
        raise click.UsageError("Pass exactly one of --student or --subject")

    with report_errors(console):
        repository = provider_from_context(ctx).enrollment_repository
        if student_id:
            found = repository.get_student_with_subjects(student_id)
            if found is None:
                raise click.ClickException(f"Student not found: {student_id}")
            table = Table(title=f"Subjects of {found.student.full_name}")
            table.add_column("ID", style="cyan")
            table.add_column("Code", style="green")
            table.add_column("Name", style="magenta")
            for item in found.subjects:
                table.add_row(item.subject_id, item.subject_code, item.subject_name)
        else:
            found = repository.get_subject_with_enrolled_students(subject_id)
            if found is None:
                raise click.ClickException(f"Subject not found: {subject_id}")
            table = Table(title=f"Students in {found.subject.subject_code}")
            table.add_column("ID", style="cyan")
            table.add_column("Name", style="magenta")
            for item in found.students:
                table.add_row(item.student_id, item.full_name)
        console.print(table)
