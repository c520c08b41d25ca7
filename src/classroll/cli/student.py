"""Student roster commands."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from ..services.name_format import StudentNameFormat, format_student_name
from ..services.student_export import export_students, import_students
from .utils import provider_from_context, report_errors

NameFormatChoice = click.Choice([fmt.name for fmt in StudentNameFormat], case_sensitive=False)


@click.group()
def student():
    """Manage a teacher's students."""


@student.command()
@click.argument("first_name")
@click.argument("last_name")
@click.option("--middle-name", default="", help="Middle name")
@click.option("--course", "course_id", default=None, help="Course to place the student in")
@click.option("--teacher", "teacher_id", required=True, help="Owning teacher id")
@click.pass_context
def add(ctx, first_name, last_name, middle_name, course_id, teacher_id):
    """Add a student and assign them to a teacher."""
    console = Console()
    with report_errors(console):
        repository = provider_from_context(ctx).student_repository
        created = repository.create_student(first_name, middle_name, last_name, course_id, teacher_id)
        console.print(f"[green]Added {created.full_name} as {created.student_id}[/green]")


@student.command("list")
@click.option("--teacher", "teacher_id", required=True, help="Owning teacher id")
@click.option("--search", "query", default=None, help="Filter by name")
@click.option(
    "--name-format",
    type=NameFormatChoice,
    default=StudentNameFormat.FIRST_MIDDLE_LAST.name,
    show_default=True,
    help="How to display student names",
)
@click.pass_context
def list_students(ctx, teacher_id, query, name_format):
    """List the students assigned to a teacher."""
    console = Console()
    with report_errors(console):
        repository = provider_from_context(ctx).student_repository
        if query:
            students = repository.search_students(query, teacher_id)
        else:
            students = repository.get_students_by_teacher(teacher_id)
        if not students:
            console.print("[yellow]No students found[/yellow]")
            return

        fmt = StudentNameFormat.from_string(name_format)
        table = Table(title=f"Students of {teacher_id}")
        table.add_column("ID", style="cyan")
        table.add_column("Name", style="magenta")
        table.add_column("Course", style="green")
        for record in students:
            table.add_row(
                record.student_id,
                format_student_name(record.first_name, record.middle_name, record.last_name, fmt),
                record.course_id or "--",
            )
        console.print(table)


@student.command()
@click.argument("student_id")
@click.pass_context
def delete(ctx, student_id):
    """Delete a student together with their links and check-ins."""
    console = Console()
    with report_errors(console):
        repository = provider_from_context(ctx).student_repository
        record = repository.get_student_by_id(student_id)
        if record is None:
            raise click.ClickException(f"Student not found: {student_id}")
        repository.delete_student(record)
        console.print(f"[green]Deleted {record.full_name}[/green]")


@student.command()
@click.option("--teacher", "teacher_id", required=True, help="Owning teacher id")
@click.option(
    "--output",
    type=click.File("w"),
    default="-",
    show_default=True,
    help="File to write the JSON export to",
)
@click.pass_context
def export(ctx, teacher_id, output):
    """Export a teacher's students as JSON."""
    console = Console(stderr=True)
    with report_errors(console):
        students = provider_from_context(ctx).student_repository.get_students_by_teacher(teacher_id)
        document = export_students(students)
        output.write(document.to_json())
        output.write("\n")
        console.print(f"[green]Exported {document.student_count} students[/green]")


@student.command("import")
@click.argument("source", type=click.File("r"))
@click.option("--teacher", "teacher_id", required=True, help="Owning teacher id")
@click.pass_context
def import_command(ctx, source, teacher_id):
    """Import students from a JSON export."""
    console = Console()
    with report_errors(console):
        repository = provider_from_context(ctx).student_repository
        result = import_students(repository, source.read(), teacher_id)
        if not result.is_success:
            raise click.ClickException(result.error_message)
        console.print(f"[green]Imported {result.success_count} students[/green]")
        if result.skipped_count:
            console.print(
                f"[yellow]Skipped {result.skipped_count}: {', '.join(result.skipped_names)}[/yellow]"
            )
