"""Teacher account commands."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from .utils import provider_from_context, report_errors


@click.group()
def teacher():
    """Register and inspect teacher accounts."""


@teacher.command()
@click.option("--first-name", required=True, help="Given name")
@click.option("--middle-name", default="", help="Middle name")
@click.option("--last-name", required=True, help="Family name")
@click.option("--email", required=True, help="Login email address")
@click.option("--password", prompt=True, hide_input=True, help="Account password")
@click.option("--confirm", prompt="Confirm password", hide_input=True, help="Password again")
@click.pass_context
def register(ctx, first_name, middle_name, last_name, email, password, confirm):
    """Create a teacher account."""
    console = Console()
    with report_errors(console):
        repository = provider_from_context(ctx).teacher_repository
        account = repository.register(first_name, middle_name, last_name, email, password, confirm)
        console.print(f"[green]Registered {account.full_name} as {account.teacher_id}[/green]")


@teacher.command()
@click.option("--email", required=True, help="Login email address")
@click.option("--password", prompt=True, hide_input=True, help="Account password")
@click.pass_context
def login(ctx, email, password):
    """Check credentials and print the teacher id."""
    console = Console()
    with report_errors(console):
        account = provider_from_context(ctx).teacher_repository.login(email, password)
        if account is None:
            raise click.ClickException("Invalid email or password")
        console.print(f"[green]Welcome back, {account.full_name}[/green]")
        console.print(account.teacher_id)


@teacher.command("list")
@click.option("--search", "query", default=None, help="Filter by name or email")
@click.pass_context
def list_teachers(ctx, query):
    """List registered teachers."""
    console = Console()
    with report_errors(console):
        repository = provider_from_context(ctx).teacher_repository
        teachers = repository.search_teachers(query) if query else repository.get_all_teachers()
        if not teachers:
            console.print("[yellow]No teachers found[/yellow]")
            return

        table = Table(title="Teachers")
        table.add_column("ID", style="cyan")
        table.add_column("Name", style="magenta")
        table.add_column("Email", style="green")
        for account in teachers:
            table.add_row(account.teacher_id, account.full_name, account.email)
        console.print(table)
