"""
Command-line interface for classroll.

Provides the CLI command group and registers individual subcommands.
"""

from __future__ import annotations

from pathlib import Path

import click

from .. import __version__
from .attendance import attendance
from .course import course
from .enroll import enroll
from .student import student
from .subject import subject
from .teacher import teacher
from .utils import configure_logging


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="SQLite database file (defaults to $CLASSROLL_DB_PATH or ~/.classroll/classroll.db)",
)
@click.option("--verbose", is_flag=True, help="Log repository activity to stderr")
@click.pass_context
def main(ctx, db_path, verbose):
    """Classroll - classroom attendance tracking."""
    configure_logging(verbose)
    ctx.ensure_object(dict)["db_path"] = db_path


# Register CLI subcommands
main.add_command(teacher)
main.add_command(student)
main.add_command(course)
main.add_command(subject)
main.add_command(enroll)
main.add_command(attendance)


if __name__ == "__main__":
    main()
