"""Helpers shared by the classroll CLI commands."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import click
from rich.console import Console

from ..persistence.storage import SQLiteStorage
from ..provider import RepositoryProvider, get_provider
from ..repositories.errors import ValidationError

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def provider_from_context(ctx: click.Context) -> RepositoryProvider:
    """Return the provider for this invocation, honouring the root ``--db`` option."""
    state = ctx.find_root().ensure_object(dict)
    provider = state.get("provider")
    if provider is None:
        db_path: Optional[Path] = state.get("db_path")
        provider = RepositoryProvider(SQLiteStorage(db_path)) if db_path else get_provider()
        state["provider"] = provider
    return provider


@contextmanager
def report_errors(console: Console) -> Iterator[None]:
    """Turn validation failures into usage errors and abort on anything unexpected."""
    try:
        yield
    except ValidationError as exc:
        raise click.ClickException(str(exc)) from exc
    except click.ClickException:
        raise
    except Exception as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise click.Abort() from exc
