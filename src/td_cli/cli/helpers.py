"""Shared console, logging and context helpers for td commands."""

from __future__ import annotations

import logging
from typing import NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from td_cli.core.context import TdContext
from td_cli.core.paths import ProjectDirectory, resolve_project_directory

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool = False) -> None:
    """Route library log records through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def get_context(ctx: typer.Context) -> TdContext:
    """Return the injected TdContext, building one from the environment if absent."""
    if isinstance(ctx.obj, TdContext):
        return ctx.obj
    context = TdContext.from_environment()
    ctx.obj = context
    return context


def resolve_project_or_warn(ctx: typer.Context) -> ProjectDirectory:
    """Resolve the project directory, warning when falling back to no-project storage."""
    project = resolve_project_directory(get_context(ctx))
    if project.is_fallback:
        err_console.print(
            "[yellow]Warning: no git remote 'origin' found; "
            f"using shared no-project storage at {escape(str(project.path))}[/yellow]",
            soft_wrap=True,
        )
    return project


def fail(exc: Exception) -> NoReturn:
    """Print a one-line error and exit with status 1."""
    logger.debug("Command failed", exc_info=exc)
    console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True)
    raise typer.Exit(1)
