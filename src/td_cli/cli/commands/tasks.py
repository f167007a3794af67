"""Task commands: ``td add`` and ``td ls``."""

from __future__ import annotations

from typing import Optional

import typer
from rich.markup import escape

from td_cli.cli.helpers import console, fail, resolve_project_or_warn
from td_cli.runtime.home import ConfigurationError
from td_cli.tasks.frontmatter import FormatError
from td_cli.tasks.models import Task
from td_cli.tasks.store import TaskStore


def add(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="The title of the task"),
    desc: Optional[str] = typer.Option(None, "--desc", "-d", help="A description of the task"),
    tags: Optional[str] = typer.Option(None, "--tags", "-t", help="Comma-separated list of tags"),
) -> None:
    """Adds a new task to the current project."""
    task = Task.new(title, description=desc, tags=tags)
    try:
        project = resolve_project_or_warn(ctx)
        path = TaskStore(project.path).add(task)
    except (ConfigurationError, FormatError, OSError) as exc:
        fail(exc)

    console.print(f"[green]Added task[/green] {task.id}: {escape(task.title)}", highlight=False, soft_wrap=True)
    console.print(str(path), markup=False, highlight=False, soft_wrap=True, style="dim")


def ls(ctx: typer.Context) -> None:
    """List tasks."""
    try:
        project = resolve_project_or_warn(ctx)
        names = TaskStore(project.path).list_names()
    except (ConfigurationError, OSError) as exc:
        fail(exc)

    for name in names:
        console.print(name, markup=False, highlight=False, soft_wrap=True)
