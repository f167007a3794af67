"""CLI command modules for td."""

from __future__ import annotations

import typer

from . import tasks


def register_commands(app: typer.Typer) -> None:
    """Attach every td command to the root Typer application."""
    app.command("add")(tasks.add)
    app.command("ls")(tasks.ls)


__all__ = ["register_commands"]
