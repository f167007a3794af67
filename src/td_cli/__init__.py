"""
td - per-project task tracker.

Usage:
    td add "Write tests" --desc "Cover the codec" --tags "tests, codec"
    td ls
"""

from __future__ import annotations

import typer

from td_cli.cli.commands import register_commands
from td_cli.cli.helpers import configure_logging, console

__version__ = "0.1.0"
__author__ = "td contributors"

app = typer.Typer(
    name="td",
    help="td - keep tasks as plain files, scoped to the git repository you are working in.",
    epilog=f"Author: {__author__}",
    add_completion=False,
    invoke_without_command=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"td {__version__}", highlight=False)
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the td version and exit",
    ),
) -> None:
    """td - keep tasks as plain files, scoped to the git repository you are working in."""
    configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        console.print("No command provided. Use --help for more information.")


register_commands(app)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
