"""powerdoc command line interface."""

from __future__ import annotations

import typer
from rich.console import Console

from powerdoc import __version__
from powerdoc.cli.commands import publish

app = typer.Typer(
    name="powerdoc",
    help="Documentation site generator for doclet dumps",
    no_args_is_help=True,
)
console = Console()

app.command(name="publish", help="Generate the documentation site")(publish.publish)


@app.command()
def version() -> None:
    """Show the CLI version."""
    console.print(f"powerdoc version {__version__}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


__all__ = ["app", "main"]
