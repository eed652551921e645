"""
go-scaffold - bootstrap a Go service from a template repository.

Usage:
    go-scaffold --project acme-service
    go-scaffold --repo-url https://example.com/org/boilerplate --project acme-service --dir /tmp/
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _dist_version

import typer
from rich.console import Console

from .cli.commands import register_new_command

try:
    __version__ = _dist_version("go-scaffold")
except PackageNotFoundError:
    __version__ = "dev"

console = Console()

app = typer.Typer(
    name="go-scaffold",
    help="Create a new project from a template repository",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

register_new_command(app, console=console, version=__version__)


def main():
    app()


if __name__ == "__main__":
    main()
