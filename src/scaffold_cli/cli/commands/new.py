"""The scaffolding command: clone a template and turn it into a new project."""

from __future__ import annotations

from typing import Callable

import typer
from rich.console import Console

from ...config import (
    DEFAULT_BASE_DIR,
    DEFAULT_ENV,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PROJECT,
    DEFAULT_REPO_URL,
    ScaffoldOptions,
)
from ...core.cancellation import cancellation_scope
from ...core.tools import SubprocessTools, ToolRunner
from ...errors import PipelineCancelled, ScaffoldError
from ...logs import configure_logging
from ...pipeline import run_pipeline
from ..ui import StepTracker

NEW_COMMAND_DOC = """
Create a new project from a template repository.

Steps:
1. Clone the template into <dir>/<project>
2. Replace the template's import path in .go and .mod files
3. Remove the template's .git folder and run git init
4. Run go mod tidy inside the new project

Every flag can also be set through its environment variable.
"""


def register_new_command(
    app: typer.Typer,
    *,
    console: Console,
    version: str,
    tools_factory: Callable[[], ToolRunner] = SubprocessTools,
) -> None:
    """Attach the scaffolding command to ``app``.

    ``tools_factory`` builds the :class:`ToolRunner` used for git and go so
    tests can substitute doubles.
    """

    @app.command(help=NEW_COMMAND_DOC)
    def new(
        env: str = typer.Option(DEFAULT_ENV, "--env", envvar="ENV", help="Environment name"),
        log_level: str = typer.Option(
            DEFAULT_LOG_LEVEL, "--log-level", envvar="LOG_LEVEL", help="Log level"
        ),
        repo_url: str = typer.Option(DEFAULT_REPO_URL, "--repo-url", envvar="REPO_URL", help="Repo URL"),
        project: str = typer.Option(DEFAULT_PROJECT, "--project", envvar="PROJECT", help="Project name"),
        base_dir: str = typer.Option(DEFAULT_BASE_DIR, "--dir", envvar="DIR", help="Directory"),
    ) -> None:
        options = ScaffoldOptions.from_cli(
            env=env,
            log_level=log_level,
            repo_url=repo_url,
            project=project,
            base_dir=base_dir,
        )
        logger = configure_logging(options.env, options.log_level, version=version)

        tracker = StepTracker(f"Scaffold {options.project}")
        console.print("Cloning the repo...")
        try:
            with cancellation_scope():
                run_pipeline(options, tools_factory(), tracker=tracker)
        except (ScaffoldError, PipelineCancelled) as exc:
            console.print(tracker.render())
            logger.critical("run failed: %s", exc, extra={"error": exc})
            raise typer.Exit(1)

        console.print(tracker.render())
        console.print("Done!")


__all__ = ["NEW_COMMAND_DOC", "register_new_command"]
