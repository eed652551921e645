"""External tool capability: clone, repository init and dependency tidy.

The pipeline only talks to :class:`ToolRunner`; :class:`SubprocessTools` is the
production implementation backed by the ``git`` and ``go`` executables.
Children inherit the parent's standard streams, so clone progress and tool
diagnostics go straight to the terminal.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Protocol, runtime_checkable

from ..errors import CloneError, HistoryResetError, PipelineCancelled, ScaffoldError, TidyError

__all__ = [
    "SubprocessTools",
    "ToolRunner",
    "check_clone_target",
]

logger = logging.getLogger(__name__)


@runtime_checkable
class ToolRunner(Protocol):
    """Operations the pipeline delegates to external tools."""

    def clone(self, url: str, dest: Path) -> None:
        """Materialize the default branch of ``url`` at ``dest``."""
        ...

    def init_repo(self, directory: Path) -> None:
        """Create a new, empty repository in ``directory``."""
        ...

    def tidy_dependencies(self, directory: Path) -> None:
        """Reconcile the dependency manifest in ``directory`` with its imports."""
        ...


def check_clone_target(dest: Path) -> None:
    """Raise :class:`CloneError` if ``dest`` exists and is not an empty directory."""
    if not dest.exists():
        return
    if not dest.is_dir():
        raise CloneError(f"target path {dest} exists and is not a directory")
    if any(dest.iterdir()):
        raise CloneError(f"target directory {dest} already exists and is not empty")


def _run(
    cmd: list[str],
    *,
    cwd: Path | None,
    error_cls: type[ScaffoldError],
    action: str,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> None:
    logger.debug("running %s (cwd=%s)", " ".join(cmd), cwd)
    try:
        runner(cmd, cwd=str(cwd) if cwd is not None else None, check=True)
    except FileNotFoundError as exc:
        raise error_cls(f"{cmd[0]} executable not found on PATH") from exc
    except subprocess.CalledProcessError as exc:
        raise error_cls(f"{action} exited with status {exc.returncode}") from exc
    except PipelineCancelled as exc:
        raise error_cls(f"{action} cancelled") from exc
    except OSError as exc:
        raise error_cls(f"{action} could not start: {exc}") from exc


class SubprocessTools:
    """:class:`ToolRunner` backed by ``git`` and ``go`` subprocesses."""

    def __init__(
        self,
        git: str = "git",
        go: str = "go",
        *,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ):
        self.git = git
        self.go = go
        self._runner = runner

    def clone(self, url: str, dest: Path) -> None:
        _run(
            [self.git, "clone", "--progress", url, str(dest)],
            cwd=None,
            error_cls=CloneError,
            action="git clone",
            runner=self._runner,
        )

    def init_repo(self, directory: Path) -> None:
        _run(
            [self.git, "init"],
            cwd=directory,
            error_cls=HistoryResetError,
            action="git init",
            runner=self._runner,
        )

    def tidy_dependencies(self, directory: Path) -> None:
        _run(
            [self.go, "mod", "tidy"],
            cwd=directory,
            error_cls=TidyError,
            action="go mod tidy",
            runner=self._runner,
        )
