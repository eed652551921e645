"""Exception hierarchy for the scaffolding pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .pipeline import PipelineResult, PipelineState


class PipelineCancelled(Exception):
    """Raised from a signal handler when SIGINT or SIGTERM arrives mid-run."""

    def __init__(self, signum: int | None = None):
        self.signum = signum
        super().__init__(f"cancelled by signal {signum}" if signum is not None else "cancelled")


class ScaffoldError(Exception):
    """Base exception for pipeline step failures.

    Every subclass carries a short ``context`` prefix identifying the step,
    so the top-level message reads ``"clone failed: <cause>"``.
    """

    context = "scaffold failed"

    def __init__(self, message: str, *, step: "PipelineState | None" = None):
        self.message = message
        self.step = step
        self.result: "PipelineResult | None" = None
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.context}: {self.message}"


class CloneError(ScaffoldError):
    """Network or filesystem failure (or cancellation) while fetching the template."""

    context = "clone failed"


class RewriteError(ScaffoldError):
    """Read or write failure while substituting the import path."""

    context = "replace imports failed"


class HistoryResetError(ScaffoldError):
    """Deleting the cloned metadata or reinitializing the repository failed."""

    context = "history reset failed"


class TidyError(ScaffoldError):
    """The dependency tidy subprocess failed or is unavailable."""

    context = "dependency tidy failed"


__all__ = [
    "CloneError",
    "HistoryResetError",
    "PipelineCancelled",
    "RewriteError",
    "ScaffoldError",
    "TidyError",
]
