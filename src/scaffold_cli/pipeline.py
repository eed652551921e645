"""The scaffolding pipeline: clone, rewrite imports, reset history, tidy.

Steps run strictly in order. The first failure moves the pipeline to
``FAILED`` and is re-raised with its step attached; completed steps are never
rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Protocol

from .config import ScaffoldOptions, ScaffoldPlan
from .core.history import reset_history
from .core.rewrite import replace_imports_in_dir
from .core.tools import ToolRunner, check_clone_target
from .errors import (
    CloneError,
    HistoryResetError,
    PipelineCancelled,
    RewriteError,
    ScaffoldError,
    TidyError,
)

__all__ = [
    "PipelineResult",
    "PipelineState",
    "StepObserver",
    "run_pipeline",
]

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    CLONING = "cloning"
    REWRITING = "rewriting"
    RESETTING_HISTORY = "resetting_history"
    TIDYING = "tidying"
    DONE = "done"
    FAILED = "failed"


STEP_LABELS: dict[PipelineState, str] = {
    PipelineState.CLONING: "Clone template repository",
    PipelineState.REWRITING: "Replace import paths",
    PipelineState.RESETTING_HISTORY: "Reset git history",
    PipelineState.TIDYING: "Tidy dependencies",
}

_STEP_ERRORS: dict[PipelineState, type[ScaffoldError]] = {
    PipelineState.CLONING: CloneError,
    PipelineState.REWRITING: RewriteError,
    PipelineState.RESETTING_HISTORY: HistoryResetError,
    PipelineState.TIDYING: TidyError,
}


class StepObserver(Protocol):
    """Receives step transitions; :class:`~scaffold_cli.cli.ui.StepTracker` satisfies it."""

    def add(self, key: str, label: str) -> None: ...

    def start(self, key: str, detail: str = "") -> None: ...

    def complete(self, key: str, detail: str = "") -> None: ...

    def error(self, key: str, detail: str = "") -> None: ...


@dataclass
class PipelineResult:
    plan: ScaffoldPlan
    state: PipelineState = PipelineState.CLONING
    rewritten: list[Path] = field(default_factory=list)


def _clone(plan: ScaffoldPlan, tools: ToolRunner, _result: PipelineResult) -> str:
    check_clone_target(plan.target_dir)
    tools.clone(plan.repo_url, plan.target_dir)
    return str(plan.target_dir)


def _rewrite(plan: ScaffoldPlan, _tools: ToolRunner, result: PipelineResult) -> str:
    logger.info("Replacing imports... (%s -> %s)", plan.old_import, plan.new_import)
    result.rewritten = replace_imports_in_dir(plan.target_dir, plan.old_import, plan.new_import)
    return f"{len(result.rewritten)} file(s)"


def _reset(plan: ScaffoldPlan, tools: ToolRunner, _result: PipelineResult) -> str:
    reset_history(plan.target_dir, tools)
    return "fresh repository"


def _tidy(plan: ScaffoldPlan, tools: ToolRunner, _result: PipelineResult) -> str:
    logger.info("Running go mod tidy...")
    tools.tidy_dependencies(plan.target_dir)
    return "go mod tidy"


_STEPS: tuple[tuple[PipelineState, Callable[[ScaffoldPlan, ToolRunner, PipelineResult], str]], ...] = (
    (PipelineState.CLONING, _clone),
    (PipelineState.REWRITING, _rewrite),
    (PipelineState.RESETTING_HISTORY, _reset),
    (PipelineState.TIDYING, _tidy),
)


_STEP_ACTIONS: dict[PipelineState, str] = {
    PipelineState.CLONING: "git clone",
    PipelineState.REWRITING: "replace imports",
    PipelineState.RESETTING_HISTORY: "git init",
    PipelineState.TIDYING: "go mod tidy",
}


def _run_step(
    state: PipelineState,
    step: Callable[[ScaffoldPlan, ToolRunner, PipelineResult], str],
    plan: ScaffoldPlan,
    tools: ToolRunner,
    result: PipelineResult,
) -> str:
    try:
        return step(plan, tools, result)
    except OSError as exc:
        raise _STEP_ERRORS[state](str(exc), step=state) from exc


def run_pipeline(
    options: ScaffoldOptions,
    tools: ToolRunner,
    *,
    tracker: StepObserver | None = None,
) -> PipelineResult:
    """Scaffold a new project described by ``options`` using ``tools``.

    Raises the failing step's :class:`~scaffold_cli.errors.ScaffoldError`
    subclass with ``step`` and ``result`` set; steps after it are not
    executed. A shutdown signal arriving at any point of a step, tracker
    callbacks included, is reported as that step's error.
    """
    plan = ScaffoldPlan.from_options(options)
    result = PipelineResult(plan=plan)

    if tracker is not None:
        for state, _ in _STEPS:
            tracker.add(state.value, STEP_LABELS[state])

    for state, step in _STEPS:
        result.state = state
        try:
            if tracker is not None:
                tracker.start(state.value)
            detail = _run_step(state, step, plan, tools, result)
            if tracker is not None:
                tracker.complete(state.value, detail)
        except PipelineCancelled as exc:
            error = _STEP_ERRORS[state](f"{_STEP_ACTIONS[state]} cancelled", step=state)
            _fail(result, state, error, tracker)
            raise error from exc
        except ScaffoldError as exc:
            _fail(result, state, exc, tracker)
            raise

    result.state = PipelineState.DONE
    return result


def _fail(
    result: PipelineResult,
    state: PipelineState,
    exc: ScaffoldError,
    tracker: StepObserver | None,
) -> None:
    result.state = PipelineState.FAILED
    exc.step = state
    exc.result = result
    if tracker is not None:
        tracker.error(state.value, exc.message)
