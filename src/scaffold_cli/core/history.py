"""Discard the template's version-control history and start a fresh one."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from ..errors import HistoryResetError, PipelineCancelled
from .tools import ToolRunner

__all__ = ["METADATA_DIR", "remove_metadata", "reset_history"]

logger = logging.getLogger(__name__)

METADATA_DIR = ".git"


def remove_metadata(project_dir: Path) -> bool:
    """Delete ``project_dir/.git``; returns ``False`` if it was already absent."""
    metadata = Path(project_dir) / METADATA_DIR
    if not metadata.exists() and not metadata.is_symlink():
        return False
    try:
        if metadata.is_dir() and not metadata.is_symlink():
            shutil.rmtree(metadata)
        else:
            # worktrees and submodules use a ".git" file
            metadata.unlink()
    except OSError as exc:
        raise HistoryResetError(f"cannot remove {metadata}: {exc}") from exc
    return True


def reset_history(project_dir: Path, tools: ToolRunner) -> None:
    """Remove cloned metadata, then initialize an empty repository in ``project_dir``."""
    logger.info("Removing .git folder...")
    remove_metadata(project_dir)

    logger.info("Initializing new git repo...")
    try:
        tools.init_repo(Path(project_dir))
    except PipelineCancelled as exc:
        raise HistoryResetError("git init cancelled") from exc
    except OSError as exc:
        raise HistoryResetError(f"git init failed: {exc}") from exc
