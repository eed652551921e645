from __future__ import annotations

from pathlib import Path

import pytest

from scaffold_cli.core.history import remove_metadata, reset_history
from scaffold_cli.errors import HistoryResetError, PipelineCancelled


class RecordingTools:
    def __init__(self, exc: BaseException | None = None):
        self.exc = exc
        self.init_dirs: list[Path] = []

    def clone(self, url: str, dest: Path) -> None:  # pragma: no cover - unused
        raise AssertionError("clone should not be called")

    def init_repo(self, directory: Path) -> None:
        self.init_dirs.append(directory)
        if self.exc is not None:
            raise self.exc

    def tidy_dependencies(self, directory: Path) -> None:  # pragma: no cover - unused
        raise AssertionError("tidy should not be called")


def test_remove_metadata_deletes_git_dir(template_tree: Path):
    assert remove_metadata(template_tree) is True
    assert not (template_tree / ".git").exists()
    assert (template_tree / "main.go").exists()


def test_remove_metadata_is_idempotent(tmp_path: Path):
    assert remove_metadata(tmp_path) is False
    assert remove_metadata(tmp_path) is False


def test_remove_metadata_handles_gitfile(tmp_path: Path):
    (tmp_path / ".git").write_text("gitdir: ../.git/worktrees/x\n", encoding="utf-8")

    assert remove_metadata(tmp_path) is True
    assert not (tmp_path / ".git").exists()


def test_reset_history_initializes_in_project_dir(template_tree: Path, tmp_path: Path, monkeypatch):
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)
    tools = RecordingTools()

    reset_history(template_tree, tools)

    assert tools.init_dirs == [template_tree]
    assert not (template_tree / ".git").exists()
    assert list(elsewhere.iterdir()) == []


def test_reset_history_propagates_init_failure(template_tree: Path):
    tools = RecordingTools(HistoryResetError("git init exited with status 128"))

    with pytest.raises(HistoryResetError, match="status 128"):
        reset_history(template_tree, tools)


def test_reset_history_wraps_cancellation(template_tree: Path):
    tools = RecordingTools(PipelineCancelled(15))

    with pytest.raises(HistoryResetError, match="cancelled") as excinfo:
        reset_history(template_tree, tools)

    assert isinstance(excinfo.value.__cause__, PipelineCancelled)
