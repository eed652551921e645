from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from scaffold_cli.errors import CloneError, TidyError

TEMPLATE_IMPORT = "example.com/org/boilerplate"

GO_MOD = f"""module {TEMPLATE_IMPORT}

go 1.22

require go.uber.org/zap v1.27.0
"""

MAIN_GO = f"""package main

import (
\t"{TEMPLATE_IMPORT}/internal/app"
\t"{TEMPLATE_IMPORT}/internal/config"
)

func main() {{
\tapp.Run(config.Load())
}}
"""

APP_GO = f"""package app

import "{TEMPLATE_IMPORT}/internal/config"

func Run(c config.Config) {{}}
"""

README = f"See https://{TEMPLATE_IMPORT} for details.\n"


@pytest.fixture()
def template_tree(tmp_path: Path) -> Path:
    """A Go template checkout, including a fake ``.git`` directory."""
    root = tmp_path / "template" / "boilerplate"
    (root / "internal" / "app").mkdir(parents=True)
    (root / "internal" / "config").mkdir(parents=True)
    (root / ".git" / "objects").mkdir(parents=True)
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    (root / "go.mod").write_text(GO_MOD, encoding="utf-8")
    (root / "main.go").write_text(MAIN_GO, encoding="utf-8")
    (root / "internal" / "app" / "app.go").write_text(APP_GO, encoding="utf-8")
    (root / "internal" / "config" / "config.go").write_text(
        "package config\n\ntype Config struct{}\n\nfunc Load() Config { return Config{} }\n",
        encoding="utf-8",
    )
    (root / "README.md").write_text(README, encoding="utf-8")
    return root


class FakeTools:
    """Records tool calls; ``clone`` copies a prepared template tree."""

    def __init__(self, source: Path, *, fail: str | None = None):
        self.source = source
        self.fail = fail
        self.calls: list[tuple[str, Path]] = []

    def clone(self, url: str, dest: Path) -> None:
        self.calls.append(("clone", dest))
        if self.fail == "clone":
            raise CloneError(f"repository {url} not found")
        shutil.copytree(self.source, dest, dirs_exist_ok=True)

    def init_repo(self, directory: Path) -> None:
        self.calls.append(("init_repo", directory))
        (directory / ".git").mkdir()
        (directory / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")

    def tidy_dependencies(self, directory: Path) -> None:
        self.calls.append(("tidy_dependencies", directory))
        if self.fail == "tidy":
            raise TidyError("go mod tidy exited with status 1")

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture()
def fake_tools(template_tree: Path) -> FakeTools:
    return FakeTools(template_tree)


@pytest.fixture()
def fake_tools_factory(template_tree: Path):
    def factory(fail: str | None = None) -> FakeTools:
        return FakeTools(template_tree, fail=fail)

    return factory


@pytest.fixture()
def git_template(tmp_path: Path, template_tree: Path) -> Path:
    """Commit ``template_tree`` (minus its fake metadata) into a real git repo."""
    shutil.rmtree(template_tree / ".git")
    subprocess.run(["git", "init", "-q"], cwd=template_tree, check=True)
    subprocess.run(["git", "config", "user.name", "Template"], cwd=template_tree, check=True)
    subprocess.run(["git", "config", "user.email", "template@example.com"], cwd=template_tree, check=True)
    subprocess.run(["git", "add", "."], cwd=template_tree, check=True)
    subprocess.run(["git", "-c", "commit.gpgsign=false", "commit", "-q", "-m", "Initial template"], cwd=template_tree, check=True)
    return template_tree
