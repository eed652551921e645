"""Options and derived values for a single scaffolding run."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "DEFAULT_BASE_DIR",
    "DEFAULT_ENV",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_PROJECT",
    "DEFAULT_REPO_URL",
    "ScaffoldOptions",
    "ScaffoldPlan",
    "strip_scheme",
]

DEFAULT_ENV = "development"
DEFAULT_LOG_LEVEL = "info"
DEFAULT_REPO_URL = "https://github.com/ravilushqa/boilerplate"
DEFAULT_PROJECT = "new-project"
DEFAULT_BASE_DIR = "./"

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")


def strip_scheme(url: str) -> str:
    """Return ``url`` without its ``scheme://`` prefix, trailing slash or ``.git``."""
    path = _SCHEME.sub("", url.strip(), count=1).rstrip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    return path


@dataclass(frozen=True)
class ScaffoldOptions:
    """Static options for one run, built once from flags and environment."""

    env: str = DEFAULT_ENV
    log_level: str = DEFAULT_LOG_LEVEL
    repo_url: str = DEFAULT_REPO_URL
    project: str = DEFAULT_PROJECT
    base_dir: Path = Path(DEFAULT_BASE_DIR)

    @classmethod
    def from_cli(
        cls,
        *,
        env: str | None = None,
        log_level: str | None = None,
        repo_url: str | None = None,
        project: str | None = None,
        base_dir: str | Path | None = None,
    ) -> "ScaffoldOptions":
        """Normalize raw flag values, falling back to defaults for blanks."""
        return cls(
            env=(env or DEFAULT_ENV).strip().lower(),
            log_level=(log_level or DEFAULT_LOG_LEVEL).strip(),
            repo_url=(repo_url or DEFAULT_REPO_URL).strip(),
            project=project or DEFAULT_PROJECT,
            base_dir=Path(base_dir or DEFAULT_BASE_DIR).expanduser(),
        )


@dataclass(frozen=True)
class ScaffoldPlan:
    """Values derived from :class:`ScaffoldOptions` before the pipeline starts.

    Attributes
    ----------
    target_dir:
        ``base_dir / project``; the clone destination and the directory every
        later step operates in.
    old_import:
        The template URL with its scheme stripped, e.g.
        ``github.com/ravilushqa/boilerplate``.
    new_import:
        ``old_import`` with the template's base name (its last path segment)
        replaced by the project name.
    """

    repo_url: str
    target_dir: Path
    old_import: str
    new_import: str

    @property
    def template_name(self) -> str:
        return self.old_import.rsplit("/", 1)[-1]

    @classmethod
    def from_options(cls, options: ScaffoldOptions) -> "ScaffoldPlan":
        old_import = strip_scheme(options.repo_url)
        head, sep, _ = old_import.rpartition("/")
        new_import = f"{head}{sep}{options.project}"
        return cls(
            repo_url=options.repo_url,
            target_dir=options.base_dir / options.project,
            old_import=old_import,
            new_import=new_import,
        )
