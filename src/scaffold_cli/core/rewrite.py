"""Literal import-path substitution across a cloned tree."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Iterable

from ..errors import RewriteError

__all__ = ["DEFAULT_SUFFIXES", "replace_imports_in_dir", "replace_in_file"]

logger = logging.getLogger(__name__)

DEFAULT_SUFFIXES: tuple[str, ...] = (".go", ".mod")


def replace_in_file(path: Path, old: str, new: str) -> bool:
    """Replace every occurrence of ``old`` with ``new`` in ``path``.

    Content is handled as bytes so the file's encoding is never touched. The
    original permission bits are re-applied after writing. Returns ``True``
    when the file was rewritten and ``False`` when ``old`` did not occur.
    """
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
        content = path.read_bytes()
    except OSError as exc:
        raise RewriteError(f"cannot read {path}: {exc}") from exc

    old_bytes = old.encode("utf-8")
    if old_bytes not in content:
        return False

    updated = content.replace(old_bytes, new.encode("utf-8"))
    try:
        path.write_bytes(updated)
        os.chmod(path, mode)
    except OSError as exc:
        raise RewriteError(f"cannot write {path}: {exc}") from exc
    return True


def replace_imports_in_dir(
    root: Path,
    old: str,
    new: str,
    suffixes: Iterable[str] = DEFAULT_SUFFIXES,
) -> list[Path]:
    """Rewrite ``old`` to ``new`` in every file under ``root`` ending in ``suffixes``.

    Matching is plain substring matching: an ``old`` that is a prefix of a
    longer path (``example.com/org/boilerplate-extras``) is rewritten too.
    Traversal order is whatever ``os.walk`` yields; symlinks are skipped.
    The first unreadable directory or file aborts the walk.

    Returns the paths that were actually modified.
    """
    if not old:
        raise RewriteError("old import path must not be empty")
    root = Path(root)
    if not root.is_dir():
        raise RewriteError(f"{root} is not a directory")

    suffixes = tuple(suffixes)

    def _raise(exc: OSError) -> None:
        raise RewriteError(f"cannot read {exc.filename}: {exc}") from exc

    rewritten: list[Path] = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise):
        for name in filenames:
            if not name.endswith(suffixes):
                continue
            path = Path(dirpath) / name
            if path.is_symlink() or not path.is_file():
                continue
            if replace_in_file(path, old, new):
                logger.debug("rewrote %s", path)
                rewritten.append(path)
    return rewritten
