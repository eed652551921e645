"""Pipeline building blocks: tool capability, import rewriter, history reset."""

from .cancellation import cancellation_scope
from .history import METADATA_DIR, remove_metadata, reset_history
from .rewrite import DEFAULT_SUFFIXES, replace_imports_in_dir, replace_in_file
from .tools import SubprocessTools, ToolRunner, check_clone_target

__all__ = [
    "DEFAULT_SUFFIXES",
    "METADATA_DIR",
    "SubprocessTools",
    "ToolRunner",
    "cancellation_scope",
    "check_clone_target",
    "remove_metadata",
    "replace_imports_in_dir",
    "replace_in_file",
    "reset_history",
]
