"""CLI command modules for go-scaffold."""

from .new import register_new_command

__all__ = ["register_new_command"]
