"""Logging profiles for the scaffolding CLI.

``development`` and ``test`` render through Rich with coloured level names;
every other environment emits one JSON object per line on stderr. All records
carry the host ``id`` and the package ``version``.
"""

from __future__ import annotations

import json
import logging
import socket
import sys
from datetime import datetime, timezone

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["ContextFilter", "JsonFormatter", "configure_logging", "parse_level"]

LOGGER_NAME = "scaffold_cli"
DEVELOPMENT_ENVS = frozenset({"development", "test"})

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "dpanic": logging.CRITICAL,
    "panic": logging.CRITICAL,
    "fatal": logging.CRITICAL,
    "critical": logging.CRITICAL,
}


def parse_level(name: str | None) -> int | None:
    """Map a level name to a ``logging`` level, or ``None`` if unknown."""
    if not name:
        return None
    return _LEVELS.get(name.strip().lower())


class ContextFilter(logging.Filter):
    """Attach static ``id`` and ``version`` fields to every record."""

    def __init__(self, host_id: str, version: str):
        super().__init__()
        self.host_id = host_id
        self.version = version

    def filter(self, record: logging.LogRecord) -> bool:
        record.id = self.host_id
        record.version = self.version
        return True


class JsonFormatter(logging.Formatter):
    """Single-line JSON records for non-development environments."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname.lower(),
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "logger": record.name,
            "msg": record.getMessage(),
            "id": getattr(record, "id", None),
            "version": getattr(record, "version", None),
        }
        if record.exc_info:
            payload["error"] = self.formatException(record.exc_info)
        error = getattr(record, "error", None)
        if error is not None:
            payload["error"] = str(error)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(
    env: str,
    level: str | None,
    *,
    version: str,
    stream=None,
) -> logging.Logger:
    """Configure and return the package logger for ``env`` at ``level``.

    Unknown level names keep the default ``INFO``. Calling this twice replaces
    the handlers installed by the previous call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream = stream or sys.stderr
    if env in DEVELOPMENT_ENVS:
        handler: logging.Handler = RichHandler(
            console=Console(file=stream, stderr=stream is sys.stderr),
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(JsonFormatter())

    context = ContextFilter(socket.gethostname(), version)
    handler.addFilter(context)
    logger.addHandler(handler)
    logger.propagate = False

    resolved = parse_level(level)
    logger.setLevel(resolved if resolved is not None else logging.INFO)
    if resolved is None and level:
        logger.warning("unknown log level %r, using info", level)
    return logger
