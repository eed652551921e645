"""Turn SIGINT/SIGTERM into a catchable exception for the duration of a run."""

from __future__ import annotations

import signal
import threading
from contextlib import contextmanager
from typing import Iterator

from ..errors import PipelineCancelled

__all__ = ["cancellation_scope"]

_SIGNALS = (signal.SIGINT, signal.SIGTERM)


@contextmanager
def cancellation_scope() -> Iterator[None]:
    """Raise :class:`PipelineCancelled` in the main thread when a shutdown signal arrives.

    ``subprocess.run`` kills its child when an exception interrupts the wait,
    so any step blocked on git or go is terminated as well. Previous handlers
    are restored on exit. Outside the main thread this is a no-op.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def signal_handler(sig, frame):
        raise PipelineCancelled(sig)

    originals = {sig: signal.getsignal(sig) for sig in _SIGNALS}
    for sig in _SIGNALS:
        signal.signal(sig, signal_handler)
    try:
        yield
    finally:
        for sig, original in originals.items():
            signal.signal(sig, original)
