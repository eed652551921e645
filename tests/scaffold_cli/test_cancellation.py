from __future__ import annotations

import os
import signal
import sys
import time

import pytest

from scaffold_cli.core.cancellation import cancellation_scope
from scaffold_cli.errors import PipelineCancelled

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")


def test_sigterm_raises_pipeline_cancelled():
    with pytest.raises(PipelineCancelled) as excinfo:
        with cancellation_scope():
            os.kill(os.getpid(), signal.SIGTERM)
            time.sleep(5)

    assert excinfo.value.signum == signal.SIGTERM


def test_previous_handlers_are_restored():
    before = signal.getsignal(signal.SIGTERM)

    with cancellation_scope():
        assert signal.getsignal(signal.SIGTERM) is not before

    assert signal.getsignal(signal.SIGTERM) is before
