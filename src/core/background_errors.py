# src/core/background_errors.py — v1
"""Process-scope sink for errors raised outside the main control flow.

Transfer libraries run uploads on worker threads and event-loop callbacks.
A failure there must not crash or fail the run after the phase has already
reported its outcome; it is logged as a warning instead.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

logger = logging.getLogger(__name__)


def _log_thread_exception(args: threading.ExceptHookArgs) -> None:
    if args.exc_type is SystemExit:
        return
    name = args.thread.name if args.thread is not None else "unknown"
    logger.warning("Background error in thread %s: %s", name, args.exc_value)


def handle_loop_exception(
    loop: asyncio.AbstractEventLoop, context: dict[str, Any]
) -> None:
    """asyncio exception handler: downgrade to a warning."""
    exc = context.get("exception")
    logger.warning("Background error: %s", exc if exc is not None else context.get("message"))


@contextmanager
def background_error_sink() -> Iterator[None]:
    """Route uncaught thread exceptions to the log for the duration of a run.

    The previous hook is restored on exit. The asyncio side is separate:
    each phase command installs handle_loop_exception on its running loop.
    """
    previous = threading.excepthook
    threading.excepthook = _log_thread_exception
    try:
        yield
    finally:
        threading.excepthook = previous
