"""Async helpers.

The controller runs on the UI event loop and owns no worker threads. Backend
calls are coroutines scheduled on that loop; `run_async` keeps a reference to
each spawned task so it is not garbage collected mid-flight.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional, Set

logger = logging.getLogger(__name__)

_background_tasks: Set[asyncio.Task] = set()


def run_async(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call `fn`; if it returns an awaitable, schedule it on the running loop.

    Returns the task for coroutine functions, or the plain result otherwise.
    """
    result = fn(*args, **kwargs)
    if not inspect.isawaitable(result):
        return result
    task = asyncio.ensure_future(result)
    _background_tasks.add(task)
    task.add_done_callback(_finish_task)
    return task


def _finish_task(task: asyncio.Task) -> None:
    _background_tasks.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(f"Background task failed: {exc!r}", exc_info=exc)


class Debouncer:
    """Run a callback once input has been quiet for `delay` seconds.

    Each `submit` cancels the previous timer handle before arming a new one,
    so at most one call is ever pending.
    """

    def __init__(self, delay: float, callback: Callable[..., Any]):
        self.delay = delay
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def submit(self, *args: Any) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, args)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, args: tuple) -> None:
        self._handle = None
        run_async(self._callback, *args)
