"""Async debounce helper used by the refresh coordinator and the CLI."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class Debouncer:
    """Coalesce rapid-fire submissions into a single delayed trigger.

    Each ``submit`` cancels the pending (not yet fired) trigger and arms a new
    one ``delay`` seconds later. Once a trigger has fired it is no longer
    pending, so a later ``submit`` never cancels work that is already running.
    Triggers fired by one instance never overlap.
    """

    def __init__(self, delay: float = 3.0) -> None:
        self._delay = delay
        self._task: asyncio.Task[Any] | None = None
        self._fire_lock = asyncio.Lock()

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """True while a submitted trigger is waiting for its delay to elapse."""

        return self._task is not None and not self._task.done()

    def submit(self, trigger: Callable[[], Any]) -> None:
        """Schedule ``trigger`` (sync or async), cancelling any pending one."""

        if self._task:
            self._task.cancel()
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._runner(trigger))

    def cancel(self) -> None:
        """Cancel any pending invocation."""

        if self._task:
            self._task.cancel()
            self._task = None

    async def _runner(self, trigger: Callable[[], Any]) -> None:
        try:
            await asyncio.sleep(self._delay)
        except asyncio.CancelledError:
            return

        if self._task is asyncio.current_task():
            self._task = None

        async with self._fire_lock:
            try:
                result = trigger()
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Debounced trigger failed")


__all__ = ["Debouncer"]
