"""Cooldown gate: minimum spacing between suggestion request attempts."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class CooldownGate:
    """Blocks new attempts until a timer armed on the event loop expires.

    The gate knows nothing about debouncing; a trigger that arrives while it
    is active is simply refused by whoever consults ``active``.
    """

    def __init__(self, on_expire: Callable[[], None] | None = None) -> None:
        self._on_expire = on_expire
        self._handle: asyncio.TimerHandle | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._ends_at = 0.0

    @property
    def active(self) -> bool:
        return self._handle is not None

    def remaining(self) -> float:
        """Seconds until the gate clears (0.0 when inactive)."""
        if self._handle is None or self._loop is None:
            return 0.0
        return max(0.0, self._ends_at - self._loop.time())

    def start(self, duration: float) -> None:
        """(Re)arm the gate for ``duration`` seconds, replacing any running cooldown."""
        self.clear()
        self._loop = asyncio.get_running_loop()
        self._ends_at = self._loop.time() + duration
        self._handle = self._loop.call_later(duration, self._expire)
        logger.debug("Cooldown started: %.1fs", duration)

    def clear(self) -> None:
        """Drop the gate without firing the expiry callback."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _expire(self) -> None:
        self._handle = None
        logger.debug("Cooldown expired")
        if self._on_expire is not None:
            self._on_expire()
