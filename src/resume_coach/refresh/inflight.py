"""Single-slot guard: at most one suggestion request outstanding."""

from __future__ import annotations


class InFlightGuard:
    def __init__(self) -> None:
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def try_acquire(self) -> bool:
        """Take the slot; False if a request already holds it."""
        if self._active:
            return False
        self._active = True
        return True

    def release(self) -> None:
        self._active = False
