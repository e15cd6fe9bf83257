"""Decide whether the current content is worth a suggestion request."""

from __future__ import annotations


def should_attempt(current: str, last_processed: str) -> bool:
    """Return True when ``current`` is non-blank and differs from ``last_processed``.

    The comparison is exact: whitespace-only edits to otherwise identical
    content still count as a change.
    """
    if not current or not current.strip():
        return False
    return current != last_processed
