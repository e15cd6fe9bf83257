"""Current suggestion set and the block matching used when rendering it."""

from __future__ import annotations

from collections.abc import Iterable

from resume_coach.models.suggestion import SuggestionItem, SuggestionSet


def match_suggestions(
    block_text: str, suggestions: Iterable[SuggestionItem]
) -> list[SuggestionItem]:
    """Return the suggestions whose matcher occurs in ``block_text``, ignoring case.

    Order follows ``suggestions``. Recomputed on every render; both inputs are
    small enough that caching would buy nothing.
    """
    haystack = block_text.lower()
    return [item for item in suggestions if item.matcher.lower() in haystack]


class SuggestionState:
    """Latest accepted suggestion set, replaced wholesale on every success."""

    def __init__(self) -> None:
        self._items: SuggestionSet = ()

    @property
    def items(self) -> SuggestionSet:
        return self._items

    def __len__(self) -> int:
        return len(self._items)

    def replace(self, items: Iterable[SuggestionItem] | None) -> SuggestionSet:
        """Swap in a new set; ``None`` or an empty iterable clears it."""
        self._items = tuple(items or ())
        return self._items

    def as_payload(self) -> list[SuggestionItem] | None:
        """Previous suggestions as sent to the service (None when empty)."""
        return list(self._items) or None

    def for_block(self, block_text: str) -> list[SuggestionItem]:
        return match_suggestions(block_text, self._items)
