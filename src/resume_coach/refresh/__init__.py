"""Suggestion refresh coordination: debounce, gates and the state machine."""

from __future__ import annotations

from .content_tracker import should_attempt
from .cooldown import CooldownGate
from .coordinator import SuggestionCoordinator
from .debounce import Debouncer
from .inflight import InFlightGuard
from .suggestion_state import SuggestionState, match_suggestions

__all__ = [
    "CooldownGate",
    "Debouncer",
    "InFlightGuard",
    "SuggestionCoordinator",
    "SuggestionState",
    "match_suggestions",
    "should_attempt",
]
