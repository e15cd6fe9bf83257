"""Data models for the suggestion refresh pipeline."""

from resume_coach.models.suggestion import (
    RefreshOutcome,
    RequestState,
    SuggestionItem,
    SuggestionRequest,
    SuggestionResponse,
    SuggestionSet,
)

__all__ = [
    "RefreshOutcome",
    "RequestState",
    "SuggestionItem",
    "SuggestionRequest",
    "SuggestionResponse",
    "SuggestionSet",
]
