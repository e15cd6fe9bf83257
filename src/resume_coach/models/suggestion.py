"""Pydantic models for AI suggestions and refresh bookkeeping."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SuggestionItem(BaseModel):
    """One piece of advice tied to a rendered block of the resume."""

    matcher: str = Field(min_length=1)  # lowercase substring of the target block
    advice: str

    model_config = {"frozen": True}


# Ordered, display order == insertion order; empty tuple means "no suggestions"
SuggestionSet = tuple[SuggestionItem, ...]


class SuggestionRequest(BaseModel):
    model: str
    content: str
    previous_suggestions: list[SuggestionItem] | None = None


class SuggestionResponse(BaseModel):
    suggestions: list[SuggestionItem] | None = None


class RequestState(str, Enum):
    """Refresh coordinator lifecycle states."""

    IDLE = "idle"
    DEBOUNCING = "debouncing"
    IN_FLIGHT = "in_flight"
    COOLING_DOWN = "cooling_down"
    COOLDOWN_AFTER_FAILURE = "cooldown_after_failure"


class RefreshOutcome(str, Enum):
    """Result of evaluating the request gates."""

    ISSUED = "issued"
    SKIPPED = "skipped"  # content empty or already processed
    UNAVAILABLE = "unavailable"  # request in flight or cooldown active
