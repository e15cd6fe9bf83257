"""Exception types raised by the suggestion service layer."""

from __future__ import annotations


class ResumeCoachError(Exception):
    """Base class for resume-coach errors."""


class SuggestionServiceError(ResumeCoachError):
    """The AI service could not be reached or returned an error."""


class SuggestionValidationError(ResumeCoachError):
    """The AI service answered, but the response envelope is malformed."""
