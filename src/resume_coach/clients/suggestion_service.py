"""AI suggestion service: turns resume content into matcher/advice pairs."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from pydantic import ValidationError

from resume_coach.clients.llm_client import LLMClient
from resume_coach.errors import SuggestionServiceError, SuggestionValidationError
from resume_coach.models.suggestion import (
    SuggestionItem,
    SuggestionRequest,
    SuggestionResponse,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You review Markdown resumes and give short, concrete improvement suggestions,
including Markdown formatting suggestions.

Each suggestion targets one block of the resume (a heading, paragraph, list
item or blockquote). Identify the block with a "matcher": a short lowercase
substring copied from that block's text, so the advice can be shown next to it.

Previous suggestions are provided. Include every previous suggestion that is
still valid for the current resume, and drop the ones that no longer apply.

Respond with JSON only:
{"suggestions": [{"matcher": "...", "advice": "..."}]}
Return {"suggestions": []} when there is nothing to improve."""


class SuggestionService(Protocol):
    """Anything that can answer a SuggestionRequest.

    Implementations raise on transport or validation errors; the refresh
    coordinator treats every exception the same way.
    """

    async def fetch(self, request: SuggestionRequest) -> SuggestionResponse: ...


class LLMSuggestionService:
    """SuggestionService backed by the Claude messages API."""

    def __init__(
        self,
        llm: LLMClient,
        *,
        temperature: float = 0.0,
        max_tokens: int = 4096,
    ):
        self.llm = llm
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def fetch(self, request: SuggestionRequest) -> SuggestionResponse:
        previous = (
            [item.model_dump() for item in request.previous_suggestions]
            if request.previous_suggestions is not None
            else None
        )
        prompt = (
            f"Current resume:\n{request.content}\n\n"
            f"Previous suggestions: {json.dumps(previous, ensure_ascii=False)}"
        )

        try:
            data = await self.llm.generate_json(
                prompt=prompt,
                system=SYSTEM_PROMPT,
                model=request.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except ValueError as exc:
            raise SuggestionValidationError(str(exc)) from exc
        except Exception as exc:
            raise SuggestionServiceError(f"Suggestion request failed: {exc}") from exc
        return parse_envelope(data)


def parse_envelope(data: Any) -> SuggestionResponse:
    """Validate a decoded response envelope.

    The envelope must be an object whose "suggestions" key is missing, null or
    a list. Items that do not fit SuggestionItem are dropped one by one; a bad
    envelope raises SuggestionValidationError.
    """
    if not isinstance(data, dict):
        raise SuggestionValidationError(
            f"Response envelope must be an object, got {type(data).__name__}"
        )

    raw_items = data.get("suggestions")
    if raw_items is None:
        return SuggestionResponse(suggestions=None)
    if not isinstance(raw_items, list):
        raise SuggestionValidationError(
            f"'suggestions' must be a list, got {type(raw_items).__name__}"
        )

    items: list[SuggestionItem] = []
    for index, raw in enumerate(raw_items):
        try:
            items.append(SuggestionItem.model_validate(raw))
        except ValidationError:
            logger.warning("Dropping malformed suggestion #%d: %r", index, raw)
    return SuggestionResponse(suggestions=items)
