"""Shared test fixtures."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from resume_coach.clients.llm_client import LLMClient
from resume_coach.config import RefreshConfig
from resume_coach.errors import SuggestionServiceError
from resume_coach.models.suggestion import (
    SuggestionItem,
    SuggestionRequest,
    SuggestionResponse,
)


class GatedService:
    """Suggestion service whose responses are released by the test.

    Records every request with the loop time it arrived, and how many
    requests were outstanding at once.
    """

    def __init__(self) -> None:
        self.requests: list[SuggestionRequest] = []
        self.request_times: list[float] = []
        self.active = 0
        self.max_active = 0
        self._pending: list[asyncio.Future] = []

    async def fetch(self, request: SuggestionRequest) -> SuggestionResponse:
        loop = asyncio.get_running_loop()
        self.requests.append(request)
        self.request_times.append(loop.time())
        future = loop.create_future()
        self._pending.append(future)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            return await future
        finally:
            self.active -= 1

    @property
    def waiting(self) -> int:
        return len(self._pending)

    def succeed(self, suggestions: list[SuggestionItem] | None = None) -> None:
        self._pending.pop(0).set_result(SuggestionResponse(suggestions=suggestions))

    def fail(self, exc: Exception | None = None) -> None:
        self._pending.pop(0).set_exception(exc or SuggestionServiceError("connection reset"))


async def _wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    """Poll ``predicate`` on the event loop until it holds or ``timeout`` passes."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met before timeout")
        await asyncio.sleep(0.005)


@pytest.fixture
def wait_until():
    return _wait_until


@pytest.fixture
def fast_config() -> RefreshConfig:
    return RefreshConfig(
        debounce_seconds=0.05,
        layout_debounce_seconds=0.01,
        success_cooldown_seconds=0.2,
        failure_cooldown_seconds=0.4,
    )


@pytest.fixture
def gated_service() -> GatedService:
    return GatedService()


@pytest.fixture
def built_x_suggestion() -> SuggestionItem:
    return SuggestionItem(matcher="built x", advice="Quantify impact with metrics.")


@pytest.fixture
def sample_resume_text() -> str:
    return """# Jane Doe

jane@example.com | github.com/jane

## Experience

### Acme Corp - Backend Engineer (2021 - present)

- Built the billing API in **Python** and FastAPI
- Reduced p95 latency by 40% with Redis caching

> Open to relocation.

## Skills

Python, PostgreSQL, Redis, Docker
"""


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate_json = AsyncMock(return_value={"suggestions": []})
    return client
