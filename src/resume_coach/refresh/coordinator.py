"""Suggestion refresh coordinator - decides when to call the AI service."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from resume_coach.clients.suggestion_service import SuggestionService
from resume_coach.config import DEFAULT_MODEL, RefreshConfig
from resume_coach.models.suggestion import (
    RefreshOutcome,
    RequestState,
    SuggestionRequest,
    SuggestionResponse,
    SuggestionSet,
)
from resume_coach.refresh.content_tracker import should_attempt
from resume_coach.refresh.cooldown import CooldownGate
from resume_coach.refresh.debounce import Debouncer
from resume_coach.refresh.inflight import InFlightGuard
from resume_coach.refresh.suggestion_state import SuggestionState

logger = logging.getLogger(__name__)


class SuggestionCoordinator:
    """Owns the refresh state machine for one editing session.

    Content changes arm a debouncer; when it fires, a request is issued only
    if the content is new and non-blank, no request is in flight and no
    cooldown is active. Every mutable field lives on this object and is read
    when a trigger fires, never captured when it is armed.

    All public methods are synchronous and must be called from inside a
    running event loop; requests run as tasks on that loop.
    """

    def __init__(
        self,
        service: SuggestionService,
        config: RefreshConfig | None = None,
        *,
        model: str = DEFAULT_MODEL,
        auto_refresh: bool | None = None,
        on_state_change: Callable[[RequestState], None] | None = None,
        on_suggestions_change: Callable[[SuggestionSet], None] | None = None,
    ):
        self.service = service
        self.config = config or RefreshConfig()
        self.on_state_change = on_state_change
        self.on_suggestions_change = on_suggestions_change
        self.suggestions = SuggestionState()

        self._model = model
        self._auto_refresh = self.config.auto_refresh if auto_refresh is None else auto_refresh
        self._content = ""
        self._last_processed = ""
        self._state = RequestState.IDLE
        # A trigger was refused by the in-flight/cooldown gates and is owed one evaluation
        self._deferred = False

        self._debouncer = Debouncer(self.config.debounce_seconds)
        self._cooldown = CooldownGate(on_expire=self._on_cooldown_expired)
        self._inflight = InFlightGuard()
        self._request_task: asyncio.Task[None] | None = None

    # -- read side -------------------------------------------------------

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def content(self) -> str:
        return self._content

    @property
    def model(self) -> str:
        return self._model

    @property
    def auto_refresh(self) -> bool:
        return self._auto_refresh

    @property
    def last_processed_content(self) -> str:
        return self._last_processed

    @property
    def is_loading(self) -> bool:
        """Drives the loading indicator: true only while a request is in flight."""
        return self._inflight.active

    @property
    def manual_refresh_available(self) -> bool:
        return not (self._inflight.active or self._cooldown.active)

    @property
    def cooldown_remaining(self) -> float:
        return self._cooldown.remaining()

    # -- editing surface and user controls -------------------------------

    def update_content(self, content: str) -> None:
        """Record the latest document text and (re)arm the debouncer."""
        self._content = content or ""
        if self._auto_refresh and self._content.strip():
            self._arm()

    def set_model(self, model: str) -> None:
        """Select the model for the next request; passed through unchanged."""
        self._model = model

    def set_auto_refresh(self, enabled: bool) -> None:
        """Toggle automatic refresh.

        Enabling arms the debouncer for the current content (the content
        tracker still suppresses a request if nothing changed). Disabling
        drops any pending or deferred trigger; a request already in flight
        completes normally.
        """
        if enabled == self._auto_refresh:
            return
        self._auto_refresh = enabled
        logger.debug("Auto-refresh %s", "enabled" if enabled else "disabled")
        if enabled:
            if self._content.strip():
                self._arm()
            return
        self._debouncer.cancel()
        self._deferred = False
        if self._state is RequestState.DEBOUNCING:
            self._set_state(RequestState.IDLE)

    def request_refresh(self) -> RefreshOutcome:
        """Manual "get suggestions now".

        Bypasses the debouncer (and leaves an armed debounce timer alone) but
        not the in-flight and cooldown gates: while either is active this is a
        no-op returning ``RefreshOutcome.UNAVAILABLE``.
        """
        if not self.manual_refresh_available:
            logger.debug("Manual refresh unavailable (state=%s)", self._state.value)
            return RefreshOutcome.UNAVAILABLE
        return self._evaluate()

    async def wait_for_request(self) -> None:
        """Wait until the outstanding request (if any) has been reconciled."""
        task = self._request_task
        if task is not None and not task.done():
            await task

    def close(self) -> None:
        """Cancel timers and any outstanding request."""
        self._debouncer.cancel()
        self._cooldown.clear()
        self._deferred = False
        if self._request_task is not None and not self._request_task.done():
            self._request_task.cancel()
        self._inflight.release()
        self._set_state(RequestState.IDLE)

    # -- state machine ---------------------------------------------------

    def _arm(self) -> None:
        self._debouncer.submit(self._on_debounce_fired)
        if self._state is RequestState.IDLE:
            self._set_state(RequestState.DEBOUNCING)

    def _on_debounce_fired(self) -> None:
        outcome = self._evaluate()
        if outcome is RefreshOutcome.UNAVAILABLE:
            # swallowed, not queued: one evaluation is owed once the gate clears
            logger.debug("Refresh trigger swallowed (state=%s)", self._state.value)
            self._deferred = True

    def _evaluate(self) -> RefreshOutcome:
        if self._cooldown.active:
            return RefreshOutcome.UNAVAILABLE

        if not self._inflight.try_acquire():
            return RefreshOutcome.UNAVAILABLE

        content = self._content
        if not should_attempt(content, self._last_processed):
            self._inflight.release()
            logger.debug("Skipping refresh: content empty or already processed")
            self._set_state(
                RequestState.DEBOUNCING if self._debouncer.pending else RequestState.IDLE
            )
            return RefreshOutcome.SKIPPED

        self._deferred = False
        request = SuggestionRequest(
            model=self._model,
            content=content,
            previous_suggestions=self.suggestions.as_payload(),
        )
        self._set_state(RequestState.IN_FLIGHT)
        logger.info(
            "Requesting suggestions: model=%s, %d chars, %d previous",
            request.model,
            len(content),
            len(self.suggestions),
        )
        self._request_task = asyncio.get_running_loop().create_task(self._run_request(request))
        return RefreshOutcome.ISSUED

    async def _run_request(self, request: SuggestionRequest) -> None:
        succeeded = False
        try:
            response = await self._fetch(request)
        except Exception:
            logger.warning(
                "Failed to generate suggestions; retrying no sooner than %.1fs",
                self.config.failure_cooldown_seconds,
                exc_info=True,
            )
        else:
            self._last_processed = request.content
            items = self.suggestions.replace(response.suggestions)
            logger.info("Received %d suggestions", len(items))
            succeeded = True
        finally:
            self._inflight.release()

        if succeeded:
            self._cooldown.start(self.config.success_cooldown_seconds)
            self._set_state(RequestState.COOLING_DOWN)
            self._notify(self.on_suggestions_change, items)
        else:
            self._cooldown.start(self.config.failure_cooldown_seconds)
            self._set_state(RequestState.COOLDOWN_AFTER_FAILURE)

    async def _fetch(self, request: SuggestionRequest) -> SuggestionResponse:
        timeout = self.config.request_timeout
        if timeout is None:
            return await self.service.fetch(request)
        return await asyncio.wait_for(self.service.fetch(request), timeout)

    def _on_cooldown_expired(self) -> None:
        owed = self._deferred and self._auto_refresh and not self._debouncer.pending
        self._deferred = False
        if owed:
            self._evaluate()
            return
        self._set_state(
            RequestState.DEBOUNCING if self._debouncer.pending else RequestState.IDLE
        )

    def _set_state(self, state: RequestState) -> None:
        if state is self._state:
            return
        logger.debug("Refresh state: %s -> %s", self._state.value, state.value)
        self._state = state
        self._notify(self.on_state_change, state)

    def _notify(self, listener: Callable | None, value) -> None:
        # display-side failures must not wedge the state machine
        if listener is None:
            return
        try:
            listener(value)
        except Exception:
            logger.exception("Refresh listener %r failed", listener)
