"""Summarize-and-continue workflow.

Compacts one tab of a session into a new tab placed right after it:

    idle -> summarizing -> complete
                        -> error
    (any) --cancel()--> idle

Cancellation is cooperative. ``cancel()`` flips a token that is checked
whenever the summarizer reports progress or returns; once set, the in-flight
run makes no further observable change.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Callable

from loguru import logger

from agent_conductor.session.models import AITab, Session
from agent_conductor.session.tabs import CreatedTab, create_tab_at_position
from agent_conductor.summarize.models import (
    CancellationToken,
    SummarizeOutcome,
    SummarizeProgress,
    SummarizeRequest,
    SummarizeResult,
    SummarizeStage,
    SummarizeState,
)
from agent_conductor.summarize.service import SummarizationError, SummarizationService

TabFactory = Callable[..., "CreatedTab | None"]
OnUpdate = Callable[["SummarizeAndContinue"], None]


def reduction_percent(original_tokens: int, compacted_tokens: int) -> int:
    """Percentage saved, rounded half up. 0 when nothing was measured."""
    if original_tokens <= 0:
        return 0
    return math.floor((1 - compacted_tokens / original_tokens) * 100 + 0.5)


class SummarizeAndContinue:
    """State machine for compacting one tab of ``session``."""

    def __init__(
        self,
        session: Session | None,
        service: SummarizationService,
        tab_factory: TabFactory = create_tab_at_position,
        on_update: OnUpdate | None = None,
    ) -> None:
        self.session = session
        self._service = service
        self._tab_factory = tab_factory
        self.on_update = on_update

        self.state = SummarizeState.IDLE
        self.progress: SummarizeProgress | None = None
        self.result: SummarizeResult | None = None
        self.error: str | None = None
        self._token: CancellationToken | None = None

    @property
    def min_logs_required(self) -> int:
        return self._service.get_min_logs_for_summarize()

    def can_summarize(self, tab: AITab) -> bool:
        return self._service.can_summarize(tab)

    async def start_summarize(self, source_tab_id: str) -> SummarizeOutcome | None:
        """Compact ``source_tab_id`` into a new tab.

        Returns the new tab id and updated session on success, None on
        failure or cancellation (inspect ``state``/``error``).
        """
        if self.state is SummarizeState.SUMMARIZING:
            logger.warning(f"[summarize] start ignored for tab {source_tab_id}: a run is already in progress")
            return None

        session = self.session
        if session is None:
            return self._fail_precondition("No active session")

        source_tab = session.find_tab(source_tab_id)
        if source_tab is None:
            return self._fail_precondition("Source tab not found")

        if len(source_tab.logs) < self.min_logs_required or not self._service.can_summarize(source_tab):
            return self._fail_precondition(
                f"Context too small to summarize. Need at least {self.min_logs_required} log entries."
            )

        token = CancellationToken()
        self._token = token
        self.state = SummarizeState.SUMMARIZING
        self.error = None
        self.result = None
        self._notify()
        logger.info(f"[summarize] started session={session.id} tab={source_tab_id} logs={len(source_tab.logs)}")

        def on_progress(progress: SummarizeProgress) -> None:
            if not token.cancelled:
                self.progress = progress
                self._notify()

        request = SummarizeRequest(
            source_session_id=session.id,
            source_tab_id=source_tab_id,
            project_root=session.project_root,
            agent_type=session.tool_type,
        )

        try:
            output = await self._service.summarize_context(request, source_tab.logs, on_progress)
            if token.cancelled:
                return None
            if output is None:
                raise SummarizationError("Summarization returned no result")

            created = self._tab_factory(
                session,
                after_tab_id=source_tab_id,
                name=self._service.format_compacted_tab_name(source_tab.name),
                logs=output.summarized_logs,
                save_to_history=source_tab.save_to_history,
            )
            if created is None:
                raise SummarizationError("Failed to create compacted tab")
        except Exception as exc:
            if not token.cancelled:
                self._fail_run(str(exc) or "Summarization failed")
            return None

        self.result = SummarizeResult(
            success=True,
            original_tokens=output.original_tokens,
            compacted_tokens=output.compacted_tokens,
            reduction_percent=reduction_percent(output.original_tokens, output.compacted_tokens),
            new_tab_id=created.tab.id,
        )
        self.state = SummarizeState.COMPLETE
        self.progress = SummarizeProgress(SummarizeStage.COMPLETE, 100, "Complete!")

        updated_session = replace(created.session, active_tab_id=created.tab.id)
        self.session = updated_session
        self._notify()
        logger.info(
            f"[summarize] complete tab={created.tab.id} tokens {output.original_tokens} -> "
            f"{output.compacted_tokens} ({self.result.reduction_percent}% smaller)"
        )
        return SummarizeOutcome(new_tab_id=created.tab.id, updated_session=updated_session)

    def cancel(self) -> None:
        """Abandon the current run and return to idle immediately."""
        if self._token is not None:
            self._token.cancel()
        self._service.cancel_summarization()
        self.state = SummarizeState.IDLE
        self.progress = None
        self._notify()

    def _fail_precondition(self, message: str) -> None:
        self.error = message
        self.state = SummarizeState.ERROR
        self._notify()
        return None

    def _fail_run(self, message: str) -> None:
        logger.warning(f"[summarize] failed: {message}")
        self.error = message
        self.state = SummarizeState.ERROR
        self.result = SummarizeResult(
            success=False,
            original_tokens=0,
            compacted_tokens=0,
            reduction_percent=0,
            error=message,
        )
        self._notify()

    def _notify(self) -> None:
        if self.on_update is not None:
            self.on_update(self)
