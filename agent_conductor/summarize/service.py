"""Context summarization service.

Compacts a tab's conversation by sending it, wrapped in a summarization
prompt, to an agent running in batch mode. Talking to the agent is delegated
to an injected ``groom`` coroutine that returns the agent's raw output; the
display text is recovered from it with the stream extractor, so JSONL and
plain-text agents both work.

Usage:
    service = ContextSummarizationService(groom=run_agent_batch)
    output = await service.summarize_context(request, tab.logs, on_progress)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Awaitable, Callable, Protocol

from loguru import logger

from agent_conductor.providers.output_extractor import extract_text
from agent_conductor.session.models import AITab, LogEntry
from agent_conductor.summarize.context import (
    CHUNK_SEPARATOR,
    chunk_logs,
    estimate_text_token_count,
    format_logs_for_grooming,
    parse_groomed_output,
)
from agent_conductor.summarize.models import (
    CancellationToken,
    SummarizeOutput,
    SummarizeProgress,
    SummarizeRequest,
    SummarizeStage,
)

OnProgress = Callable[[SummarizeProgress], None]
# (project_root, agent_type, prompt) -> raw agent output
GroomFn = Callable[[str, str, str], Awaitable[str]]

DEFAULT_MIN_LOGS = 5
MAX_SUMMARIZE_TOKENS = 50_000

SUMMARIZE_PROMPT = """\
You are compacting a long coding-assistant conversation so it can be continued
in a fresh context. Produce a faithful, condensed summary that keeps:

- the user's goals and any constraints they stated
- decisions made and the reasoning behind them
- file paths, commands, identifiers and code snippets that are still relevant
- open questions and the next planned steps

Drop greetings, repetition and superseded attempts. Separate independent topics
with a line containing only `---`."""


class SummarizationError(RuntimeError):
    """Raised when the summarizing agent produced no usable output."""


class SummarizationService(Protocol):
    """What the summarize-and-continue workflow needs from a summarizer."""

    def can_summarize(self, tab: AITab) -> bool: ...

    def get_min_logs_for_summarize(self) -> int: ...

    async def summarize_context(
        self,
        request: SummarizeRequest,
        logs: list[LogEntry],
        on_progress: OnProgress,
    ) -> SummarizeOutput | None: ...

    def format_compacted_tab_name(self, name: str | None) -> str: ...

    def cancel_summarization(self) -> None: ...


class ContextSummarizationService:
    """Default summarizer backed by a batch agent call."""

    def __init__(
        self,
        groom: GroomFn,
        min_logs: int = DEFAULT_MIN_LOGS,
        max_tokens_per_pass: int = MAX_SUMMARIZE_TOKENS,
        agent_type: str | None = None,
    ) -> None:
        self._groom = groom
        self.min_logs = min_logs
        self.max_tokens_per_pass = max_tokens_per_pass
        self.agent_type = agent_type
        self._current: CancellationToken | None = None

    @property
    def is_active(self) -> bool:
        return self._current is not None

    def can_summarize(self, tab: AITab) -> bool:
        return len(tab.logs) >= self.min_logs

    def get_min_logs_for_summarize(self) -> int:
        return self.min_logs

    def format_compacted_tab_name(self, name: str | None) -> str:
        """``"{name} Compacted YYYY-MM-DD"`` using the current UTC date."""
        date = datetime.now(timezone.utc).date().isoformat()
        return f"{name or 'Session'} Compacted {date}"

    def cancel_summarization(self) -> None:
        """Stop the current run after the agent call in flight.

        Only the run that is current when this is called is affected; a run
        started afterwards gets a fresh token.
        """
        if self._current is not None:
            self._current.cancel()

    async def summarize_context(
        self,
        request: SummarizeRequest,
        logs: list[LogEntry],
        on_progress: OnProgress,
    ) -> SummarizeOutput | None:
        """Summarize ``logs``. Returns None when cancelled part-way."""
        token = CancellationToken()
        self._current = token
        agent_type = self.agent_type or request.agent_type
        try:
            on_progress(SummarizeProgress(SummarizeStage.EXTRACTING, 0, "Extracting context..."))
            formatted = format_logs_for_grooming(logs)
            original_tokens = estimate_text_token_count(formatted)
            on_progress(
                SummarizeProgress(SummarizeStage.EXTRACTING, 20, f"Extracted ~{original_tokens:,} tokens")
            )

            if original_tokens > self.max_tokens_per_pass:
                on_progress(
                    SummarizeProgress(
                        SummarizeStage.SUMMARIZING,
                        25,
                        "Large context detected, using chunked summarization...",
                    )
                )
                return await self._summarize_in_chunks(request, agent_type, logs, on_progress, token)

            on_progress(SummarizeProgress(SummarizeStage.SUMMARIZING, 40, "Sending context for compaction..."))
            summary = await self._send(request.project_root, agent_type, formatted)
            if token.cancelled:
                return None

            on_progress(SummarizeProgress(SummarizeStage.SUMMARIZING, 75, "Processing summarized output..."))
            output = SummarizeOutput(
                summarized_logs=parse_groomed_output(summary),
                original_tokens=original_tokens,
                compacted_tokens=estimate_text_token_count(summary),
            )
            on_progress(SummarizeProgress(SummarizeStage.CREATING, 90, "Preparing compacted tab..."))
            return output
        finally:
            if self._current is token:
                self._current = None

    async def _summarize_in_chunks(
        self,
        request: SummarizeRequest,
        agent_type: str,
        logs: list[LogEntry],
        on_progress: OnProgress,
        token: CancellationToken,
    ) -> SummarizeOutput | None:
        chunks = chunk_logs(logs, self.max_tokens_per_pass)
        summaries: list[str] = []
        original_tokens = 0

        for index, chunk in enumerate(chunks):
            if token.cancelled:
                return None
            chunk_text = format_logs_for_grooming(chunk)
            original_tokens += estimate_text_token_count(chunk_text)
            on_progress(
                SummarizeProgress(
                    SummarizeStage.SUMMARIZING,
                    30 + round(index / len(chunks) * 40),
                    f"Summarizing chunk {index + 1}/{len(chunks)}...",
                )
            )
            summaries.append(await self._send(request.project_root, agent_type, chunk_text))

        if token.cancelled:
            return None

        combined = CHUNK_SEPARATOR.join(summaries)
        return SummarizeOutput(
            summarized_logs=parse_groomed_output(combined),
            original_tokens=original_tokens,
            compacted_tokens=estimate_text_token_count(combined),
        )

    async def _send(self, project_root: str, agent_type: str, context_text: str) -> str:
        prompt = build_summarization_prompt(context_text)
        logger.debug(f"[summarize] sending prompt agent={agent_type} len={len(prompt)}")
        raw = await self._groom(project_root, agent_type, prompt)
        summary = extract_text(raw or "", agent_type).strip()
        if not summary:
            raise SummarizationError("Context summarization failed: agent returned no output")
        logger.debug(f"[summarize] received summary len={len(summary)}")
        return summary


def build_summarization_prompt(context_text: str) -> str:
    return (
        f"{SUMMARIZE_PROMPT}\n\n{context_text}\n\n---\n\n"
        "Please provide a comprehensive but compacted summary of the above conversation. "
        "Preserve all technical details, code snippets, and decisions while removing redundant content."
    )
