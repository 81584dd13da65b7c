"""Summarize-and-continue: compact a tab's context into a new tab."""

from agent_conductor.summarize.models import (
    CancellationToken,
    SummarizeOutcome,
    SummarizeOutput,
    SummarizeProgress,
    SummarizeRequest,
    SummarizeResult,
    SummarizeStage,
    SummarizeState,
)
from agent_conductor.summarize.service import ContextSummarizationService, SummarizationService
from agent_conductor.summarize.workflow import SummarizeAndContinue

__all__ = [
    "CancellationToken",
    "ContextSummarizationService",
    "SummarizationService",
    "SummarizeAndContinue",
    "SummarizeOutcome",
    "SummarizeOutput",
    "SummarizeProgress",
    "SummarizeRequest",
    "SummarizeResult",
    "SummarizeStage",
    "SummarizeState",
]
