"""Data models for summarize-and-continue."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from agent_conductor.session.models import LogEntry, Session


class SummarizeState(str, Enum):
    IDLE = "idle"
    SUMMARIZING = "summarizing"
    COMPLETE = "complete"
    ERROR = "error"


class SummarizeStage(str, Enum):
    EXTRACTING = "extracting"
    SUMMARIZING = "summarizing"
    CREATING = "creating"
    COMPLETE = "complete"


@dataclass(frozen=True)
class SummarizeProgress:
    stage: SummarizeStage
    progress: int           # 0-100
    message: str


@dataclass(frozen=True)
class SummarizeRequest:
    source_session_id: str
    source_tab_id: str
    project_root: str
    agent_type: str


@dataclass
class SummarizeOutput:
    """What the summarization service hands back."""

    summarized_logs: list[LogEntry] = field(default_factory=list)
    original_tokens: int = 0
    compacted_tokens: int = 0


@dataclass(frozen=True)
class SummarizeResult:
    success: bool
    original_tokens: int
    compacted_tokens: int
    reduction_percent: int
    new_tab_id: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class SummarizeOutcome:
    """Returned to the caller after a successful run."""

    new_tab_id: str
    updated_session: Session


class CancellationToken:
    """One-shot cancellation flag shared with an in-flight run."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
