"""Session, tab and execution-queue state."""

from agent_conductor.session.execution_queue import (
    DuplicateQueueItemError,
    ExecutionQueue,
    QueuedItem,
    QueueItemKind,
)
from agent_conductor.session.models import AITab, LogEntry, Session
from agent_conductor.session.output_buffer import OutputBuffer
from agent_conductor.session.tabs import CreatedTab, create_tab_at_position, get_active_tab

__all__ = [
    "AITab",
    "CreatedTab",
    "DuplicateQueueItemError",
    "ExecutionQueue",
    "LogEntry",
    "OutputBuffer",
    "QueueItemKind",
    "QueuedItem",
    "Session",
    "create_tab_at_position",
    "get_active_tab",
]
