"""Session and tab data shapes shared by queue, dispatch and summarization."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class LogEntry:
    """One entry in a tab's conversation log."""

    source: str   # "user" | "ai" | "system" | "stdout" | "stderr"
    text: str
    id: str = field(default_factory=new_id)
    timestamp: str = field(default_factory=_now)


@dataclass
class AITab:
    """A conversation tab inside a session."""

    name: str
    logs: list[LogEntry] = field(default_factory=list)
    save_to_history: bool = True
    id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=_now)


@dataclass
class Session:
    """An agent (or terminal) session and its tabs."""

    id: str
    name: str
    tool_type: str = "claude-code"
    project_root: str = ""
    ai_tabs: list[AITab] = field(default_factory=list)
    active_tab_id: str = ""
    ssh_remote_id: str | None = None

    def find_tab(self, tab_id: str) -> AITab | None:
        for tab in self.ai_tabs:
            if tab.id == tab_id:
                return tab
        return None
