"""Tab helpers that return updated session snapshots."""

from __future__ import annotations

from dataclasses import dataclass, replace

from agent_conductor.session.models import AITab, LogEntry, Session


@dataclass(frozen=True)
class CreatedTab:
    tab: AITab
    session: Session


def get_active_tab(session: Session) -> AITab | None:
    """Return the active tab, falling back to the first one."""
    tab = session.find_tab(session.active_tab_id)
    if tab is not None:
        return tab
    return session.ai_tabs[0] if session.ai_tabs else None


def create_tab_at_position(
    session: Session,
    after_tab_id: str,
    name: str,
    logs: list[LogEntry],
    save_to_history: bool = True,
) -> CreatedTab | None:
    """Create a tab directly after ``after_tab_id``.

    The input session is left untouched; the returned snapshot carries the
    new tab list. When ``after_tab_id`` is unknown the tab is appended.
    Returns None for a blank name.
    """
    if not (name or "").strip():
        return None

    tab = AITab(name=name, logs=list(logs), save_to_history=save_to_history)
    tabs = list(session.ai_tabs)
    index = next((i for i, t in enumerate(tabs) if t.id == after_tab_id), None)
    if index is None:
        tabs.append(tab)
    else:
        tabs.insert(index + 1, tab)

    return CreatedTab(tab=tab, session=replace(session, ai_tabs=tabs))
