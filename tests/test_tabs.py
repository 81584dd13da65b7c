from agent_conductor.session.models import AITab, LogEntry, Session
from agent_conductor.session.tabs import create_tab_at_position, get_active_tab


def _session() -> Session:
    tabs = [AITab(name="One"), AITab(name="Two"), AITab(name="Three")]
    return Session(id="s1", name="Project", ai_tabs=tabs, active_tab_id=tabs[1].id)


def test_get_active_tab() -> None:
    session = _session()
    assert get_active_tab(session).name == "Two"

    session.active_tab_id = "gone"
    assert get_active_tab(session).name == "One"
    assert get_active_tab(Session(id="empty", name="Empty")) is None


def test_tab_is_inserted_after_source() -> None:
    session = _session()
    logs = [LogEntry(source="ai", text="summary")]

    created = create_tab_at_position(session, session.ai_tabs[0].id, "One Compacted", logs, save_to_history=False)

    names = [tab.name for tab in created.session.ai_tabs]
    assert names == ["One", "One Compacted", "Two", "Three"]
    assert created.tab.logs == logs
    assert created.tab.save_to_history is False
    assert [tab.name for tab in session.ai_tabs] == ["One", "Two", "Three"]


def test_unknown_source_appends() -> None:
    session = _session()
    created = create_tab_at_position(session, "missing", "New", [])
    assert created.session.ai_tabs[-1] is created.tab


def test_blank_name_is_rejected() -> None:
    assert create_tab_at_position(_session(), "x", "   ", []) is None
