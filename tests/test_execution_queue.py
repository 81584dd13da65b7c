import pytest

from agent_conductor.session.execution_queue import (
    DuplicateQueueItemError,
    ExecutionQueue,
    QueuedItem,
    QueueItemKind,
)


def _ids(queue: ExecutionQueue) -> list[str]:
    return [item.id for item in queue.list()]


def test_enqueue_preserves_order() -> None:
    queue = ExecutionQueue()
    a = QueuedItem.command_item("git status")
    b = QueuedItem.message_item("fix the tests")
    c = QueuedItem.command_item("ls")
    for item in (a, b, c):
        queue.enqueue(item)

    assert _ids(queue) == [a.id, b.id, c.id]
    assert len(queue) == 3
    assert not queue.is_empty


def test_remove_keeps_remaining_order() -> None:
    a, b, c = (QueuedItem.message_item(text) for text in ("a", "b", "c"))
    queue = ExecutionQueue([a, b, c])

    assert queue.remove(b.id) is True
    assert _ids(queue) == [a.id, c.id]


def test_remove_unknown_id_is_noop() -> None:
    a = QueuedItem.message_item("a")
    queue = ExecutionQueue([a])
    before = queue.list()

    assert queue.remove("missing") is False
    assert queue.list() == before


def test_duplicate_id_is_rejected() -> None:
    a = QueuedItem.command_item("make")
    queue = ExecutionQueue([a])

    with pytest.raises(DuplicateQueueItemError):
        queue.enqueue(a)
    assert len(queue) == 1


def test_snapshot_is_not_affected_by_later_mutation() -> None:
    a = QueuedItem.command_item("one")
    b = QueuedItem.command_item("two")
    queue = ExecutionQueue([a])
    snapshot = queue.list()

    queue.enqueue(b)
    queue.remove(a.id)

    assert snapshot == (a,)
    assert queue.list() == (b,)


def test_pop_next_is_fifo() -> None:
    a = QueuedItem.command_item("one")
    b = QueuedItem.command_item("two")
    queue = ExecutionQueue([a, b])

    assert queue.pop_next() is a
    assert queue.pop_next() is b
    assert queue.pop_next() is None
    assert queue.is_empty


def test_get_and_iter() -> None:
    a = QueuedItem.command_item("one")
    queue = ExecutionQueue([a])

    assert queue.get(a.id) is a
    assert queue.get("nope") is None
    assert list(queue) == [a]


def test_item_kinds_and_payload() -> None:
    command = QueuedItem.command_item("npm test", tab_name="Build")
    message = QueuedItem.message_item("look at this", images=["shot.png"])

    assert command.kind is QueueItemKind.COMMAND
    assert command.payload == "npm test"
    assert command.tab_name == "Build"
    assert message.kind is QueueItemKind.MESSAGE
    assert message.payload == "look at this"
    assert message.images == ("shot.png",)
    assert message.tab_name is None
    assert command.id != message.id
