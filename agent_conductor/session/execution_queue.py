"""Ordered queue of inputs submitted while a session is busy.

The queue holds items only; deciding when to dispatch them belongs to the
scheduler that owns the session. The UI enqueues and removes, the scheduler
pops, so every mutation swaps in a new tuple and readers always see a
complete snapshot.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterator

from loguru import logger


class QueueItemKind(str, Enum):
    COMMAND = "command"
    MESSAGE = "message"


class DuplicateQueueItemError(ValueError):
    """Raised when an item id is already queued."""


@dataclass(frozen=True)
class QueuedItem:
    """One pending command or message."""

    id: str
    kind: QueueItemKind
    command: str = ""
    text: str = ""
    tab_name: str | None = None          # destination tab, None = active tab
    images: tuple[str, ...] = ()         # attached image references
    created_at: str = field(default_factory=lambda: datetime.now().isoformat(timespec="seconds"))

    @property
    def payload(self) -> str:
        """Command line for COMMAND items, message text for MESSAGE items."""
        return self.command if self.kind is QueueItemKind.COMMAND else self.text

    @classmethod
    def command_item(cls, command: str, tab_name: str | None = None) -> "QueuedItem":
        return cls(id=uuid.uuid4().hex, kind=QueueItemKind.COMMAND, command=command, tab_name=tab_name)

    @classmethod
    def message_item(
        cls,
        text: str,
        tab_name: str | None = None,
        images: list[str] | tuple[str, ...] | None = None,
    ) -> "QueuedItem":
        return cls(
            id=uuid.uuid4().hex,
            kind=QueueItemKind.MESSAGE,
            text=text,
            tab_name=tab_name,
            images=tuple(images or ()),
        )


class ExecutionQueue:
    """FIFO collection of ``QueuedItem`` keyed by id."""

    def __init__(self, items: list[QueuedItem] | None = None) -> None:
        self._items: tuple[QueuedItem, ...] = ()
        for item in items or ():
            self.enqueue(item)

    def enqueue(self, item: QueuedItem) -> None:
        """Append ``item``. Raises DuplicateQueueItemError for a known id."""
        current = self._items
        if any(existing.id == item.id for existing in current):
            raise DuplicateQueueItemError(f"Queue item '{item.id}' is already queued")
        self._items = current + (item,)
        logger.debug(f"[queue] enqueued {item.kind.value} id={item.id} size={len(self._items)}")

    def remove(self, item_id: str) -> bool:
        """Remove the item with ``item_id``. Returns False if it is not queued."""
        current = self._items
        remaining = tuple(item for item in current if item.id != item_id)
        if len(remaining) == len(current):
            return False
        self._items = remaining
        logger.debug(f"[queue] removed id={item_id} size={len(remaining)}")
        return True

    def pop_next(self) -> QueuedItem | None:
        """Take the oldest item off the queue (scheduler dispatch)."""
        current = self._items
        if not current:
            return None
        self._items = current[1:]
        return current[0]

    def get(self, item_id: str) -> QueuedItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def list(self) -> tuple[QueuedItem, ...]:
        """Return a read-only snapshot in insertion order."""
        return self._items

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[QueuedItem]:
        return iter(self._items)
