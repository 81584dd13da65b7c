"""Per-session accumulator for raw process output.

Agent processes deliver output in arbitrary fragments; a JSON line can be
split across reads. The buffer keeps every fragment for a session and joins
them on read, so the extractor always sees the full accumulated output.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from agent_conductor.providers.output_extractor import extract_text


@dataclass
class _SessionChunks:
    chunks: list[str] = field(default_factory=list)
    total_length: int = 0


class OutputBuffer:
    """Raw output fragments keyed by session id."""

    def __init__(self) -> None:
        self._buffers: dict[str, _SessionChunks] = {}

    def append(self, session_id: str, data: str) -> int:
        """Add ``data`` for ``session_id``. Returns the buffered length."""
        buffer = self._buffers.setdefault(session_id, _SessionChunks())
        buffer.chunks.append(data)
        buffer.total_length += len(data)
        return buffer.total_length

    def get(self, session_id: str) -> str | None:
        """Return the accumulated output, or None when nothing is buffered."""
        buffer = self._buffers.get(session_id)
        if buffer is None or not buffer.chunks:
            return None
        return "".join(buffer.chunks)

    def has(self, session_id: str) -> bool:
        buffer = self._buffers.get(session_id)
        return buffer is not None and bool(buffer.chunks)

    def clear(self, session_id: str) -> None:
        self._buffers.pop(session_id, None)

    def extract_text(self, session_id: str, agent_id: str | None = None) -> str:
        """Display text for everything buffered so far ("" when empty)."""
        return extract_text(self.get(session_id) or "", agent_id)
