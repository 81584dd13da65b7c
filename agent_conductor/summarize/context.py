"""Helpers for turning tab logs into summarizer input and back."""

from __future__ import annotations

import math
import re

from agent_conductor.session.models import LogEntry

# Separator placed between chunk summaries when a context is summarized in parts.
CHUNK_SEPARATOR = "\n\n---\n\n"
_SECTION_SPLIT_RE = re.compile(r"^\s*---\s*$", re.MULTILINE)

_SOURCE_LABELS = {
    "user": "User",
    "ai": "Assistant",
    "system": "System",
    "stdout": "Output",
    "stderr": "Error output",
}


def estimate_text_token_count(text: str) -> int:
    """Rough token estimate: about four characters per token."""
    if not text:
        return 0
    return math.ceil(len(text) / 4)


def format_logs_for_grooming(logs: list[LogEntry]) -> str:
    """Render logs as a readable transcript for the summarizing agent."""
    blocks: list[str] = []
    for log in logs:
        text = log.text.strip()
        if not text:
            continue
        label = _SOURCE_LABELS.get(log.source, log.source.capitalize() or "Entry")
        blocks.append(f"**{label}:** {text}")
    return "\n\n".join(blocks)


def parse_groomed_output(text: str) -> list[LogEntry]:
    """Split summarizer output into log entries, one per ``---`` section."""
    sections = [section.strip() for section in _SECTION_SPLIT_RE.split(text or "")]
    return [LogEntry(source="ai", text=section) for section in sections if section]


def chunk_logs(logs: list[LogEntry], max_tokens_per_chunk: int) -> list[list[LogEntry]]:
    """Group consecutive logs into chunks under ``max_tokens_per_chunk``.

    A single log larger than the limit still gets a chunk of its own.
    """
    chunks: list[list[LogEntry]] = []
    current: list[LogEntry] = []
    current_tokens = 0

    for log in logs:
        tokens = estimate_text_token_count(log.text)
        if current and current_tokens + tokens > max_tokens_per_chunk:
            chunks.append(current)
            current = []
            current_tokens = 0
        current.append(log)
        current_tokens += tokens

    if current:
        chunks.append(current)
    return chunks
