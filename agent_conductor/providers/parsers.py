"""Per-agent JSON line parsers.

Each agent binary has its own JSONL schema. A parser turns one raw line into
a normalized event (final result or streaming text) or ``None`` when the line
carries nothing worth displaying (tool calls, usage, init events, ...).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Protocol, Union


@dataclass(frozen=True)
class ResultEvent:
    """Final, authoritative response text for a turn."""

    text: str


@dataclass(frozen=True)
class TextEvent:
    """Incremental text fragment."""

    text: str


NormalizedEvent = Union[ResultEvent, TextEvent]


class AgentOutputParser(Protocol):
    """Minimal per-agent parser contract."""

    agent_id: str

    def parse_json_line(self, line: str) -> NormalizedEvent | None:
        """Parse one line of agent output."""


def _load_object(line: str) -> dict[str, Any] | None:
    try:
        msg = json.loads(line)
    except ValueError:
        return None
    return msg if isinstance(msg, dict) else None


# ═══════════════════════════════════════════════════════════════════════════════
# Claude Code  (--output-format stream-json)
# ═══════════════════════════════════════════════════════════════════════════════


class ClaudeOutputParser:
    """Parser for Claude Code stream-json output.

    ``{"type": "result", "result": "..."}`` closes a turn; assistant messages
    carry either a string or a list of content blocks.
    """

    agent_id = "claude-code"

    def parse_json_line(self, line: str) -> NormalizedEvent | None:
        msg = _load_object(line)
        if msg is None:
            return None

        kind = msg.get("type")
        if kind == "result":
            result = msg.get("result")
            if isinstance(result, str) and result:
                return ResultEvent(result)
            return None

        if kind == "assistant":
            message = msg.get("message")
            if not isinstance(message, dict):
                return None
            text = _claude_content_text(message.get("content"))
            return TextEvent(text) if text else None

        return None


def _claude_content_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    if not isinstance(content, list):
        return ""
    parts: list[str] = []
    for block in content:
        if isinstance(block, dict) and block.get("type") == "text":
            text = block.get("text")
            if isinstance(text, str):
                parts.append(text)
    return "".join(parts)


# ═══════════════════════════════════════════════════════════════════════════════
# OpenCode  (run --format json)
# ═══════════════════════════════════════════════════════════════════════════════


class OpenCodeOutputParser:
    """Parser for OpenCode JSON events: ``{"type": "text", "part": {"text": ...}}``."""

    agent_id = "opencode"

    def parse_json_line(self, line: str) -> NormalizedEvent | None:
        msg = _load_object(line)
        if msg is None or msg.get("type") != "text":
            return None
        part = msg.get("part")
        if not isinstance(part, dict):
            return None
        text = part.get("text")
        if isinstance(text, str) and text:
            return TextEvent(text)
        return None


# ═══════════════════════════════════════════════════════════════════════════════
# Codex CLI  (exec --json)
# ═══════════════════════════════════════════════════════════════════════════════


class CodexOutputParser:
    """Parser for Codex ``exec --json`` output.

    Only ``item.completed`` events carry text: ``agent_message`` items are the
    response proper, ``reasoning`` items are shown while the turn runs.
    Thread, turn and tool events are dropped.
    """

    def __init__(self, agent_id: str = "codex") -> None:
        self.agent_id = agent_id

    def parse_json_line(self, line: str) -> NormalizedEvent | None:
        msg = _load_object(line)
        if msg is None or msg.get("type") != "item.completed":
            return None
        item = msg.get("item")
        if not isinstance(item, dict):
            return None
        text = item.get("text")
        if not isinstance(text, str) or not text:
            return None

        item_type = item.get("type")
        if item_type == "agent_message":
            return ResultEvent(text)
        if item_type == "reasoning":
            return TextEvent(text)
        return None


# ═══════════════════════════════════════════════════════════════════════════════
# Dispatch by agent key
# ═══════════════════════════════════════════════════════════════════════════════

_PARSER_DISPATCH: dict[str, AgentOutputParser] = {}


def register_output_parser(parser: AgentOutputParser) -> None:
    """Register ``parser`` under its ``agent_id``, replacing any previous one."""
    _PARSER_DISPATCH[parser.agent_id] = parser


def unregister_output_parser(agent_id: str) -> bool:
    """Remove the parser for ``agent_id``. Returns False if none was registered."""
    return _PARSER_DISPATCH.pop(agent_id, None) is not None


def get_output_parser(agent_id: str | None) -> AgentOutputParser | None:
    """Return the parser registered for ``agent_id`` or None."""
    if not agent_id:
        return None
    return _PARSER_DISPATCH.get(agent_id)


for _parser in (
    ClaudeOutputParser(),
    OpenCodeOutputParser(),
    CodexOutputParser("codex"),
    CodexOutputParser("openai-codex"),
):
    register_output_parser(_parser)
