"""Snapshot-based text extraction for agent process output.

Instead of parsing a stream of chunks incrementally, every call takes the
full accumulated output and re-derives the display text from scratch. A
result event anywhere in the buffer overrides the streamed text, so the
whole buffer has to be seen each time; the O(n) rescan per update is the
price for that.

Plain text output (shell sessions, banners, agents without JSON mode) is
passed through untouched. JSONL output is reduced line by line, through the
agent's registered parser when there is one or a generic field heuristic
otherwise.
"""

from __future__ import annotations

import json
from typing import Any, Callable

from loguru import logger

from agent_conductor.providers.parsers import (
    AgentOutputParser,
    NormalizedEvent,
    ResultEvent,
    TextEvent,
    get_output_parser,
)

LineParser = Callable[[str], "NormalizedEvent | None"]


def is_jsonl_output(raw_output: str) -> bool:
    """Return True when the first non-blank line looks like a JSON object.

    Output with no non-blank line at all counts as JSONL (and extracts to "").
    """
    for line in raw_output.split("\n"):
        stripped = line.strip()
        if stripped:
            return stripped.startswith("{")
    return True


def parse_generic_line(line: str) -> NormalizedEvent | None:
    """Generic heuristic for agents without a dedicated parser.

    Field priority: ``result`` > ``text`` > ``part.text`` > ``message.content``.
    The first field holding a non-empty string wins; other value types are
    treated as absent.
    """
    try:
        msg = json.loads(line)
    except ValueError:
        return None
    if not isinstance(msg, dict):
        return None

    result = msg.get("result")
    if _is_text(result):
        return ResultEvent(result)

    for candidate in (
        msg.get("text"),
        _nested(msg, "part", "text"),
        _nested(msg, "message", "content"),
    ):
        if _is_text(candidate):
            return TextEvent(candidate)
    return None


def extract_text(raw_output: str, agent_id: str | None = None) -> str:
    """Return the current best display text for ``raw_output``.

    Uses the parser registered for ``agent_id`` when there is one, otherwise
    the generic heuristic.
    """
    parser = get_output_parser(agent_id)
    if parser is None:
        return _extract(raw_output, parse_generic_line)
    return _extract(raw_output, _guarded(parser))


def extract_text_generic(raw_output: str) -> str:
    """Extract text using only the generic heuristic."""
    return _extract(raw_output, parse_generic_line)


def extract_text_from_agent_output(raw_output: str, agent_id: str) -> str:
    """Extract text with the parser registered for ``agent_id``.

    Falls back to the generic heuristic when the agent has no parser.
    """
    parser = get_output_parser(agent_id)
    if parser is None:
        logger.warning(f"[extract] No parser found for agent type '{agent_id}', using generic extraction")
        return extract_text_generic(raw_output)
    return _extract(raw_output, _guarded(parser))


def extract_text_from_stream_json(raw_output: str, agent_id: str | None = None) -> str:
    """Extract text from stream-json output, agent-aware when ``agent_id`` is given."""
    if agent_id:
        return extract_text_from_agent_output(raw_output, agent_id)
    return extract_text_generic(raw_output)


def _extract(raw_output: str, parse_line: LineParser) -> str:
    if not is_jsonl_output(raw_output):
        logger.debug(f"[extract] Input is not JSONL, returning as plain text (len={len(raw_output)})")
        return raw_output

    text_parts: list[str] = []
    for line in raw_output.split("\n"):
        if not line.strip():
            continue
        event = parse_line(line)
        if isinstance(event, ResultEvent):
            return event.text
        if isinstance(event, TextEvent):
            text_parts.append(event.text)

    return "\n".join(text_parts)


def _guarded(parser: AgentOutputParser) -> LineParser:
    """Wrap a plugin parser so a failing line is skipped instead of raised."""

    def parse_line(line: str) -> NormalizedEvent | None:
        try:
            return parser.parse_json_line(line)
        except Exception as exc:
            logger.debug(f"[extract] parser {parser.agent_id!r} failed on line: {exc}")
            return None

    return parse_line


def _nested(msg: dict[str, Any], outer: str, inner: str) -> Any:
    value = msg.get(outer)
    if isinstance(value, dict):
        return value.get(inner)
    return None


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value)
