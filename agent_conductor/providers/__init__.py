"""Agent metadata, capability table and output parsing."""

from agent_conductor.providers.agent_registry import AGENT_DEFS, AgentDef, get_agent_def
from agent_conductor.providers.capabilities import (
    AgentCapabilities,
    AGENT_CAPABILITIES,
    get_agent_capabilities,
    has_capability,
)
from agent_conductor.providers.output_extractor import (
    extract_text,
    extract_text_from_agent_output,
    extract_text_from_stream_json,
    extract_text_generic,
)
from agent_conductor.providers.parsers import (
    AgentOutputParser,
    NormalizedEvent,
    ResultEvent,
    TextEvent,
    get_output_parser,
    register_output_parser,
)

__all__ = [
    "AGENT_DEFS",
    "AgentCapabilities",
    "AgentDef",
    "AgentOutputParser",
    "AGENT_CAPABILITIES",
    "NormalizedEvent",
    "ResultEvent",
    "TextEvent",
    "extract_text",
    "extract_text_from_agent_output",
    "extract_text_from_stream_json",
    "extract_text_generic",
    "get_agent_capabilities",
    "get_agent_def",
    "get_output_parser",
    "has_capability",
    "register_output_parser",
]
