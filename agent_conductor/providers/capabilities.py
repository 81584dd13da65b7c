"""Static capability table for supported CLI agents.

Each agent integration declares which optional features it supports so the
rest of the workspace can show or hide behaviour without branching on agent
names. Unknown agents get the conservative all-false profile.

Adding an agent means adding an entry to ``AGENT_CAPABILITIES``; there is no
runtime registration API.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from types import MappingProxyType
from typing import Mapping


@dataclass
class AgentCapabilities:
    """Feature flags for one agent integration."""

    supports_resume: bool = False            # --resume / --session
    supports_read_only_mode: bool = False    # plan / read-only permission mode
    supports_json_output: bool = False       # JSON or JSONL output for parsing
    supports_session_id: bool = False        # session id reported in output
    supports_image_input: bool = False
    supports_slash_commands: bool = False
    supports_session_storage: bool = False   # history stored in a discoverable place
    supports_cost_tracking: bool = False
    supports_usage_stats: bool = False       # token counts in output
    supports_batch_mode: bool = False        # headless / non-interactive run
    supports_streaming: bool = False
    supports_result_messages: bool = False   # distinct "result" event when done

    def to_dict(self) -> dict[str, bool]:
        return asdict(self)


CAPABILITY_FLAGS: tuple[str, ...] = tuple(f.name for f in fields(AgentCapabilities))

_STREAMING_ONLY = frozenset({"supports_streaming"})

_STRUCTURED_BATCH = frozenset(
    {
        "supports_resume",
        "supports_read_only_mode",
        "supports_json_output",
        "supports_session_id",
        "supports_usage_stats",
        "supports_batch_mode",
        "supports_streaming",
        "supports_result_messages",
    }
)

# Enabled flags per agent. Lookups build a fresh AgentCapabilities each time.
AGENT_CAPABILITIES: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "claude-code": frozenset(CAPABILITY_FLAGS),
        # Plain shell sessions: the PTY streams, nothing else applies.
        "terminal": _STREAMING_ONLY,
        "codex": _STRUCTURED_BATCH,
        "openai-codex": _STREAMING_ONLY,
        "gemini-cli": frozenset({"supports_image_input", "supports_streaming"}),
        "qwen3-coder": _STREAMING_ONLY,
        "opencode": _STRUCTURED_BATCH,
    }
)


def get_agent_capabilities(agent_id: str) -> AgentCapabilities:
    """Return a new capability profile for ``agent_id``.

    Never fails: unknown ids get the all-false profile. The result belongs
    to the caller; changing it has no effect on later lookups.
    """
    enabled = AGENT_CAPABILITIES.get(agent_id, frozenset())
    return AgentCapabilities(**{flag: True for flag in enabled})


def has_capability(agent_id: str, capability: str) -> bool:
    """Return True if ``agent_id`` supports ``capability``."""
    return capability in AGENT_CAPABILITIES.get(agent_id, frozenset())
