"""Registry of supported CLI agents."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class AgentDef:
    """CLI agent metadata."""

    key: str
    name: str
    command: str
    env_override: str
    output_args: tuple[str, ...] = ()

    def resolve_command(self) -> str:
        """Resolve command from env override or default command."""
        value = os.getenv(self.env_override, "").strip()
        return value or self.command


AGENT_DEFS: dict[str, AgentDef] = {
    "claude-code": AgentDef(
        key="claude-code",
        name="Claude Code",
        command="claude",
        env_override="AGENT_CONDUCTOR_CLAUDE_CMD",
        output_args=("--print", "--verbose", "--output-format", "stream-json"),
    ),
    "codex": AgentDef(
        key="codex",
        name="Codex CLI",
        command="codex",
        env_override="AGENT_CONDUCTOR_CODEX_CMD",
        output_args=("exec", "--json"),
    ),
    "opencode": AgentDef(
        key="opencode",
        name="OpenCode",
        command="opencode",
        env_override="AGENT_CONDUCTOR_OPENCODE_CMD",
        output_args=("run", "--format", "json"),
    ),
    "gemini-cli": AgentDef(
        key="gemini-cli",
        name="Gemini CLI",
        command="gemini",
        env_override="AGENT_CONDUCTOR_GEMINI_CMD",
    ),
    "qwen3-coder": AgentDef(
        key="qwen3-coder",
        name="Qwen3 Coder",
        command="qwen",
        env_override="AGENT_CONDUCTOR_QWEN_CMD",
    ),
    "terminal": AgentDef(
        key="terminal",
        name="Terminal",
        command=os.getenv("SHELL", "/bin/sh"),
        env_override="AGENT_CONDUCTOR_TERMINAL_CMD",
    ),
}


def get_agent_def(agent_type: str) -> AgentDef:
    """Get an agent definition by key."""
    key = (agent_type or "").strip().lower()
    if key not in AGENT_DEFS:
        choices = ", ".join(sorted(AGENT_DEFS))
        raise ValueError(f"Unknown agent type '{agent_type}'. Expected one of: {choices}")
    return AGENT_DEFS[key]


def known_agent_ids() -> list[str]:
    """Return registered agent keys in a stable order."""
    return sorted(AGENT_DEFS)
