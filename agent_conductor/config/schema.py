"""Configuration schema for agent-conductor."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings


class CLIAgentConfig(BaseModel):
    """Configuration for one CLI agent binary."""

    enabled: bool = True
    command: str = ""
    working_dir: str = ""


class AgentDefaults(BaseModel):
    """Global defaults for CLI-agent runtime."""

    workspace: str = "~/.agent-conductor/workspace"
    active: str = "claude-code"


class AgentsConfig(BaseModel):
    """CLI agents configuration, keyed by agent id."""

    defaults: AgentDefaults = Field(default_factory=AgentDefaults)
    overrides: dict[str, CLIAgentConfig] = Field(default_factory=dict)


class SshRemoteConfig(BaseModel):
    """A remote host that commands can be executed on over SSH."""

    id: str
    name: str = ""
    host: str
    port: int = 22
    username: str
    private_key_path: str = "~/.ssh/id_ed25519"
    remote_working_dir: str | None = None
    remote_env: dict[str, str] = Field(default_factory=dict)
    enabled: bool = True


class AgentSshRemoteConfig(BaseModel):
    """Per-agent SSH override: disable remote execution or pin a remote."""

    enabled: bool = True
    remote_id: str | None = None


class ExecutionConfig(BaseModel):
    """Command execution limits."""

    timeout_s: float | None = 120.0
    ssh_connect_timeout_s: int = 10


class SummarizationConfig(BaseModel):
    """Summarize-and-continue settings."""

    min_logs: int = 5
    max_tokens_per_pass: int = 50_000
    agent_type: str = "claude-code"


class Config(BaseSettings):
    """Root configuration for agent-conductor."""

    agents: AgentsConfig = Field(default_factory=AgentsConfig)
    ssh_remotes: list[SshRemoteConfig] = Field(default_factory=list)
    default_ssh_remote_id: str | None = None
    agent_ssh: dict[str, AgentSshRemoteConfig] = Field(default_factory=dict)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    summarization: SummarizationConfig = Field(default_factory=SummarizationConfig)

    @property
    def workspace_path(self) -> Path:
        """Get expanded workspace path."""
        return Path(self.agents.defaults.workspace).expanduser()

    def get_agent_config(self, name: str) -> CLIAgentConfig | None:
        """Get agent-specific configuration by key."""
        key = (name or "").strip().lower()
        return self.agents.overrides.get(key)

    def get_ssh_remote(self, remote_id: str) -> SshRemoteConfig | None:
        for remote in self.ssh_remotes:
            if remote.id == remote_id:
                return remote
        return None

    model_config = ConfigDict(
        env_prefix="AGENT_CONDUCTOR_",
        env_nested_delimiter="__",
        extra="ignore",
    )
