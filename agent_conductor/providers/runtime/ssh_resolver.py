"""Decide which SSH remote, if any, an agent's commands should run on.

Resolution order:
1. per-agent override explicitly disabled -> local
2. per-agent override pinned to an enabled remote -> that remote
3. global default remote, when enabled -> that remote
4. otherwise -> local
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from agent_conductor.config.schema import AgentSshRemoteConfig, Config, SshRemoteConfig

ResolutionSource = Literal["agent", "global", "disabled", "none"]


@dataclass(frozen=True)
class SshRemoteResolution:
    config: SshRemoteConfig | None
    source: ResolutionSource


def _find_enabled(remotes: Sequence[SshRemoteConfig], remote_id: str) -> SshRemoteConfig | None:
    for remote in remotes:
        if remote.id == remote_id and remote.enabled:
            return remote
    return None


def resolve_ssh_remote(
    remotes: Sequence[SshRemoteConfig],
    default_remote_id: str | None,
    agent_override: AgentSshRemoteConfig | None = None,
) -> SshRemoteResolution:
    """Resolve the effective remote. ``config`` is None for local execution."""
    if agent_override is not None:
        if not agent_override.enabled:
            return SshRemoteResolution(config=None, source="disabled")
        if agent_override.remote_id:
            remote = _find_enabled(remotes, agent_override.remote_id)
            if remote is not None:
                return SshRemoteResolution(config=remote, source="agent")
            # Unknown or disabled pinned remote: fall through to the default.

    if default_remote_id:
        remote = _find_enabled(remotes, default_remote_id)
        if remote is not None:
            return SshRemoteResolution(config=remote, source="global")

    return SshRemoteResolution(config=None, source="none")


def resolve_for_agent(config: Config, agent_id: str) -> SshRemoteResolution:
    """Resolve the remote for ``agent_id`` from the loaded configuration."""
    return resolve_ssh_remote(
        config.ssh_remotes,
        config.default_ssh_remote_id,
        config.agent_ssh.get(agent_id),
    )
