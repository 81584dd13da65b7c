"""Configuration module for agent-conductor."""

from agent_conductor.config.loader import get_config_path, load_config, save_config
from agent_conductor.config.schema import AgentSshRemoteConfig, Config, SshRemoteConfig

__all__ = [
    "AgentSshRemoteConfig",
    "Config",
    "SshRemoteConfig",
    "get_config_path",
    "load_config",
    "save_config",
]
