"""Load and save the JSON configuration file."""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from agent_conductor.config.schema import Config


def get_config_path() -> Path:
    """Return default path for the configuration file."""
    return Path.home() / ".agent-conductor" / "config.json"


def load_config(path: Path | None = None) -> Config:
    """Load configuration from disk, falling back to defaults.

    A missing file yields defaults silently; an unreadable or invalid file
    yields defaults with a warning.
    """
    target = path or get_config_path()
    if not target.exists():
        return Config()

    try:
        payload = json.loads(target.read_text(encoding="utf-8"))
        return Config.model_validate(payload)
    except (OSError, ValueError, ValidationError) as exc:
        logger.warning(f"[config] Failed to load {target}: {exc}; using defaults")
        return Config()


def save_config(config: Config, path: Path | None = None) -> Path:
    """Persist configuration to disk."""
    target = path or get_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(config.model_dump(mode="json"), indent=2), encoding="utf-8")
    return target
