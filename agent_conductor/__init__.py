"""agent-conductor - output interpretation and orchestration core for CLI coding agents."""

__version__ = "0.3.0"
