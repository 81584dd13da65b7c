"""Command-line interface for agent-conductor."""
