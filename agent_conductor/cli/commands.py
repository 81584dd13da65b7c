"""CLI commands for agent-conductor."""

from __future__ import annotations

import asyncio
import os
import shlex
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from agent_conductor import __version__

if TYPE_CHECKING:
    from agent_conductor.config.schema import Config

app = typer.Typer(
    name="agent-conductor",
    help="agent-conductor - interpret CLI agent output and run session commands",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"agent-conductor v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """agent-conductor entrypoint."""
    del version
    configure_logging(verbose)


def _resolve_workdir(raw: str, workspace: Path) -> str:
    value = (raw or "").strip()
    if not value:
        return str(workspace)
    candidate = Path(value).expanduser()
    if not candidate.is_absolute():
        candidate = (workspace / candidate).resolve()
    return str(candidate)


def _apply_agent_overrides(config: "Config") -> None:
    from agent_conductor.providers.agent_registry import AGENT_DEFS

    for key, agent_def in AGENT_DEFS.items():
        agent_cfg = config.get_agent_config(key)
        command = (agent_cfg.command if agent_cfg else "").strip()
        if command:
            os.environ[agent_def.env_override] = command


@app.command()
def status() -> None:
    """Show configuration, agents and SSH remotes."""
    from agent_conductor.config.loader import get_config_path, load_config
    from agent_conductor.providers.agent_registry import AGENT_DEFS
    from agent_conductor.providers.runtime.ssh_resolver import resolve_for_agent

    config_path = get_config_path()
    config = load_config()
    _apply_agent_overrides(config)
    workspace = config.workspace_path

    console.print("agent-conductor Status\n")
    console.print(f"Config: {config_path} {'[green]OK[/green]' if config_path.exists() else '[red]NO[/red]'}")
    console.print(f"Workspace: {workspace} {'[green]OK[/green]' if workspace.exists() else '[red]NO[/red]'}")
    console.print(f"Default agent: [cyan]{config.agents.defaults.active}[/cyan]")

    console.print("\nCLI agents:")
    for key, agent_def in AGENT_DEFS.items():
        agent_cfg = config.get_agent_config(key)
        workdir = _resolve_workdir(agent_cfg.working_dir if agent_cfg else "", workspace)
        enabled = agent_cfg.enabled if agent_cfg else True
        state = "[green]enabled[/green]" if enabled else "[dim]disabled[/dim]"
        resolution = resolve_for_agent(config, key)
        target = resolution.config.host if resolution.config else "local"
        console.print(
            f"  - {key}: {state} | cmd={agent_def.resolve_command()} | cwd={workdir} "
            f"| exec={target} ({resolution.source})"
        )
        if agent_def.output_args:
            console.print(f"      output args: {shlex.join(agent_def.output_args)}", markup=False, highlight=False)

    if config.ssh_remotes:
        console.print("\nSSH remotes:")
        for remote in config.ssh_remotes:
            marker = " [cyan](default)[/cyan]" if remote.id == config.default_ssh_remote_id else ""
            state = "enabled" if remote.enabled else "disabled"
            console.print(
                f"  - {remote.id}: {remote.username}@{remote.host}:{remote.port} "
                f"cwd={remote.remote_working_dir or '-'} {state}{marker}"
            )


@app.command()
def capabilities(
    agent: Optional[str] = typer.Argument(None, help="Agent id; all known agents when omitted."),
) -> None:
    """Show the capability flags of one or all agents."""
    from agent_conductor.providers.agent_registry import known_agent_ids
    from agent_conductor.providers.capabilities import CAPABILITY_FLAGS, get_agent_capabilities

    agent_ids = [agent] if agent else known_agent_ids()
    table = Table(title="Agent capabilities")
    table.add_column("capability")
    for agent_id in agent_ids:
        table.add_column(agent_id, justify="center")

    profiles = [get_agent_capabilities(agent_id).to_dict() for agent_id in agent_ids]
    for flag in CAPABILITY_FLAGS:
        row = ["[green]yes[/green]" if profile[flag] else "[dim]no[/dim]" for profile in profiles]
        table.add_row(flag.removeprefix("supports_"), *row)
    console.print(table)


@app.command()
def extract(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Captured agent output."),
    agent: str = typer.Option("", "--agent", "-a", help="Agent id used to pick a parser."),
    generic: bool = typer.Option(False, "--generic", help="Ignore agent parsers."),
) -> None:
    """Print the display text extracted from captured agent output."""
    from agent_conductor.providers.output_extractor import extract_text_from_stream_json, extract_text_generic

    raw = path.read_text(encoding="utf-8", errors="replace")
    if generic:
        text = extract_text_generic(raw)
    else:
        text = extract_text_from_stream_json(raw, agent or None)
    console.print(text, markup=False, highlight=False, soft_wrap=True)


@app.command(
    name="exec",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def exec_command(
    args: list[str] = typer.Argument(..., help="Arguments passed to the command."),
    cwd: Path = typer.Option(Path("."), "--cwd", help="Local working directory."),
    command: str = typer.Option("git", "--command", "-c", help="Command to run."),
    agent: str = typer.Option("", "--agent", "-a", help="Agent whose SSH remote settings apply."),
    remote_cwd: str = typer.Option("", "--remote-cwd", help="Remote working directory override."),
) -> None:
    """Run a command locally or on the agent's SSH remote."""
    from agent_conductor.config.loader import load_config
    from agent_conductor.providers.runtime.dispatcher import ExecutionDispatcher
    from agent_conductor.providers.runtime.ssh_resolver import resolve_for_agent

    config = load_config()
    agent_id = agent or config.agents.defaults.active
    resolution = resolve_for_agent(config, agent_id)
    if resolution.config is not None:
        logger.info(f"[exec] running on {resolution.config.host} ({resolution.source})")

    dispatcher = ExecutionDispatcher(
        command=command,
        timeout_s=config.execution.timeout_s,
        ssh_connect_timeout_s=config.execution.ssh_connect_timeout_s,
    )
    result = asyncio.run(
        dispatcher.execute(
            args,
            str(cwd),
            remote=resolution.config,
            remote_cwd=remote_cwd or None,
        )
    )

    if result.stdout:
        console.print(result.stdout, end="", markup=False, highlight=False, soft_wrap=True)
    if result.stderr:
        err_console.print(result.stderr, end="", markup=False, highlight=False, soft_wrap=True)
    raise typer.Exit(result.exit_code)
