"""Build SSH invocations that run a command on a remote host.

All user-supplied values are single-quoted for the remote POSIX shell, so
the remote side sees them literally (no expansion, no substitution).
"""

from __future__ import annotations

import re
import shlex
from dataclasses import dataclass, field
from pathlib import Path

from agent_conductor.config.schema import SshRemoteConfig

_ENV_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Non-interactive, key-only authentication.
DEFAULT_SSH_OPTIONS: dict[str, str] = {
    "BatchMode": "yes",
    "StrictHostKeyChecking": "accept-new",
    "ConnectTimeout": "10",
}


@dataclass(frozen=True)
class RemoteCommand:
    """A command to run on the remote host."""

    command: str
    args: tuple[str, ...] = ()
    cwd: str | None = None
    env: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SshCommand:
    """Local invocation of the ssh client."""

    command: str
    args: tuple[str, ...]


def shell_escape(value: str) -> str:
    """Single-quote ``value`` for a POSIX shell.

    Unlike ``shlex.quote`` this always quotes, so the output is stable
    regardless of the characters involved.
    """
    if value == "":
        return "''"
    return "'" + value.replace("'", "'\\''") + "'"


def build_shell_command(command: str, args: list[str] | tuple[str, ...]) -> str:
    """``command`` followed by its escaped arguments."""
    return " ".join([command, *(shell_escape(arg) for arg in args)])


def build_remote_command(remote_command: RemoteCommand) -> str:
    """Render ``cd <cwd> && VAR='v' command 'arg' ...`` for the remote shell.

    Environment entries with names that are not valid shell identifiers are
    dropped.
    """
    parts: list[str] = []
    if remote_command.cwd:
        parts.append(f"cd {shell_escape(remote_command.cwd)}")

    exports = [
        f"{key}={shell_escape(value)}"
        for key, value in remote_command.env.items()
        if _ENV_NAME_RE.match(key)
    ]
    command_line = build_shell_command(remote_command.command, remote_command.args)
    if exports:
        command_line = f"{' '.join(exports)} {command_line}"
    parts.append(command_line)

    return " && ".join(parts)


def build_ssh_command(
    remote: SshRemoteConfig,
    remote_command: RemoteCommand,
    connect_timeout_s: int | None = None,
) -> SshCommand:
    """Build the ``ssh`` argv that runs ``remote_command`` on ``remote``.

    The command's env overrides the remote's configured env. The command's
    cwd wins over ``remote.remote_working_dir``; with neither, no ``cd`` is
    emitted and the remote shell's default directory applies.
    """
    options = dict(DEFAULT_SSH_OPTIONS)
    if connect_timeout_s is not None:
        options["ConnectTimeout"] = str(connect_timeout_s)

    args: list[str] = ["-i", str(Path(remote.private_key_path).expanduser())]
    for key, value in options.items():
        args.extend(["-o", f"{key}={value}"])
    args.extend(["-p", str(remote.port)])
    args.append(f"{remote.username}@{remote.host}")

    merged_env = {**remote.remote_env, **remote_command.env}
    args.append(
        build_remote_command(
            RemoteCommand(
                command=remote_command.command,
                args=tuple(remote_command.args),
                cwd=remote_command.cwd or remote.remote_working_dir,
                env=merged_env,
            )
        )
    )
    return SshCommand(command="ssh", args=tuple(args))


def format_invocation(ssh_command: SshCommand) -> str:
    """Human-readable form of an invocation for logs."""
    return shlex.join([ssh_command.command, *ssh_command.args])
