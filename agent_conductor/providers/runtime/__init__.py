"""Command execution runtime: local subprocess and SSH remote."""

from .dispatcher import ExecutionDispatcher, exec_git
from .exec_file import ExecResult, exec_file_no_throw
from .ssh_command import RemoteCommand, SshCommand, build_remote_command, build_ssh_command, shell_escape
from .ssh_resolver import SshRemoteResolution, resolve_for_agent, resolve_ssh_remote

__all__ = [
    "ExecResult",
    "ExecutionDispatcher",
    "RemoteCommand",
    "SshCommand",
    "SshRemoteResolution",
    "build_remote_command",
    "build_ssh_command",
    "exec_file_no_throw",
    "exec_git",
    "resolve_for_agent",
    "resolve_ssh_remote",
    "shell_escape",
]
