"""Run a command locally or on the session's SSH remote.

The caller only says where the command would run locally and, optionally,
which remote the session is bound to; the dispatcher picks the transport.
Failures come back as ``ExecResult`` data, never as exceptions.
"""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Callable, Sequence

from loguru import logger

from agent_conductor.config.schema import SshRemoteConfig
from agent_conductor.providers.runtime.exec_file import ExecResult, exec_file_no_throw
from agent_conductor.providers.runtime.ssh_command import (
    RemoteCommand,
    SshCommand,
    build_ssh_command,
    format_invocation,
)

Runner = Callable[..., ExecResult]
SshBuilder = Callable[[SshRemoteConfig, RemoteCommand], SshCommand]


class ExecutionDispatcher:
    """Execute one command (``git`` by default) locally or over SSH."""

    def __init__(
        self,
        command: str = "git",
        runner: Runner | None = None,
        ssh_builder: SshBuilder | None = None,
        timeout_s: float | None = None,
        ssh_connect_timeout_s: int | None = None,
    ) -> None:
        self.command = command
        self.timeout_s = timeout_s
        self._runner = runner or exec_file_no_throw
        self._ssh_builder = ssh_builder or partial(build_ssh_command, connect_timeout_s=ssh_connect_timeout_s)

    async def execute(
        self,
        args: Sequence[str],
        local_cwd: str,
        remote: SshRemoteConfig | None = None,
        remote_cwd: str | None = None,
    ) -> ExecResult:
        """Run ``self.command args``.

        With ``remote`` the command runs over SSH in ``remote_cwd`` (or the
        remote's configured working dir); otherwise it runs in ``local_cwd``.
        """
        if remote is not None:
            return await self.execute_remote(args, remote, remote_cwd)
        return await self._run(self.command, list(args), local_cwd)

    async def execute_remote(
        self,
        args: Sequence[str],
        remote: SshRemoteConfig,
        remote_cwd: str | None = None,
    ) -> ExecResult:
        effective_cwd = remote_cwd or remote.remote_working_dir
        if not effective_cwd:
            logger.warning(
                f"[remote-exec] No remote working directory for {self.command} on {remote.host}; "
                "using the remote shell default"
            )

        ssh_command = self._ssh_builder(
            remote,
            RemoteCommand(
                command=self.command,
                args=tuple(args),
                cwd=effective_cwd,
                env=dict(remote.remote_env),
            ),
        )
        logger.debug(
            f"[remote-exec] {self.command} {' '.join(args)} host={remote.host} cwd={effective_cwd} "
            f"invocation={format_invocation(ssh_command)}"
        )

        result = await self._run(ssh_command.command, list(ssh_command.args), None)
        if result.exit_code != 0:
            logger.debug(f"[remote-exec] {self.command} failed exit={result.exit_code}: {result.stderr.strip()}")
        return result

    async def _run(self, command: str, args: list[str], cwd: str | None) -> ExecResult:
        return await asyncio.to_thread(
            self._runner,
            command,
            args,
            cwd=cwd,
            timeout_s=self.timeout_s,
        )


async def exec_git(
    args: Sequence[str],
    local_cwd: str,
    remote: SshRemoteConfig | None = None,
    remote_cwd: str | None = None,
    timeout_s: float | None = None,
) -> ExecResult:
    """Run ``git args`` locally or on ``remote``."""
    dispatcher = ExecutionDispatcher(command="git", timeout_s=timeout_s)
    return await dispatcher.execute(args, local_cwd, remote=remote, remote_cwd=remote_cwd)
