"""Run a command without a shell and without raising on failure."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass

from loguru import logger

EXIT_TIMEOUT = 124
EXIT_NOT_FOUND = 127


@dataclass(frozen=True)
class ExecResult:
    """Captured result of one command execution."""

    stdout: str
    stderr: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def exec_file_no_throw(
    command: str,
    args: list[str] | tuple[str, ...] = (),
    cwd: str | None = None,
    env: dict[str, str] | None = None,
    timeout_s: float | None = None,
) -> ExecResult:
    """Execute ``command`` with ``args`` and capture its output.

    Non-zero exits, a missing binary (127), a missing working directory or
    unusable arguments (1) and timeouts (124) are all reported through
    ``ExecResult``; nothing is raised. ``env`` is layered over the current
    process environment.
    """
    if cwd and not os.path.isdir(cwd):
        return ExecResult(stdout="", stderr=f"Working directory does not exist: {cwd}", exit_code=1)

    argv = [command, *args]
    full_env = {**os.environ, **env} if env else None
    try:
        completed = subprocess.run(
            argv,
            cwd=cwd or None,
            env=full_env,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout_s,
        )
    except subprocess.TimeoutExpired as exc:
        logger.debug(f"[exec] {command} timed out after {timeout_s}s")
        return ExecResult(
            stdout=_as_text(exc.stdout),
            stderr=_as_text(exc.stderr) or f"Command timed out after {timeout_s}s",
            exit_code=EXIT_TIMEOUT,
        )
    except FileNotFoundError as exc:
        return ExecResult(stdout="", stderr=str(exc), exit_code=EXIT_NOT_FOUND)
    except (OSError, ValueError) as exc:
        # ValueError: embedded NUL bytes in argv or env
        return ExecResult(stdout="", stderr=str(exc), exit_code=1)

    return ExecResult(
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
        exit_code=completed.returncode,
    )


def _as_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
