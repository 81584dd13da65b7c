from pathlib import Path

from agent_conductor.config.schema import SshRemoteConfig
from agent_conductor.providers.runtime.ssh_command import (
    RemoteCommand,
    SshCommand,
    build_remote_command,
    build_shell_command,
    build_ssh_command,
    format_invocation,
    shell_escape,
)


def _remote(**overrides) -> SshRemoteConfig:
    values = {
        "id": "build-box",
        "host": "build.example.com",
        "username": "dev",
        "private_key_path": "~/.ssh/build_key",
    }
    values.update(overrides)
    return SshRemoteConfig(**values)


def test_shell_escape() -> None:
    assert shell_escape("plain") == "'plain'"
    assert shell_escape("") == "''"
    assert shell_escape("it's") == "'it'\\''s'"
    assert shell_escape("$(rm -rf /)") == "'$(rm -rf /)'"


def test_build_shell_command() -> None:
    assert build_shell_command("git", ["commit", "-m", "a b"]) == "git 'commit' '-m' 'a b'"
    assert build_shell_command("ls", []) == "ls"


def test_remote_command_with_cwd_and_env() -> None:
    rendered = build_remote_command(
        RemoteCommand(command="git", args=("status",), cwd="/srv/app", env={"LANG": "C", "bad-name": "x"})
    )
    assert rendered == "cd '/srv/app' && LANG='C' git 'status'"


def test_remote_command_without_cwd() -> None:
    assert build_remote_command(RemoteCommand(command="git", args=("log",))) == "git 'log'"


def test_build_ssh_command_layout() -> None:
    remote = _remote(port=2222, remote_working_dir="/home/dev/project")
    ssh = build_ssh_command(remote, RemoteCommand(command="git", args=("status",)))

    assert ssh.command == "ssh"
    assert ssh.args[:2] == ("-i", str(Path("~/.ssh/build_key").expanduser()))
    assert "-o" in ssh.args
    assert "BatchMode=yes" in ssh.args
    assert ssh.args[-3:-1] == ("2222", "dev@build.example.com")
    assert ssh.args[-1] == "cd '/home/dev/project' && git 'status'"


def test_command_cwd_wins_over_remote_working_dir() -> None:
    remote = _remote(remote_working_dir="/configured")
    ssh = build_ssh_command(remote, RemoteCommand(command="git", args=("status",), cwd="/override"))
    assert ssh.args[-1] == "cd '/override' && git 'status'"


def test_command_env_overrides_remote_env() -> None:
    remote = _remote(remote_env={"A": "remote", "B": "kept"})
    ssh = build_ssh_command(remote, RemoteCommand(command="env", env={"A": "command"}))
    assert ssh.args[-1] == "A='command' B='kept' env"


def test_connect_timeout_override() -> None:
    ssh = build_ssh_command(_remote(), RemoteCommand(command="true"), connect_timeout_s=3)
    assert "ConnectTimeout=3" in ssh.args
    assert "ConnectTimeout=10" not in ssh.args


def test_format_invocation() -> None:
    assert format_invocation(SshCommand("ssh", ("host", "git 'status'"))) == "ssh host 'git '\"'\"'status'\"'\"''"
