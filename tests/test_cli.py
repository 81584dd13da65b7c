import json
import sys

import pytest
from loguru import logger
from typer.testing import CliRunner

from agent_conductor import __version__
from agent_conductor.cli.commands import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    yield tmp_path
    # The CLI binds a loguru sink to the runner's captured stderr.
    logger.remove()


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"agent-conductor v{__version__}" in result.stdout


def test_capabilities_single_agent() -> None:
    result = runner.invoke(app, ["capabilities", "codex"])
    assert result.exit_code == 0
    assert "json_output" in result.stdout
    assert "codex" in result.stdout


def test_extract_jsonl(tmp_path) -> None:
    capture = tmp_path / "out.jsonl"
    capture.write_text(
        "\n".join(
            [
                json.dumps({"type": "assistant", "message": {"content": "thinking"}}),
                json.dumps({"type": "result", "result": "Final answer"}),
            ]
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["extract", str(capture), "--agent", "claude-code"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "Final answer"


def test_extract_generic(tmp_path) -> None:
    capture = tmp_path / "out.jsonl"
    capture.write_text('{"text": "A"}\n{"text": "B"}\n', encoding="utf-8")

    result = runner.invoke(app, ["extract", str(capture), "--generic"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "A\nB"


def test_exec_runs_locally(tmp_path) -> None:
    script = tmp_path / "hello.py"
    script.write_text("import sys\nprint('hello from exec')\nsys.exit(3)\n", encoding="utf-8")

    result = runner.invoke(app, ["exec", "--command", sys.executable, "--cwd", str(tmp_path), str(script)])

    assert result.exit_code == 3
    assert "hello from exec" in result.stdout


def test_status_without_config(isolated_home) -> None:
    result = runner.invoke(app, ["status"])
    assert result.exit_code == 0
    assert "claude-code" in result.stdout
    assert "(none)" in result.stdout
    assert "output args: --print --verbose --output-format stream-json" in result.stdout
    assert "output args: exec --json" in result.stdout
