import sys

from agent_conductor.providers.runtime.exec_file import EXIT_NOT_FOUND, EXIT_TIMEOUT, exec_file_no_throw


def test_captures_stdout_and_exit_code() -> None:
    result = exec_file_no_throw(sys.executable, ["-c", "print('hello')"])
    assert result.ok
    assert result.stdout.strip() == "hello"
    assert result.stderr == ""


def test_non_zero_exit_is_reported() -> None:
    result = exec_file_no_throw(sys.executable, ["-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"])
    assert result.exit_code == 3
    assert result.stderr == "boom"
    assert not result.ok


def test_missing_binary() -> None:
    result = exec_file_no_throw("definitely-not-a-real-binary-xyz", ["--help"])
    assert result.exit_code == EXIT_NOT_FOUND
    assert result.stdout == ""


def test_cwd_and_env(tmp_path) -> None:
    script = "import os; print(os.getcwd()); print(os.environ['CONDUCTOR_TEST_VAR'])"
    result = exec_file_no_throw(
        sys.executable,
        ["-c", script],
        cwd=str(tmp_path),
        env={"CONDUCTOR_TEST_VAR": "42"},
    )
    cwd_line, env_line = result.stdout.splitlines()
    assert cwd_line == str(tmp_path.resolve())
    assert env_line == "42"


def test_timeout() -> None:
    result = exec_file_no_throw(sys.executable, ["-c", "import time; time.sleep(5)"], timeout_s=0.2)
    assert result.exit_code == EXIT_TIMEOUT


def test_missing_working_directory_is_not_reported_as_missing_binary(tmp_path) -> None:
    missing = tmp_path / "does-not-exist"
    result = exec_file_no_throw(sys.executable, ["-c", "print('x')"], cwd=str(missing))
    assert result.exit_code == 1
    assert result.exit_code != EXIT_NOT_FOUND
    assert str(missing) in result.stderr


def test_nul_byte_in_argument_is_reported() -> None:
    result = exec_file_no_throw(sys.executable, ["-c", "print('a\0b')"])
    assert result.exit_code == 1
    assert result.stderr
