"""Tests for the process runner."""

import subprocess
import sys

import pytest

from repovol.cmd import CommandError, command_output, format_command, run_command, timed


def _time_lines(log_stream):
    return [line for line in log_stream.getvalue().splitlines() if line.startswith("TIME:")]


@pytest.mark.short
class TestRunCommand:
    def test_success_logs_one_timing_line(self, capture_logs):
        run_command([sys.executable, "-c", "pass"])

        lines = _time_lines(capture_logs)
        assert len(lines) == 1
        assert f"'{sys.executable} -c pass'" in lines[0]

    def test_runs_in_working_directory(self, tmp_path):
        out = command_output(
            [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert out.strip() == str(tmp_path.resolve())

    def test_path_arguments_are_stringified(self, tmp_path, capture_logs):
        run_command([sys.executable, "-c", "pass", tmp_path])
        assert str(tmp_path) in _time_lines(capture_logs)[0]

    def test_non_zero_exit_raises_command_error(self, capture_logs):
        args = [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]

        with pytest.raises(CommandError) as excinfo:
            run_command(args)

        error = excinfo.value
        assert isinstance(error, subprocess.CalledProcessError)
        assert error.returncode == 3
        assert error.cmd == args
        assert error.stderr == "boom"
        assert "boom" in str(error)

        assert len(_time_lines(capture_logs)) == 1
        assert "boom" in capture_logs.getvalue()

    def test_missing_executable_propagates_os_error(self, capture_logs):
        with pytest.raises(FileNotFoundError):
            run_command(["repovol-no-such-executable-xyz"])

        lines = _time_lines(capture_logs)
        assert len(lines) == 1
        assert "repovol-no-such-executable-xyz" in lines[0]

    def test_missing_working_directory_propagates_os_error(self, tmp_path):
        with pytest.raises(OSError):
            run_command([sys.executable, "-c", "pass"], cwd=tmp_path / "missing")


@pytest.mark.short
class TestCommandOutput:
    def test_returns_stdout_unmodified(self):
        out = command_output([sys.executable, "-c", "print('a'); print('b')"])
        assert out.splitlines() == ["a", "b"]

    def test_failure_keeps_captured_output(self):
        with pytest.raises(CommandError) as excinfo:
            command_output([sys.executable, "-c", "print('partial'); raise SystemExit(1)"])
        assert excinfo.value.output.strip() == "partial"


@pytest.mark.short
class TestCommandError:
    def test_str_without_stderr(self):
        error = CommandError(1, ["git", "status"], output="", stderr="")
        assert str(error) == str(subprocess.CalledProcessError(1, ["git", "status"]))

    def test_str_with_stderr(self):
        error = CommandError(128, ["git", "reset"], stderr="fatal: bad revision\n")
        assert str(error).endswith(": fatal: bad revision")


@pytest.mark.short
def test_timed_logs_even_on_exception(capture_logs):
    with pytest.raises(RuntimeError):
        with timed("copytree a b"):
            raise RuntimeError("failed")

    lines = _time_lines(capture_logs)
    assert len(lines) == 1
    assert lines[0].endswith("'copytree a b'")


@pytest.mark.short
def test_format_command():
    assert format_command(["git", "reset", "--hard", "abc"]) == "git reset --hard abc"
