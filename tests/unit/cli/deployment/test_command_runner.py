"""Tests for the subprocess command runner."""

import subprocess
from unittest.mock import patch

from src.cli.deployment.shell_commands.runner import (
    COMMAND_NOT_FOUND,
    COMMAND_TIMED_OUT,
    CommandRunner,
)


@patch("src.cli.deployment.shell_commands.runner.subprocess.run")
def test_run_captures_output(mock_run) -> None:
    mock_run.return_value = subprocess.CompletedProcess(
        ["kubectl"], 0, stdout="ok\n", stderr=""
    )

    result = CommandRunner().run(["kubectl", "version"], timeout=5)

    assert result.success
    assert result.stdout == "ok\n"
    assert mock_run.call_args.kwargs["timeout"] == 5
    assert mock_run.call_args.kwargs["capture_output"] is True


@patch("src.cli.deployment.shell_commands.runner.subprocess.run")
def test_non_zero_exit_is_a_failure(mock_run) -> None:
    mock_run.return_value = subprocess.CompletedProcess(
        ["kubectl"], 1, stdout="", stderr="boom"
    )

    result = CommandRunner().run(["kubectl", "get", "nodes"])

    assert not result.success
    assert result.returncode == 1
    assert result.stderr == "boom"


@patch("src.cli.deployment.shell_commands.runner.subprocess.run")
def test_missing_executable(mock_run) -> None:
    mock_run.side_effect = FileNotFoundError("kubectl")

    result = CommandRunner().run(["kubectl", "get", "nodes"])

    assert not result.success
    assert result.returncode == COMMAND_NOT_FOUND
    assert "kubectl" in result.stderr


@patch("src.cli.deployment.shell_commands.runner.subprocess.run")
def test_timeout(mock_run) -> None:
    mock_run.side_effect = subprocess.TimeoutExpired(["kubectl"], 3)

    result = CommandRunner().run(["kubectl", "set", "image"], timeout=3)

    assert not result.success
    assert result.returncode == COMMAND_TIMED_OUT
    assert "timed out after 3s" in result.stderr
