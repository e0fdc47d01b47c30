"""Tests for native command execution and executable resolution."""

import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from svcdaemon.daemon.commands import check_command, run_command
from svcdaemon.daemon.executable import resolve_executable_path
from svcdaemon.errors import CommandError


class TestRunCommand:
    """Test run_command()."""

    @patch("svcdaemon.daemon.commands.subprocess.run")
    def test_captures_output(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(["systemctl", "status"], 3, "inactive", "")

        result = run_command(["systemctl", "status"])

        assert result.returncode == 3
        mock_run.assert_called_once_with(
            ["systemctl", "status"], capture_output=True, text=True, check=False
        )

    @patch("svcdaemon.daemon.commands.subprocess.run", side_effect=FileNotFoundError(2, "No such file or directory"))
    def test_missing_binary(self, mock_run):
        with pytest.raises(CommandError, match="systemctl: No such file or directory"):
            run_command(["systemctl", "status"])


class TestCheckCommand:
    """Test check_command()."""

    def test_returns_stdout(self):
        runner = lambda cmd: subprocess.CompletedProcess(list(cmd), 0, "out\n", "")
        assert check_command(runner, ["x"]) == "out\n"

    def test_nonzero_prefers_stderr(self):
        runner = lambda cmd: subprocess.CompletedProcess(list(cmd), 4, "stdout text", " stderr text\n")

        with pytest.raises(CommandError) as exc_info:
            check_command(runner, ["x", "y"])

        assert exc_info.value.returncode == 4
        assert exc_info.value.output == "stderr text"
        assert exc_info.value.cmd == ["x", "y"]

    def test_nonzero_falls_back_to_stdout(self):
        runner = lambda cmd: subprocess.CompletedProcess(list(cmd), 1, "stdout text", "")

        with pytest.raises(CommandError, match="stdout text"):
            check_command(runner, ["x"])


class TestResolveExecutablePath:
    """Test resolve_executable_path()."""

    def test_prefers_executable_argv0(self, tmp_path, monkeypatch):
        script = tmp_path / "foo"
        script.write_text("#!/bin/sh\n")
        script.chmod(0o755)
        monkeypatch.setattr(sys, "argv", [str(script), "install"])

        assert resolve_executable_path() == str(script.resolve())

    def test_non_executable_argv0_uses_interpreter(self, tmp_path, monkeypatch):
        script = tmp_path / "foo.py"
        script.write_text("")
        script.chmod(0o644)
        monkeypatch.setattr(sys, "argv", [str(script)])

        assert resolve_executable_path() == str(Path(sys.executable).resolve())

    def test_empty_argv(self, monkeypatch):
        monkeypatch.setattr(sys, "argv", [])

        assert resolve_executable_path() == str(Path(sys.executable).resolve())
