"""Tests for shell.py module."""

import subprocess
from unittest.mock import patch

from php_site_tools import shell


class TestRunCommand:
    """Tests for run_command function."""

    def test_success_output(self):
        success, output = shell.run_command(["sh", "-c", "echo out; echo err >&2"])

        assert success is True
        assert "out" in output
        assert "err" in output

    def test_non_zero_exit(self):
        success, _ = shell.run_command(["sh", "-c", "exit 3"])
        assert success is False

    def test_missing_executable(self):
        success, output = shell.run_command(["definitely-not-a-real-binary-xyz"])
        assert success is False
        assert output

    def test_timeout(self):
        with patch.object(shell.subprocess, "run", side_effect=subprocess.TimeoutExpired("certbot", 1)):
            success, output = shell.run_command(["certbot"], timeout=1)

        assert success is False
        assert output == "Command timed out"
