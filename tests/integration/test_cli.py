"""
Integration Tests for cli.py.

Runs the CLI as a subprocess from the project root. No network access:
only commands that never reach the provisioning API are exercised.
"""

import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.parent


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "cli.py", *args],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
    )


class TestCLI:
    """Integration tests for the command-line interface."""

    def test_help_returns_zero_exit_code(self):
        result = _run("--help")

        assert result.returncode == 0
        assert "servers" in result.stdout

    def test_version_prints_bare_version(self):
        from provisioner import __version__

        result = _run("system", "version")

        assert result.returncode == 0
        assert result.stdout == f"{__version__}\n"

    def test_unknown_command_is_usage_error(self):
        result = _run("servers", "reboot", "srv-1")

        assert result.returncode == 2

    def test_missing_server_id_is_usage_error(self):
        result = _run("servers", "info")

        assert result.returncode == 2
