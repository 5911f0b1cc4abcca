"""Tests for package metadata and version detection."""

import os
import subprocess
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[1] / "src"


class TestMainEntry:
    """Test the __main__.py entry point."""

    def test_main_module_execution(self) -> None:
        """Test that python -m github_rest_bindings --help works."""
        env = os.environ.copy()
        env["COVERAGE_PROCESS_START"] = ""  # Disable coverage subprocess hook
        env["PYTHONPATH"] = os.pathsep.join(
            filter(None, [str(SRC_DIR), env.get("PYTHONPATH")])
        )

        result = subprocess.run(  # noqa: S603
            [sys.executable, "-m", "github_rest_bindings", "--help"],
            capture_output=True,
            text=True,
            timeout=5,
            env=env,
        )
        assert result.returncode == 0
        assert "pre-receive hooks and sub-issues" in result.stdout


class TestVersionDetection:
    """Test that version is correctly detected from package metadata."""

    def test_version_is_set(self) -> None:
        import github_rest_bindings

        assert github_rest_bindings.__version__ != ""
        assert github_rest_bindings.__version__ is not None

    def test_user_agent_includes_version(self) -> None:
        from github_rest_bindings.github_api_constants import GITHUB_USER_AGENT

        assert GITHUB_USER_AGENT.startswith("github-rest-bindings/")
        parts = GITHUB_USER_AGENT.split("/")
        assert len(parts) == 2
        assert parts[1] != ""
