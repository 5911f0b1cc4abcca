"""
Shared test configuration and fixtures for the GitHub REST bindings.

This module provides:
- A per-test timeout so a hung request fails fast
- Environment isolation so a developer's GITHUB_TOKEN or .env never leaks in
- A GitHubClient wired to respx-mocked transport
"""

import faulthandler
import os
import signal
import sys
import threading
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from github_rest_bindings.client import GitHubClient
from github_rest_bindings.config import get_settings

# Enable faulthandler for debugging hanging tests
faulthandler.enable(file=sys.stderr)

API_BASE = "https://api.github.com"

_SETTINGS_ENV_VARS = (
    "GITHUB_TOKEN",
    "GH_HOST",
    "GITHUB_API_URL",
    "HTTP_PER_PAGE",
    "HTTP_TIMEOUT",
    "HTTP_CONNECT_TIMEOUT",
)


def _get_timeout_seconds() -> int:
    """Get timeout configuration from environment variables."""
    try:
        return int(
            os.getenv(
                "PYTEST_PER_TEST_TIMEOUT",
                os.getenv("PYTEST_TIMEOUT", "5"),
            )
        )
    except ValueError:
        return 5


@pytest.fixture(autouse=True)
def per_test_timeout(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """
    Enforce a per-test timeout without external plugins.

    Uses SIGALRM on Unix main thread to fail fast after N seconds.
    Configure via PYTEST_PER_TEST_TIMEOUT environment variable.
    """
    timeout = _get_timeout_seconds()
    use_alarm = (
        timeout > 0
        and not request.config.pluginmanager.hasplugin("timeout")
        and hasattr(signal, "SIGALRM")
        and threading.current_thread() is threading.main_thread()
    )
    if not use_alarm:
        yield
        return

    def _on_timeout(signum: int, frame: Any) -> None:  # noqa: ARG001
        faulthandler.dump_traceback(file=sys.stderr)
        pytest.fail(f"Test timed out after {timeout}s", pytrace=False)

    old_handler = signal.getsignal(signal.SIGALRM)
    signal.signal(signal.SIGALRM, _on_timeout)
    signal.setitimer(signal.ITIMER_REAL, float(timeout))
    try:
        yield
    finally:
        signal.setitimer(signal.ITIMER_REAL, 0.0)
        signal.signal(signal.SIGALRM, old_handler)


@pytest.fixture(autouse=True)
def isolated_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Clear settings env vars and run from an empty directory (no .env)."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def github_token(monkeypatch: pytest.MonkeyPatch) -> str:
    """Fixture that provides a mock GitHub token via environment variable."""
    token = "test-token-12345"  # noqa: S105
    monkeypatch.setenv("GITHUB_TOKEN", token)
    return token


@pytest.fixture
def gh(respx_mock: Any) -> GitHubClient:  # noqa: ARG001
    """GitHubClient against api.github.com with respx intercepting requests."""
    return GitHubClient("test-token")


@pytest.fixture
def sub_issue_json() -> dict[str, Any]:
    """A sub-issue payload with nested users, labels and reactions."""
    return {
        "id": 2,
        "node_id": "I_kwDOA",
        "number": 2,
        "title": "sub issue",
        "state": "open",
        "state_reason": None,
        "locked": False,
        "body": "child work",
        "user": {"login": "octocat", "id": 1},
        "labels": [{"id": 10, "name": "bug", "color": "d73a4a"}],
        "assignees": [{"login": "hubot", "id": 3}],
        "comments": 4,
        "created_at": "2024-01-02T03:04:05Z",
        "updated_at": "2024-01-03T03:04:05Z",
        "reactions": {"total_count": 3, "+1": 2, "-1": 1, "heart": 0},
        "type": {"id": 7, "name": "Task"},
        "sub_issues_summary": {"total": 0, "completed": 0},
    }
