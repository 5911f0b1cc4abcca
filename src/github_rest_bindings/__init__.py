"""Async bindings for GitHub's pre-receive hook and sub-issue REST endpoints."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _version

from .client import GitHubClient, Rate, Response
from .errors import GitHubAPIError, GitHubError, RequestBuildError, ResponseDecodeError
from .models import (
    AddSubIssueRequest,
    ListOptions,
    PreReceiveHook,
    ReprioritizeSubIssueRequest,
    SubIssue,
)

try:
    __version__ = _version("github-rest-bindings")
except PackageNotFoundError:  # dev/editable fallback
    __version__ = "0"

__all__ = [
    "AddSubIssueRequest",
    "GitHubAPIError",
    "GitHubClient",
    "GitHubError",
    "ListOptions",
    "PreReceiveHook",
    "Rate",
    "ReprioritizeSubIssueRequest",
    "RequestBuildError",
    "Response",
    "ResponseDecodeError",
    "SubIssue",
    "__version__",
]
