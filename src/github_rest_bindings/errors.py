"""Exceptions raised by the GitHub REST bindings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .client import Response


class GitHubError(Exception):
    """Base class for every error raised by this package."""


class RequestBuildError(GitHubError, ValueError):
    """A request could not be built locally; nothing was sent."""


class GitHubAPIError(GitHubError):
    """GitHub answered with a non-2xx status.

    Attributes:
        response: Response descriptor for the failed call
        message: ``message`` field of the GitHub error body, if any
        errors: ``errors`` list of the GitHub error body
        documentation_url: Link to the relevant API docs, if given
    """

    def __init__(
        self,
        response: Response,
        message: str | None = None,
        errors: list[Any] | None = None,
        documentation_url: str | None = None,
    ) -> None:
        self.response = response
        self.message = message
        self.errors = errors or []
        self.documentation_url = documentation_url
        super().__init__(self._describe())

    @property
    def status_code(self) -> int:
        return self.response.status_code

    def _describe(self) -> str:
        request = self.response.raw.request
        text = f"{request.method} {request.url}: {self.status_code}"
        if self.message:
            text += f" {self.message}"
        if self.errors:
            text += f" {self.errors}"
        return text


class ResponseDecodeError(GitHubAPIError):
    """GitHub answered 2xx but the body could not be decoded."""
