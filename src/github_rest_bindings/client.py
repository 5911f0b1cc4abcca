"""Async transport helper shared by every GitHub REST service.

``GitHubClient`` owns one ``httpx.AsyncClient``. Services build a request
with ``new_request``, adjust headers, and hand it to ``do`` which sends it
exactly once and decodes the JSON body into the requested type.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from urllib.parse import parse_qs, urlparse

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from .config import ClientSettings, get_settings
from .errors import GitHubAPIError, RequestBuildError, ResponseDecodeError
from .github_api_constants import (
    DEFAULT_API_BASE_URL,
    GITHUB_ACCEPT_HEADER,
    GITHUB_API_VERSION,
    GITHUB_USER_AGENT,
)
from .models import MAX_PER_PAGE, GitHubModel, ListOptions
from .repos_prereceive_hooks import RepositoriesService
from .sub_issues import SubIssuesService

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(timeout=30.0, connect=10.0)


@dataclass(frozen=True)
class Rate:
    """Rate limit state reported by GitHub on a response.

    Attributes:
        limit: Requests allowed per window
        remaining: Requests left in the current window
        used: Requests already made in the current window
        reset: When the window resets (UTC)
        resource: Rate limit bucket, e.g. "core"
    """

    limit: int | None = None
    remaining: int | None = None
    used: int | None = None
    reset: datetime | None = None
    resource: str | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> Rate:
        return cls(
            limit=_int_header(headers, "X-RateLimit-Limit"),
            remaining=_int_header(headers, "X-RateLimit-Remaining"),
            used=_int_header(headers, "X-RateLimit-Used"),
            reset=_epoch_header(headers, "X-RateLimit-Reset"),
            resource=headers.get("X-RateLimit-Resource"),
        )


def _int_header(headers: Mapping[str, str], name: str) -> int | None:
    value = headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _epoch_header(headers: Mapping[str, str], name: str) -> datetime | None:
    seconds = _int_header(headers, name)
    if seconds is None:
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _page_from_url(url: str | None) -> int | None:
    if not url:
        return None
    values = parse_qs(urlparse(url).query).get("page")
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError:
        return None


class Response:
    """Descriptor for a completed GitHub API call.

    Wraps the ``httpx.Response`` and exposes the page numbers advertised in
    the ``Link`` header plus the rate limit headers.
    """

    def __init__(self, raw: httpx.Response) -> None:
        self.raw = raw
        links = raw.links
        self.next_page = _page_from_url(links.get("next", {}).get("url"))
        self.prev_page = _page_from_url(links.get("prev", {}).get("url"))
        self.first_page = _page_from_url(links.get("first", {}).get("url"))
        self.last_page = _page_from_url(links.get("last", {}).get("url"))
        self.rate = Rate.from_headers(raw.headers)

    @property
    def status_code(self) -> int:
        return self.raw.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.raw.headers

    def __repr__(self) -> str:
        return (
            f"<Response [{self.status_code}] next_page={self.next_page} "
            f"last_page={self.last_page}>"
        )


class GitHubClient:
    """Client for the GitHub REST API.

    Use as an async context manager, or call ``aclose`` when done::

        async with GitHubClient(token) as gh:
            hooks, resp = await gh.repositories.list_pre_receive_hooks("o", "r")
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        per_page: int | None = None,
        timeout: httpx.Timeout | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not base_url.endswith("/"):
            raise RequestBuildError(
                f"base_url must have a trailing slash, but {base_url!r} does not"
            )
        if per_page is not None and not 1 <= per_page <= MAX_PER_PAGE:
            raise RequestBuildError(
                f"per_page must be between 1 and {MAX_PER_PAGE}, got {per_page}"
            )
        self.base_url = base_url
        self.per_page = per_page
        self._token = token
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout or DEFAULT_TIMEOUT, follow_redirects=True
        )

        self.repositories = RepositoriesService(self)
        self.sub_issues = SubIssuesService(self)

    @classmethod
    def from_settings(cls, settings: ClientSettings | None = None) -> GitHubClient:
        """Build a client from ``ClientSettings`` (environment by default)."""
        settings = settings or get_settings()
        timeout = httpx.Timeout(
            timeout=settings.http_timeout, connect=settings.http_connect_timeout
        )
        return cls(
            settings.token_value(),
            base_url=settings.api_base_url,
            per_page=settings.http_per_page,
            timeout=timeout,
        )

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http and not self._http.is_closed:
            await self._http.aclose()

    def list_options(
        self, opts: ListOptions | Mapping[str, Any] | None
    ) -> ListOptions | Mapping[str, Any] | None:
        """Fill in the client's default page size when the caller gave none."""
        if opts is None and self.per_page is not None:
            return ListOptions(per_page=self.per_page)
        return opts

    def new_request(
        self, method: str, path: str, body: BaseModel | Mapping[str, Any] | None = None
    ) -> httpx.Request:
        """Build a request for ``path`` relative to the API base URL.

        Args:
            method: HTTP verb
            path: Relative API path, e.g. ``repos/o/r/pre-receive-hooks``
            body: Optional model or mapping sent as the JSON body

        Raises:
            RequestBuildError: If path is absolute or the body is not JSON
        """
        if path.startswith("/") or "://" in path:
            raise RequestBuildError(f"path must be relative to base_url: {path!r}")

        headers: dict[str, str] = {
            "Accept": GITHUB_ACCEPT_HEADER,
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": GITHUB_USER_AGENT,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        payload: Any = None
        if body is not None:
            if isinstance(body, GitHubModel):
                payload = body.to_payload()
            elif isinstance(body, BaseModel):
                payload = body.model_dump(mode="json", by_alias=True, exclude_none=True)
            else:
                payload = dict(body)
            try:
                json.dumps(payload)
            except (TypeError, ValueError) as e:
                raise RequestBuildError(f"Request body is not JSON: {e}") from e

        return self._http.build_request(
            method, self.base_url + path, headers=headers, json=payload
        )

    async def do(
        self, request: httpx.Request, decode_as: Any = None
    ) -> tuple[Any, Response]:
        """Send ``request`` once and decode its JSON body.

        Args:
            request: Request built by ``new_request``
            decode_as: Type to decode the body into, e.g. ``PreReceiveHook``
                or ``list[SubIssue]``. The body is ignored when None.

        Returns:
            ``(payload, response)``. The payload is None for an empty body.

        Raises:
            GitHubAPIError: On any non-2xx response
            ResponseDecodeError: If a 2xx body does not decode
            httpx.RequestError: On transport failures, unchanged
        """
        logger.debug("%s %s", request.method, request.url)
        raw = await self._http.send(request)
        response = Response(raw)

        if not raw.is_success:
            raise self._api_error(response)

        if decode_as is None or not raw.content:
            return None, response

        try:
            data = raw.json()
        except ValueError as e:
            raise ResponseDecodeError(
                response, message=f"Invalid JSON in response body: {e}"
            ) from e
        if data is None:
            return None, response

        try:
            payload = TypeAdapter(decode_as).validate_python(data)
        except ValidationError as e:
            raise ResponseDecodeError(
                response, message=f"Unexpected response shape: {e}"
            ) from e
        return payload, response

    def _api_error(self, response: Response) -> GitHubAPIError:
        message: str | None = None
        errors: list[Any] | None = None
        documentation_url: str | None = None
        try:
            data = response.raw.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            message = data.get("message")
            errors = data.get("errors")
            documentation_url = data.get("documentation_url")
        elif response.raw.text:
            message = response.raw.text

        error = GitHubAPIError(
            response,
            message=message,
            errors=errors,
            documentation_url=documentation_url,
        )
        logger.warning("GitHub API error: %s", error)
        return error
