"""Helpers for building API paths and query strings."""

from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, quote, urlencode

from pydantic import ValidationError

from .errors import RequestBuildError
from .models import ListOptions


def repo_path(owner: str, repo: str, *segments: object) -> str:
    """Build ``repos/{owner}/{repo}/...`` with owner and repo URL-quoted.

    Raises:
        RequestBuildError: If owner or repo is blank
    """
    if not owner or not owner.strip():
        raise RequestBuildError("owner must not be blank")
    if not repo or not repo.strip():
        raise RequestBuildError("repo must not be blank")
    parts = ["repos", quote(owner, safe=""), quote(repo, safe="")]
    parts.extend(str(segment) for segment in segments)
    return "/".join(parts)


def add_options(path: str, opts: ListOptions | Mapping[str, Any] | None) -> str:
    """Append pagination options to ``path`` as query parameters.

    Existing query parameters on ``path`` are kept; options override them.

    Raises:
        RequestBuildError: If the options do not validate
    """
    if opts is None:
        return path
    if not isinstance(opts, ListOptions):
        try:
            opts = ListOptions.model_validate(opts)
        except ValidationError as e:
            raise RequestBuildError(f"Invalid list options: {e}") from e

    query = opts.to_query()
    if not query:
        return path

    base, _, existing = path.partition("?")
    params = [
        (key, value)
        for key, value in parse_qsl(existing, keep_blank_values=True)
        if key not in query
    ]
    params.extend((key, str(value)) for key, value in query.items())
    return f"{base}?{urlencode(params)}"
