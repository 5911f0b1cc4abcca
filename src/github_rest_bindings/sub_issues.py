"""Sub-issue endpoints.

GitHub API docs:
https://docs.github.com/en/rest/issues/sub-issues?apiVersion=2022-11-28
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .github_api_constants import MEDIA_TYPE_REACTIONS_PREVIEW
from .models import (
    AddSubIssueRequest,
    ListOptions,
    ReprioritizeSubIssueRequest,
    SubIssue,
)
from .urls import add_options, repo_path

if TYPE_CHECKING:
    from .client import GitHubClient, Response

logger = logging.getLogger(__name__)


class SubIssuesService:
    """Child issues linked beneath a parent issue.

    The order of sub-issues is kept by GitHub; ``reprioritize`` only relays
    the requested position.
    """

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def _path(self, owner: str, repo: str, issue_number: int, *rest: object) -> str:
        return repo_path(owner, repo, "issues", int(issue_number), "sub_issues", *rest)

    async def add(
        self, owner: str, repo: str, issue_number: int, sub_issue_id: int
    ) -> tuple[SubIssue | None, Response]:
        """Attach an existing issue as a sub-issue of ``issue_number``.

        ``POST /repos/{owner}/{repo}/issues/{issue_number}/sub_issues``

        Returns:
            The issue GitHub sends back (None for an empty body) and the
            response descriptor.
        """
        body = AddSubIssueRequest(sub_issue_id=sub_issue_id)
        request = self._client.new_request(
            "POST", self._path(owner, repo, issue_number), body
        )
        request.headers["Accept"] = MEDIA_TYPE_REACTIONS_PREVIEW

        return await self._client.do(request, SubIssue)

    async def remove(
        self, owner: str, repo: str, issue_number: int, sub_issue_id: int
    ) -> Response:
        """Detach a sub-issue from ``issue_number``.

        ``DELETE /repos/{owner}/{repo}/issues/{issue_number}/sub_issues/{sub_issue_id}``
        """
        path = self._path(owner, repo, issue_number, int(sub_issue_id))
        request = self._client.new_request("DELETE", path)
        request.headers["Accept"] = MEDIA_TYPE_REACTIONS_PREVIEW

        _, response = await self._client.do(request)
        return response

    async def reprioritize(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        sub_issue_id: int,
        after_id: int | None = None,
    ) -> tuple[SubIssue | None, Response]:
        """Move a sub-issue within the parent's priority order.

        Without ``after_id`` the sub-issue moves to the head of the list;
        otherwise it lands immediately after ``after_id``.

        ``POST /repos/{owner}/{repo}/issues/{issue_number}/sub_issues/priority``
        """
        body = ReprioritizeSubIssueRequest(sub_issue_id=sub_issue_id, after_id=after_id)
        request = self._client.new_request(
            "POST", self._path(owner, repo, issue_number, "priority"), body
        )
        request.headers["Accept"] = MEDIA_TYPE_REACTIONS_PREVIEW

        logger.debug(
            "Reprioritizing sub-issue %s of #%s after %s",
            sub_issue_id,
            issue_number,
            after_id if after_id is not None else "head",
        )
        return await self._client.do(request, SubIssue)

    async def list(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        opts: ListOptions | Mapping[str, Any] | None = None,
    ) -> tuple[list[SubIssue], Response]:
        """List the sub-issues of ``issue_number`` in priority order.

        ``GET /repos/{owner}/{repo}/issues/{issue_number}/sub_issues``
        """
        path = add_options(
            self._path(owner, repo, issue_number), self._client.list_options(opts)
        )
        request = self._client.new_request("GET", path)
        request.headers["Accept"] = MEDIA_TYPE_REACTIONS_PREVIEW

        sub_issues, response = await self._client.do(request, list[SubIssue])
        return sub_issues or [], response
