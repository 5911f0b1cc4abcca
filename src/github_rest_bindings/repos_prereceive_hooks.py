"""Repository pre-receive hook endpoints (GitHub Enterprise Server).

GitHub API docs:
https://docs.github.com/enterprise-server@3.17/rest/enterprise-admin/repo-pre-receive-hooks
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .github_api_constants import MEDIA_TYPE_PRE_RECEIVE_HOOKS_PREVIEW
from .models import ListOptions, PreReceiveHook
from .urls import add_options, repo_path

if TYPE_CHECKING:
    from .client import GitHubClient, Response


class RepositoriesService:
    """Pre-receive hook enforcement on a single repository."""

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    async def list_pre_receive_hooks(
        self,
        owner: str,
        repo: str,
        opts: ListOptions | Mapping[str, Any] | None = None,
    ) -> tuple[list[PreReceiveHook], Response]:
        """List all pre-receive hooks for the specified repository.

        ``GET /repos/{owner}/{repo}/pre-receive-hooks``
        """
        path = repo_path(owner, repo, "pre-receive-hooks")
        path = add_options(path, self._client.list_options(opts))
        request = self._client.new_request("GET", path)
        request.headers["Accept"] = MEDIA_TYPE_PRE_RECEIVE_HOOKS_PREVIEW

        hooks, response = await self._client.do(request, list[PreReceiveHook])
        return hooks or [], response

    async def get_pre_receive_hook(
        self, owner: str, repo: str, hook_id: int
    ) -> tuple[PreReceiveHook, Response]:
        """Return a single pre-receive hook.

        ``GET /repos/{owner}/{repo}/pre-receive-hooks/{hook_id}``
        """
        path = repo_path(owner, repo, "pre-receive-hooks", int(hook_id))
        request = self._client.new_request("GET", path)
        request.headers["Accept"] = MEDIA_TYPE_PRE_RECEIVE_HOOKS_PREVIEW

        hook, response = await self._client.do(request, PreReceiveHook)
        return hook or PreReceiveHook(), response

    async def update_pre_receive_hook(
        self, owner: str, repo: str, hook_id: int, hook: PreReceiveHook
    ) -> tuple[PreReceiveHook, Response]:
        """Update a pre-receive hook's enforcement on the repository.

        Only the fields set on ``hook`` are sent.

        ``PATCH /repos/{owner}/{repo}/pre-receive-hooks/{hook_id}``
        """
        path = repo_path(owner, repo, "pre-receive-hooks", int(hook_id))
        request = self._client.new_request("PATCH", path, hook)
        request.headers["Accept"] = MEDIA_TYPE_PRE_RECEIVE_HOOKS_PREVIEW

        updated, response = await self._client.do(request, PreReceiveHook)
        return updated or PreReceiveHook(), response

    async def delete_pre_receive_hook(
        self, owner: str, repo: str, hook_id: int
    ) -> Response:
        """Remove the repository's enforcement override for a hook.

        ``DELETE /repos/{owner}/{repo}/pre-receive-hooks/{hook_id}``
        """
        path = repo_path(owner, repo, "pre-receive-hooks", int(hook_id))
        request = self._client.new_request("DELETE", path)
        request.headers["Accept"] = MEDIA_TYPE_PRE_RECEIVE_HOOKS_PREVIEW

        _, response = await self._client.do(request)
        return response
