"""Pydantic models for GitHub REST payloads.

This module provides typed data-transfer models for:
- Pre-receive hooks
- Sub-issues and the issue-shaped records they embed
- Request bodies for sub-issue operations
- Pagination options for list endpoints

Read models accept partial JSON: every field is optional and unknown keys
are ignored. Request models forbid unknown fields. Serialize with
``to_payload`` so that unset fields are left out of request bodies.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GitHubModel(BaseModel):
    """Base for models decoded from GitHub responses."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body for this model, omitting unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class User(GitHubModel):
    login: str | None = None
    id: int | None = None
    node_id: str | None = None
    avatar_url: str | None = None
    html_url: str | None = None
    url: str | None = None
    type: str | None = None
    site_admin: bool | None = None
    name: str | None = None
    email: str | None = None


class Label(GitHubModel):
    id: int | None = None
    node_id: str | None = None
    url: str | None = None
    name: str | None = None
    color: str | None = None
    description: str | None = None
    default: bool | None = None


class Milestone(GitHubModel):
    id: int | None = None
    node_id: str | None = None
    number: int | None = None
    state: str | None = None
    title: str | None = None
    description: str | None = None
    creator: User | None = None
    open_issues: int | None = None
    closed_issues: int | None = None
    url: str | None = None
    html_url: str | None = None
    labels_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_at: datetime | None = None
    due_on: datetime | None = None


class PullRequestLinks(GitHubModel):
    """Links present when the issue is actually a pull request."""

    url: str | None = None
    html_url: str | None = None
    diff_url: str | None = None
    patch_url: str | None = None
    merged_at: datetime | None = None


class Repository(GitHubModel):
    id: int | None = None
    node_id: str | None = None
    name: str | None = None
    full_name: str | None = None
    owner: User | None = None
    private: bool | None = None
    fork: bool | None = None
    description: str | None = None
    default_branch: str | None = None
    url: str | None = None
    html_url: str | None = None


class Reactions(GitHubModel):
    """Reaction counts; ``+1`` and ``-1`` are exposed as plus_one/minus_one."""

    total_count: int | None = None
    plus_one: int | None = Field(default=None, alias="+1")
    minus_one: int | None = Field(default=None, alias="-1")
    laugh: int | None = None
    confused: int | None = None
    heart: int | None = None
    hooray: int | None = None
    rocket: int | None = None
    eyes: int | None = None
    url: str | None = None


class IssueType(GitHubModel):
    id: int | None = None
    node_id: str | None = None
    name: str | None = None
    description: str | None = None
    color: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Match(GitHubModel):
    text: str | None = None
    indices: list[int] | None = None


class TextMatch(GitHubModel):
    """Search text-match metadata; only set on search results."""

    object_url: str | None = None
    object_type: str | None = None
    property: str | None = None
    fragment: str | None = None
    matches: list[Match] | None = None


class PreReceiveHook(GitHubModel):
    """A pre-receive hook as enforced on a single repository.

    Attributes:
        id: Hook identifier
        name: Hook name
        enforcement: One of "enabled", "disabled" or "testing"
        config_url: URL of the hook's global configuration
            (JSON key ``configuration_url``)
    """

    id: int | None = None
    name: str | None = None
    enforcement: str | None = None
    config_url: str | None = Field(default=None, alias="configuration_url")


class SubIssue(GitHubModel):
    """An issue as returned by the sub-issue endpoints.

    ``state_reason`` is one of "completed", "not_planned" or "reopened".
    ``active_lock_reason`` is only set when the issue was locked with a
    reason: "off-topic", "too heated", "resolved" or "spam".
    """

    id: int | None = None
    number: int | None = None
    state: str | None = None
    state_reason: str | None = None
    locked: bool | None = None
    title: str | None = None
    body: str | None = None
    author_association: str | None = None
    user: User | None = None
    labels: list[Label] | None = None
    assignee: User | None = None
    comments: int | None = None
    closed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_by: User | None = None
    url: str | None = None
    html_url: str | None = None
    comments_url: str | None = None
    events_url: str | None = None
    labels_url: str | None = None
    repository_url: str | None = None
    milestone: Milestone | None = None
    pull_request_links: PullRequestLinks | None = Field(
        default=None, alias="pull_request"
    )
    repository: Repository | None = None
    reactions: Reactions | None = None
    assignees: list[User] | None = None
    node_id: str | None = None
    draft: bool | None = None
    text_matches: list[TextMatch] | None = None
    active_lock_reason: str | None = None
    type: IssueType | None = None

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request_links is not None


class AddSubIssueRequest(GitHubModel):
    """Body of a request attaching an existing issue as a sub-issue."""

    model_config = ConfigDict(extra="forbid")

    sub_issue_id: int


class ReprioritizeSubIssueRequest(GitHubModel):
    """Body of a request moving a sub-issue within its parent's list.

    Leaving ``after_id`` unset moves the sub-issue to the head of the list.
    """

    model_config = ConfigDict(extra="forbid")

    sub_issue_id: int
    after_id: int | None = None

    @field_validator("after_id")
    @classmethod
    def _zero_means_head(cls, value: int | None) -> int | None:
        # 0 is never a valid issue id
        return value or None


MAX_PER_PAGE = 100


class ListOptions(BaseModel):
    """Pagination options accepted by list endpoints."""

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    page: int | None = Field(default=None, ge=1)
    per_page: int | None = Field(default=None, ge=1, le=MAX_PER_PAGE)

    def to_query(self) -> dict[str, int]:
        return self.model_dump(exclude_none=True)
