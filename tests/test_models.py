"""Tests for Pydantic models in models.py."""

import pytest
from pydantic import ValidationError

from github_rest_bindings.models import (
    AddSubIssueRequest,
    ListOptions,
    PreReceiveHook,
    Reactions,
    ReprioritizeSubIssueRequest,
    SubIssue,
)


class TestPreReceiveHook:
    """Tests for PreReceiveHook."""

    def test_all_fields_optional(self) -> None:
        hook = PreReceiveHook()
        assert hook.to_payload() == {}

    def test_decodes_configuration_url(self) -> None:
        hook = PreReceiveHook.model_validate(
            {"id": 1, "configuration_url": "https://example.com/hooks/1"}
        )
        assert hook.config_url == "https://example.com/hooks/1"

    def test_payload_uses_json_keys(self) -> None:
        hook = PreReceiveHook(name="n", config_url="u")
        assert hook.to_payload() == {"name": "n", "configuration_url": "u"}


class TestSubIssue:
    """Tests for SubIssue."""

    def test_ignores_unknown_fields(self) -> None:
        sub_issue = SubIssue.model_validate(
            {"id": 1, "sub_issues_summary": {"total": 0}, "performed_via_github_app": None}
        )
        assert sub_issue == SubIssue(id=1)

    def test_pull_request_links(self) -> None:
        sub_issue = SubIssue.model_validate(
            {"id": 1, "pull_request": {"url": "https://api.github.com/pulls/1"}}
        )
        assert sub_issue.is_pull_request
        assert sub_issue.pull_request_links.url == "https://api.github.com/pulls/1"

    def test_rejects_wrong_types(self) -> None:
        with pytest.raises(ValidationError):
            SubIssue.model_validate({"number": "not-a-number"})


def test_reactions_round_trip_plus_minus_keys() -> None:
    reactions = Reactions.model_validate({"+1": 4, "-1": 1})
    assert reactions.plus_one == 4
    assert reactions.to_payload() == {"+1": 4, "-1": 1}


class TestRequestBodies:
    """Write-only request bodies."""

    def test_add_request(self) -> None:
        assert AddSubIssueRequest(sub_issue_id=2).to_payload() == {"sub_issue_id": 2}

    def test_add_request_requires_id(self) -> None:
        with pytest.raises(ValidationError):
            AddSubIssueRequest()  # type: ignore[call-arg]

    def test_add_request_forbids_extra_fields(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            AddSubIssueRequest(sub_issue_id=2, replace_parent=True)  # type: ignore
        assert "Extra inputs are not permitted" in str(exc_info.value)

    def test_reprioritize_omits_unset_after_id(self) -> None:
        body = ReprioritizeSubIssueRequest(sub_issue_id=2)
        assert body.to_payload() == {"sub_issue_id": 2}

    def test_reprioritize_keeps_after_id(self) -> None:
        body = ReprioritizeSubIssueRequest(sub_issue_id=2, after_id=1)
        assert body.to_payload() == {"sub_issue_id": 2, "after_id": 1}

    def test_reprioritize_zero_after_id_means_head(self) -> None:
        body = ReprioritizeSubIssueRequest(sub_issue_id=2, after_id=0)
        assert body.to_payload() == {"sub_issue_id": 2}


class TestListOptions:
    def test_to_query_omits_unset(self) -> None:
        assert ListOptions(per_page=10).to_query() == {"per_page": 10}

    @pytest.mark.parametrize("per_page", [0, 101])
    def test_per_page_bounds(self, per_page: int) -> None:
        with pytest.raises(ValidationError):
            ListOptions(per_page=per_page)

    def test_validates_assignment(self) -> None:
        opts = ListOptions()
        with pytest.raises(ValidationError):
            opts.page = 0
