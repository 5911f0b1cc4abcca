"""Command-line entry point for the GitHub REST bindings."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import httpx
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from .client import GitHubClient
from .config import ClientSettings
from .errors import GitHubAPIError, RequestBuildError
from .models import MAX_PER_PAGE, PreReceiveHook

logger = logging.getLogger(__name__)

ENFORCEMENT_LEVELS = ("enabled", "disabled", "testing")


def _positive_int(value: str) -> int:
    try:
        ivalue = int(value)
    except ValueError as exc:  # pragma: no cover - argparse handles messaging
        raise argparse.ArgumentTypeError("must be an integer") from exc
    if ivalue <= 0:
        raise argparse.ArgumentTypeError("must be positive")
    return ivalue


def _page_size(value: str) -> int:
    ivalue = _positive_int(value)
    if ivalue > MAX_PER_PAGE:
        raise argparse.ArgumentTypeError(f"must be at most {MAX_PER_PAGE}")
    return ivalue


def _add_repo_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("owner", help="Repository owner or organization.")
    parser.add_argument("repo", help="Repository name.")


def _add_page_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--page", type=_positive_int, help="Page to fetch.")
    parser.add_argument(
        "--per-page", type=_page_size, help="Items per page (max 100)."
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="github-rest-bindings",
        description="Manage GitHub pre-receive hooks and sub-issues from the shell.",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        help="Optional path to a .env file to load before running.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log requests to stderr."
    )
    resources = parser.add_subparsers(dest="resource", required=True)

    hooks = resources.add_parser("hooks", help="Repository pre-receive hooks.")
    hook_cmds = hooks.add_subparsers(dest="command", required=True)

    hooks_list = hook_cmds.add_parser("list", help="List pre-receive hooks.")
    _add_repo_args(hooks_list)
    _add_page_args(hooks_list)

    for name, help_text in (
        ("get", "Show one pre-receive hook."),
        ("delete", "Remove the repository's enforcement override."),
    ):
        cmd = hook_cmds.add_parser(name, help=help_text)
        _add_repo_args(cmd)
        cmd.add_argument("hook_id", type=_positive_int)

    hooks_update = hook_cmds.add_parser("update", help="Set hook enforcement.")
    _add_repo_args(hooks_update)
    hooks_update.add_argument("hook_id", type=_positive_int)
    hooks_update.add_argument(
        "--enforcement", choices=ENFORCEMENT_LEVELS, required=True
    )

    subs = resources.add_parser("sub-issues", help="Sub-issues of an issue.")
    sub_cmds = subs.add_subparsers(dest="command", required=True)

    subs_list = sub_cmds.add_parser("list", help="List sub-issues in priority order.")
    _add_repo_args(subs_list)
    subs_list.add_argument("issue_number", type=_positive_int)
    _add_page_args(subs_list)

    for name, help_text in (
        ("add", "Attach an issue as a sub-issue."),
        ("remove", "Detach a sub-issue."),
        ("reprioritize", "Move a sub-issue within the list."),
    ):
        cmd = sub_cmds.add_parser(name, help=help_text)
        _add_repo_args(cmd)
        cmd.add_argument("issue_number", type=_positive_int)
        cmd.add_argument("sub_issue_id", type=_positive_int)
        if name == "reprioritize":
            cmd.add_argument(
                "--after-id",
                type=_positive_int,
                help="Place after this sub-issue; omit to move to the top.",
            )

    return parser.parse_args(argv)


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    return value


def _list_options(args: argparse.Namespace) -> dict[str, int] | None:
    opts = {
        key: value
        for key, value in (("page", args.page), ("per_page", args.per_page))
        if value is not None
    }
    return opts or None


async def _run(args: argparse.Namespace, client: GitHubClient) -> Any:
    if args.resource == "hooks":
        hooks = client.repositories
        if args.command == "list":
            result, _ = await hooks.list_pre_receive_hooks(
                args.owner, args.repo, _list_options(args)
            )
        elif args.command == "get":
            result, _ = await hooks.get_pre_receive_hook(
                args.owner, args.repo, args.hook_id
            )
        elif args.command == "update":
            result, _ = await hooks.update_pre_receive_hook(
                args.owner,
                args.repo,
                args.hook_id,
                PreReceiveHook(enforcement=args.enforcement),
            )
        else:
            await hooks.delete_pre_receive_hook(args.owner, args.repo, args.hook_id)
            result = None
        return result

    subs = client.sub_issues
    if args.command == "list":
        result, _ = await subs.list(
            args.owner, args.repo, args.issue_number, _list_options(args)
        )
    elif args.command == "add":
        result, _ = await subs.add(
            args.owner, args.repo, args.issue_number, args.sub_issue_id
        )
    elif args.command == "reprioritize":
        result, _ = await subs.reprioritize(
            args.owner,
            args.repo,
            args.issue_number,
            args.sub_issue_id,
            after_id=args.after_id,
        )
    else:
        await subs.remove(args.owner, args.repo, args.issue_number, args.sub_issue_id)
        result = None
    return result


async def _run_with_client(args: argparse.Namespace) -> Any:
    async with GitHubClient.from_settings(ClientSettings()) as client:
        return await _run(args, client)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    if args.env_file:
        load_dotenv(args.env_file, override=True)
    else:
        load_dotenv(override=False)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = asyncio.run(_run_with_client(args))
    except KeyboardInterrupt:
        return 130
    except ValidationError as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return 2
    except (GitHubAPIError, RequestBuildError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except httpx.RequestError as e:
        logger.debug("Transport failure", exc_info=True)
        print(f"error: request failed: {e}", file=sys.stderr)
        return 1

    if result is not None:
        print(json.dumps(_to_jsonable(result), indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
