"""GitHub MCP tool implementations.

Every handler takes its validated argument model plus the resolved
credential and returns a ``ToolResult``. Remote failures become error
results; the relationship lookups (parent, sub-issues, issue id) turn a
404 into an informational message instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import quote, urlencode

import structlog

from modules.github_mcp import render
from modules.github_mcp.client import (
    GitHubClient,
    HttpError,
    NetworkError,
    NotFound,
    RemoteCallResult,
    Success,
    describe_failure,
)
from modules.github_mcp.manifest import MANIFEST
from modules.github_mcp.models import (
    AddSubIssuesArgs,
    GetIdOfIssueArgs,
    GetParentOfSubIssueArgs,
    GetPullRequestArgs,
    GetRepositoryInfoArgs,
    GetUserInfoArgs,
    ListRepositoryIssuesArgs,
    ListSubIssuesArgs,
    SearchRepositoriesArgs,
)
from modules.github_mcp.registry import ToolRegistry
from shared.schemas.tools import ToolResult

logger = structlog.get_logger()

# Tool name -> argument model. Handlers are the GitHubTools methods of the same name.
ARGUMENT_MODELS = {
    "get_repository_info": GetRepositoryInfoArgs,
    "list_repository_issues": ListRepositoryIssuesArgs,
    "get_pull_request": GetPullRequestArgs,
    "search_repositories": SearchRepositoriesArgs,
    "get_user_info": GetUserInfoArgs,
    "get_parent_of_sub_issue": GetParentOfSubIssueArgs,
    "list_sub_issues": ListSubIssuesArgs,
    "get_id_of_issue": GetIdOfIssueArgs,
    "add_sub_issues": AddSubIssuesArgs,
}


def _segment(value: str) -> str:
    return quote(value, safe="")


def _repo_path(owner: str, repo: str) -> str:
    return f"/repos/{_segment(owner)}/{_segment(repo)}"


def _query(params: dict) -> str:
    """Encode non-None params; every value is percent-encoded, ``/`` included."""
    return urlencode({k: v for k, v in params.items() if v is not None}, quote_via=quote)


def _failure(result: RemoteCallResult) -> ToolResult:
    return ToolResult.error(f"Error: {describe_failure(result)}")


def _unexpected(expected: str, payload: object) -> ToolResult:
    return ToolResult.error(
        f"Error: Network error: Malformed payload, expected {expected} but got {type(payload).__name__}"
    )


@dataclass
class BatchOutcome:
    """Per-item results of one ``add_sub_issues`` call, in input order."""

    successes: list[int] = field(default_factory=list)
    failures: list[tuple[int, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.successes) + len(self.failures)

    def record(self, sub_issue_id: int, result: RemoteCallResult) -> None:
        if isinstance(result, Success):
            self.successes.append(sub_issue_id)
        elif isinstance(result, NotFound):
            self.failures.append((sub_issue_id, f"404 Not Found - {result.body}"))
        elif isinstance(result, HttpError):
            self.failures.append((sub_issue_id, f"{result.status} {result.reason} - {result.body}"))
        else:
            self.failures.append((sub_issue_id, result.message))

    def summary(self, owner: str, repo: str, issue_number: int) -> str:
        text = (
            f"Batch operation completed: {len(self.successes)}/{self.total} sub-issues "
            f"added successfully to issue #{issue_number} in {owner}/{repo}"
        )
        if self.successes:
            lines = [f"✓ Successfully added sub-issue ID {i} to issue #{issue_number}" for i in self.successes]
            text += "\n\nSuccessful additions:\n" + "\n".join(lines)
        if self.failures:
            lines = [f"Sub-issue ID {i}: {reason}" for i, reason in self.failures]
            text += "\n\nErrors encountered:\n" + "\n".join(lines)
        return text


class GitHubTools:
    """Tool implementations that delegate to a GitHubClient."""

    def __init__(self, client: GitHubClient):
        self.client = client

    # ---- Repository ----

    async def get_repository_info(self, args: GetRepositoryInfoArgs, credential: str | None) -> ToolResult:
        result = await self.client.get(_repo_path(args.owner, args.repo), credential)
        if not isinstance(result, Success):
            return _failure(result)
        if not isinstance(result.payload, dict):
            return _unexpected("object", result.payload)
        return ToolResult.text(render.render_repository(result.payload))

    async def list_repository_issues(self, args: ListRepositoryIssuesArgs, credential: str | None) -> ToolResult:
        query = _query({"state": args.state, "per_page": args.limit})
        result = await self.client.get(f"{_repo_path(args.owner, args.repo)}/issues?{query}", credential)
        if not isinstance(result, Success):
            return _failure(result)
        issues = result.payload
        if not isinstance(issues, list) or not issues:
            return ToolResult.text(f"No {args.state} issues found in {args.owner}/{args.repo}")
        return ToolResult.text(render.render_issue_list(args.owner, args.repo, args.state, issues))

    # ---- Pull Requests ----

    async def get_pull_request(self, args: GetPullRequestArgs, credential: str | None) -> ToolResult:
        path = f"{_repo_path(args.owner, args.repo)}/pulls/{args.pull_number}"
        result = await self.client.get(path, credential)
        if not isinstance(result, Success):
            return _failure(result)
        if not isinstance(result.payload, dict):
            return _unexpected("object", result.payload)
        return ToolResult.text(render.render_pull_request(result.payload))

    # ---- Search / Users ----

    async def search_repositories(self, args: SearchRepositoriesArgs, credential: str | None) -> ToolResult:
        query = _query({"q": args.query, "per_page": args.limit, "sort": args.sort, "order": args.order})
        result = await self.client.get(f"/search/repositories?{query}", credential)
        if not isinstance(result, Success):
            return _failure(result)
        data = result.payload
        if not isinstance(data, dict):
            return _unexpected("object", data)
        if not data.get("items"):
            return ToolResult.text(f'No repositories found for query: "{args.query}"')
        return ToolResult.text(render.render_search_results(args.query, data))

    async def get_user_info(self, args: GetUserInfoArgs, credential: str | None) -> ToolResult:
        result = await self.client.get(f"/users/{_segment(args.username)}", credential)
        if not isinstance(result, Success):
            return _failure(result)
        if not isinstance(result.payload, dict):
            return _unexpected("object", result.payload)
        return ToolResult.text(render.render_user(result.payload))

    # ---- Sub-issues ----

    async def get_parent_of_sub_issue(self, args: GetParentOfSubIssueArgs, credential: str | None) -> ToolResult:
        path = f"{_repo_path(args.owner, args.repo)}/issues/{args.issue_number}/parent"
        result = await self.client.get(path, credential)
        if isinstance(result, NotFound):
            return ToolResult.text(
                f"Issue #{args.issue_number} in {args.owner}/{args.repo} "
                "does not have a parent issue or does not exist."
            )
        if not isinstance(result, Success):
            return _failure(result)
        if not isinstance(result.payload, dict):
            return _unexpected("object", result.payload)
        return ToolResult.text(render.render_parent_issue(args.issue_number, result.payload))

    async def list_sub_issues(self, args: ListSubIssuesArgs, credential: str | None) -> ToolResult:
        query = _query({
            "per_page": args.per_page,
            "page": args.page,
            "state": args.state,
            "labels": args.labels or None,
        })
        path = f"{_repo_path(args.owner, args.repo)}/issues/{args.issue_number}/sub_issues?{query}"
        result = await self.client.get(path, credential)
        if isinstance(result, NotFound):
            return ToolResult.text(
                f"Issue #{args.issue_number} in {args.owner}/{args.repo} does not exist or has no sub-issues."
            )
        if not isinstance(result, Success):
            return _failure(result)
        sub_issues = result.payload
        if not isinstance(sub_issues, list) or not sub_issues:
            return ToolResult.text(f"No sub-issues found for issue #{args.issue_number} in {args.owner}/{args.repo}.")
        return ToolResult.text(
            render.render_sub_issues(args.owner, args.repo, args.issue_number, sub_issues, args.per_page, args.page)
        )

    async def get_id_of_issue(self, args: GetIdOfIssueArgs, credential: str | None) -> ToolResult:
        result = await self.client.get(f"{_repo_path(args.owner, args.repo)}/issues/{args.issue_number}", credential)
        if isinstance(result, NotFound):
            return ToolResult.text(f"Issue #{args.issue_number} not found in {args.owner}/{args.repo}.")
        if not isinstance(result, Success):
            return _failure(result)
        if not isinstance(result.payload, dict):
            return _unexpected("object", result.payload)
        return ToolResult.text(
            f"Issue #{args.issue_number} in {args.owner}/{args.repo} has ID: {result.payload.get('id')}"
        )

    async def add_sub_issues(self, args: AddSubIssuesArgs, credential: str | None) -> ToolResult:
        """Attach each id in order, one POST at a time.

        A failed item never stops the loop and the result is never an error:
        partial failure is reported in the summary text.
        """
        if not args.sub_issue_ids:
            return ToolResult.text("Error: No sub-issue IDs provided. Please provide at least one sub-issue ID.")

        path = f"{_repo_path(args.owner, args.repo)}/issues/{args.issue_number}/sub_issues"
        outcome = BatchOutcome()
        for sub_issue_id in args.sub_issue_ids:
            body: dict = {"sub_issue_id": sub_issue_id}
            if args.replace_parent:
                body["replace_parent"] = True
            result = await self.client.post(path, body, credential)
            if not isinstance(result, Success):
                logger.warning(
                    "sub_issue_add_failed",
                    issue_number=args.issue_number,
                    sub_issue_id=sub_issue_id,
                    network=isinstance(result, NetworkError),
                )
            outcome.record(sub_issue_id, result)

        return ToolResult.text(outcome.summary(args.owner, args.repo, args.issue_number))


def build_registry(tools: GitHubTools) -> ToolRegistry:
    """Register every manifest tool, in manifest order."""
    registry = ToolRegistry()
    for definition in MANIFEST.tools:
        registry.register(definition, ARGUMENT_MODELS[definition.name], getattr(tools, definition.name))
    return registry
