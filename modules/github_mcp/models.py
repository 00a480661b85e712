"""Pydantic models for tool argument validation.

Models are strict: a JSON string where an integer is expected is rejected
rather than coerced. Unknown keys are ignored.
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

IssueState = Literal["open", "closed", "all"]


class ToolArguments(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


class RepoArgs(ToolArguments):
    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)


class GetRepositoryInfoArgs(RepoArgs):
    pass


class ListRepositoryIssuesArgs(RepoArgs):
    state: IssueState = "open"
    limit: int = Field(default=10, ge=1, le=100, validation_alias=AliasChoices("limit", "per_page"))


class GetPullRequestArgs(RepoArgs):
    pull_number: int = Field(ge=1)


class SearchRepositoriesArgs(ToolArguments):
    query: str = Field(min_length=1)
    sort: Literal["stars", "forks", "help-wanted-issues", "updated"] | None = None
    order: Literal["asc", "desc"] = "desc"
    limit: int = Field(default=10, ge=1, le=100)


class GetUserInfoArgs(ToolArguments):
    username: str = Field(min_length=1)


class IssueArgs(RepoArgs):
    issue_number: int = Field(ge=1)


class GetParentOfSubIssueArgs(IssueArgs):
    pass


class ListSubIssuesArgs(IssueArgs):
    per_page: int = Field(default=30, ge=1, le=100)
    page: int = Field(default=1, ge=1)
    state: IssueState | None = None
    labels: str | None = None


class GetIdOfIssueArgs(IssueArgs):
    pass


class AddSubIssuesArgs(IssueArgs):
    # Internal issue ids, not display numbers. Emptiness is reported by the
    # handler as a soft message rather than rejected here.
    sub_issue_ids: list[int]
    replace_parent: bool = False
