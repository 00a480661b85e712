"""Test fixtures and mock data for GitHub MCP tests."""

from __future__ import annotations

from typing import Any, Callable, Union

import httpx

from modules.github_mcp.client import GitHubClient

REPO_RESPONSE = {
    "id": 1296269,
    "full_name": "octocat/hello-world",
    "description": "My first repository on GitHub!",
    "stargazers_count": 1500,
    "forks_count": 42,
    "watchers_count": 1500,
    "size": 108,
    "open_issues_count": 3,
    "language": "Python",
    "license": {"name": "MIT License"},
    "created_at": "2011-01-26T19:01:12Z",
    "updated_at": "2026-02-15T12:00:00Z",
    "default_branch": "main",
    "private": False,
    "fork": False,
    "html_url": "https://github.com/octocat/hello-world",
    "clone_url": "https://github.com/octocat/hello-world.git",
    "homepage": None,
}

ISSUES_RESPONSE = [
    {
        "id": 9001,
        "number": 7,
        "title": "Crash on startup",
        "state": "open",
        "user": {"login": "alice"},
        "created_at": "2026-02-01T09:30:00Z",
        "labels": [{"name": "bug"}, {"name": "p1"}],
        "html_url": "https://github.com/octocat/hello-world/issues/7",
        "body": "x" * 250,
    },
    {
        "id": 9002,
        "number": 8,
        "title": "Docs typo",
        "state": "open",
        "user": {"login": "bob"},
        "created_at": "2026-02-02T10:00:00Z",
        "labels": [],
        "html_url": "https://github.com/octocat/hello-world/issues/8",
        "body": None,
    },
]

PULL_REQUEST_RESPONSE = {
    "number": 12,
    "title": "Add retries",
    "state": "closed",
    "merged": True,
    "user": {"login": "carol"},
    "created_at": "2026-01-10T08:00:00Z",
    "merged_at": "2026-01-12T16:45:00Z",
    "head": {"ref": "feature/retries"},
    "base": {"ref": "main"},
    "commits": 3,
    "changed_files": 4,
    "additions": 120,
    "deletions": 8,
    "labels": [{"name": "enhancement"}],
    "body": "Adds retry logic.",
    "html_url": "https://github.com/octocat/hello-world/pull/12",
    "diff_url": "https://github.com/octocat/hello-world/pull/12.diff",
    "patch_url": "https://github.com/octocat/hello-world/pull/12.patch",
}

SEARCH_RESPONSE = {
    "total_count": 12345,
    "items": [
        {
            "full_name": "pytest-dev/pytest",
            "description": "The pytest framework",
            "language": "Python",
            "stargazers_count": 11000,
            "forks_count": 2500,
            "updated_at": "2026-02-14T00:00:00Z",
            "html_url": "https://github.com/pytest-dev/pytest",
        }
    ],
}

USER_RESPONSE = {
    "login": "octocat",
    "name": "The Octocat",
    "type": "User",
    "bio": None,
    "company": "@github",
    "location": "San Francisco",
    "email": None,
    "blog": "https://github.blog",
    "public_repos": 8,
    "followers": 12000,
    "following": 9,
    "public_gists": 8,
    "created_at": "2011-01-25T18:44:36Z",
    "updated_at": "2026-01-22T14:25:21Z",
    "html_url": "https://github.com/octocat",
}

PARENT_ISSUE_RESPONSE = {
    "id": 5001,
    "number": 1,
    "title": "Epic: onboarding",
    "state": "open",
    "user": {"login": "alice"},
    "created_at": "2026-01-01T00:00:00Z",
    "updated_at": "2026-01-05T00:00:00Z",
    "html_url": "https://github.com/octocat/hello-world/issues/1",
    "body": None,
}

SUB_ISSUES_RESPONSE = [
    {"number": 2, "title": "Write guide", "state": "open",
     "html_url": "https://github.com/octocat/hello-world/issues/2"},
    {"number": 3, "title": "Record video", "state": "closed",
     "html_url": "https://github.com/octocat/hello-world/issues/3"},
]

ISSUE_RESPONSE = {"id": 987654321, "number": 42, "title": "Track me"}

Route = Union[tuple[int, Any], Callable[[httpx.Request], httpx.Response]]


class FakeGitHub:
    """In-process stand-in for api.github.com.

    Routes map ``(method, path)`` to ``(status, payload)`` or to a callable
    taking the request. Unrouted requests get a 404. Every request is kept in
    ``requests`` for assertions.
    """

    def __init__(self, routes: dict[tuple[str, str], Route] | None = None):
        self.routes: dict[tuple[str, str], Route] = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if callable(route):
            return route(request)
        status, payload = route
        if isinstance(payload, str):
            return httpx.Response(status, text=payload)
        return httpx.Response(status, json=payload)

    def client(self, **kwargs) -> GitHubClient:
        transport = httpx.MockTransport(self.handler)
        return GitHubClient(http_client=httpx.AsyncClient(transport=transport), **kwargs)

    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]
