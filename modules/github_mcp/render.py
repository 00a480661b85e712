"""Plain-text renderers for GitHub API payloads.

Each function takes the decoded JSON payload and returns the text block sent
back to the caller. Missing keys degrade to placeholders instead of raising.
"""

from __future__ import annotations

from typing import Any

_BODY_PREVIEW_CHARS = 200


def _date(value: Any) -> str:
    """ISO timestamp to its date part."""
    if not value:
        return "Unknown"
    return str(value)[:10]


def _count(value: Any) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        return f"{value:,}"
    return "0" if value is None else str(value)


def _yes_no(value: Any) -> str:
    return "Yes" if value else "No"


def _login(obj: dict | None) -> str:
    return (obj or {}).get("login") or "unknown"


def _labels(item: dict) -> str:
    names = [label.get("name", "") for label in item.get("labels") or [] if isinstance(label, dict)]
    return ", ".join(n for n in names if n) or "None"


def _preview(body: str | None) -> str:
    if not body:
        return ""
    if len(body) > _BODY_PREVIEW_CHARS:
        return body[:_BODY_PREVIEW_CHARS] + "..."
    return body


# ---------------------------------------------------------------------------
# Repositories and users
# ---------------------------------------------------------------------------


def render_repository(data: dict) -> str:
    license_name = (data.get("license") or {}).get("name") or "No license"
    lines = [
        f"# {data.get('full_name', '')}",
        "",
        f"**Description:** {data.get('description') or 'No description available'}",
        "",
        "**Statistics:**",
        f"- ⭐ Stars: {_count(data.get('stargazers_count'))}",
        f"- 🍴 Forks: {_count(data.get('forks_count'))}",
        f"- 👀 Watchers: {_count(data.get('watchers_count'))}",
        f"- 📂 Size: {data.get('size', 0)} KB",
        f"- 🐛 Open Issues: {_count(data.get('open_issues_count'))}",
        "",
        "**Details:**",
        f"- Language: {data.get('language') or 'Not specified'}",
        f"- License: {license_name}",
        f"- Created: {_date(data.get('created_at'))}",
        f"- Updated: {_date(data.get('updated_at'))}",
        f"- Default Branch: {data.get('default_branch', '')}",
        f"- Private: {_yes_no(data.get('private'))}",
        f"- Fork: {_yes_no(data.get('fork'))}",
        "",
        "**URLs:**",
        f"- Repository: {data.get('html_url', '')}",
        f"- Clone URL: {data.get('clone_url', '')}",
    ]
    if data.get("homepage"):
        lines.append(f"- Homepage: {data['homepage']}")
    return "\n".join(lines)


def render_search_results(query: str, data: dict) -> str:
    sections = [f'# Search Results for "{query}" ({_count(data.get("total_count"))} total)']
    for repo in data.get("items") or []:
        sections.append("\n".join([
            f"## {repo.get('full_name', '')}",
            f"- **Description:** {repo.get('description') or 'No description'}",
            f"- **Language:** {repo.get('language') or 'Not specified'}",
            f"- **Stars:** ⭐ {_count(repo.get('stargazers_count'))}",
            f"- **Forks:** 🍴 {_count(repo.get('forks_count'))}",
            f"- **Updated:** {_date(repo.get('updated_at'))}",
            f"- **URL:** {repo.get('html_url', '')}",
        ]))
    return "\n\n".join(sections)


def render_user(user: dict) -> str:
    heading = f"# {user.get('login', '')}"
    if user.get("name"):
        heading += f" ({user['name']})"
    lines = [heading, "", f"**Type:** {user.get('type', 'User')}"]
    for label, key in (("Bio", "bio"), ("Company", "company"), ("Location", "location"),
                       ("Email", "email"), ("Website", "blog")):
        if user.get(key):
            lines.append(f"**{label}:** {user[key]}")
    lines += [
        "",
        "**Statistics:**",
        f"- 📚 Public Repositories: {_count(user.get('public_repos'))}",
        f"- 👥 Followers: {_count(user.get('followers'))}",
        f"- 👤 Following: {_count(user.get('following'))}",
    ]
    if user.get("public_gists") is not None:
        lines.append(f"- 📝 Public Gists: {_count(user['public_gists'])}")
    lines += [
        "",
        "**Account:**",
        f"- Created: {_date(user.get('created_at'))}",
        f"- Updated: {_date(user.get('updated_at'))}",
        f"- Profile: {user.get('html_url', '')}",
    ]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Issues and pull requests
# ---------------------------------------------------------------------------


def render_issue_list(owner: str, repo: str, state: str, issues: list[dict]) -> str:
    sections = [f"# Issues in {owner}/{repo} ({state})"]
    for issue in issues:
        lines = [
            f"## #{issue.get('number')}: {issue.get('title', '')}",
            f"- **State:** {issue.get('state', '')}",
            f"- **Author:** {_login(issue.get('user'))}",
            f"- **Created:** {_date(issue.get('created_at'))}",
            f"- **Labels:** {_labels(issue)}",
            f"- **URL:** {issue.get('html_url', '')}",
        ]
        preview = _preview(issue.get("body"))
        if preview:
            lines.append(f"- **Description:** {preview}")
        sections.append("\n".join(lines))
    return "\n\n".join(sections)


def render_pull_request(pr: dict) -> str:
    status = pr.get("state", "")
    if pr.get("merged"):
        status += " (Merged)"
    lines = [
        f"# Pull Request #{pr.get('number')}: {pr.get('title', '')}",
        "",
        f"**Status:** {status}",
        f"**Author:** {_login(pr.get('user'))}",
        f"**Created:** {_date(pr.get('created_at'))}",
    ]
    if pr.get("merged_at"):
        lines.append(f"**Merged:** {_date(pr['merged_at'])}")
    head = (pr.get("head") or {}).get("ref", "")
    base = (pr.get("base") or {}).get("ref", "")
    lines += [
        "",
        f"**Branch:** {head} → {base}",
        f"**Commits:** {pr.get('commits', 0)}",
        f"**Files Changed:** {pr.get('changed_files', 0)}",
        f"**Additions:** +{pr.get('additions', 0)}",
        f"**Deletions:** -{pr.get('deletions', 0)}",
        "",
        f"**Labels:** {_labels(pr)}",
        "",
        "**Description:**",
        pr.get("body") or "No description provided",
        "",
        "**URLs:**",
        f"- Pull Request: {pr.get('html_url', '')}",
        f"- Diff: {pr.get('diff_url', '')}",
        f"- Patch: {pr.get('patch_url', '')}",
    ]
    return "\n".join(lines)


def render_parent_issue(issue_number: int, parent: dict) -> str:
    return "\n".join([
        f"Parent Issue for #{issue_number}:",
        f"Issue #{parent.get('number')}: {parent.get('title', '')}",
        f"State: {parent.get('state', '')}",
        f"Author: {_login(parent.get('user'))}",
        f"Created: {parent.get('created_at', '')}",
        f"Updated: {parent.get('updated_at', '')}",
        f"URL: {parent.get('html_url', '')}",
        "",
        "Description:",
        parent.get("body") or "No description",
    ])


def render_sub_issues(
    owner: str, repo: str, issue_number: int, sub_issues: list[dict], per_page: int, page: int,
) -> str:
    listing = "\n".join(
        f"#{i.get('number')}: {i.get('title', '')} ({i.get('state', '')}) - {i.get('html_url', '')}"
        for i in sub_issues
    )
    # A full page means more may follow.
    paging = f" (showing page {page})" if len(sub_issues) == per_page else ""
    return f"Sub-issues for #{issue_number} in {owner}/{repo}{paging}:\n\n{listing}"
