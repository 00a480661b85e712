"""GitHub MCP manifest: tool definitions.

Repository, issue, pull request, user and sub-issue tools backed by the
GitHub REST API. Tool names are bare (no module prefix) because they are
advertised directly to MCP clients.
"""

from shared.schemas.tools import ModuleManifest, ToolDefinition, ToolParameter

# Common parameters reused across tools
_OWNER = ToolParameter(name="owner", type="string", description="Repository owner (username or organization).")
_REPO = ToolParameter(name="repo", type="string", description="Repository name.")
_STATE_VALUES = ["open", "closed", "all"]

MANIFEST = ModuleManifest(
    module_name="github_mcp",
    description="Read GitHub repositories, issues, pull requests and users, and manage sub-issue relationships.",
    tools=[
        # ---- Repository ----
        ToolDefinition(
            name="get_repository_info",
            description="Get detailed information about a GitHub repository including description, stars, forks, and other metadata.",
            parameters=[_OWNER, _REPO],
        ),
        ToolDefinition(
            name="list_repository_issues",
            description="List issues for a GitHub repository with optional filtering by state.",
            parameters=[
                _OWNER,
                _REPO,
                ToolParameter(name="state", type="string", description="Issue state filter.", enum=_STATE_VALUES, default="open", required=False),
                ToolParameter(name="limit", type="integer", description="Maximum number of issues to return (alias: per_page).", default=10, minimum=1, maximum=100, required=False),
            ],
        ),
        # ---- Pull Requests ----
        ToolDefinition(
            name="get_pull_request",
            description="Get detailed information about a specific pull request including status, files changed, and metadata.",
            parameters=[
                _OWNER,
                _REPO,
                ToolParameter(name="pull_number", type="integer", description="Pull request number.", minimum=1),
            ],
        ),
        # ---- Search / Users ----
        ToolDefinition(
            name="search_repositories",
            description="Search GitHub repositories by query with sorting options.",
            parameters=[
                ToolParameter(name="query", type="string", description="Search query for repositories."),
                ToolParameter(name="sort", type="string", description="Sort field. Best match when omitted.", enum=["stars", "forks", "help-wanted-issues", "updated"], required=False),
                ToolParameter(name="order", type="string", description="Sort order.", enum=["asc", "desc"], default="desc", required=False),
                ToolParameter(name="limit", type="integer", description="Maximum number of repositories to return.", default=10, minimum=1, maximum=100, required=False),
            ],
        ),
        ToolDefinition(
            name="get_user_info",
            description="Get information about a GitHub user or organization.",
            parameters=[
                ToolParameter(name="username", type="string", description="GitHub username or organization name."),
            ],
        ),
        # ---- Sub-issues ----
        ToolDefinition(
            name="get_parent_of_sub_issue",
            description="Get the parent issue of a sub-issue using GitHub Sub-Issues API.",
            parameters=[
                _OWNER,
                _REPO,
                ToolParameter(name="issue_number", type="integer", description="Sub-issue number to get parent for.", minimum=1),
            ],
        ),
        ToolDefinition(
            name="list_sub_issues",
            description="List sub-issues for a GitHub issue with pagination and filtering support.",
            parameters=[
                _OWNER,
                _REPO,
                ToolParameter(name="issue_number", type="integer", description="Parent issue number to list sub-issues for.", minimum=1),
                ToolParameter(name="per_page", type="integer", description="Number of results per page (max 100).", default=30, minimum=1, maximum=100, required=False),
                ToolParameter(name="page", type="integer", description="Page number of results to fetch.", default=1, minimum=1, required=False),
                ToolParameter(name="state", type="string", description="Filter sub-issues by state.", enum=_STATE_VALUES, required=False),
                ToolParameter(name="labels", type="string", description="Comma-separated list of label names to filter by.", required=False),
            ],
        ),
        ToolDefinition(
            name="get_id_of_issue",
            description="Get the internal GitHub issue ID from an issue number.",
            parameters=[
                _OWNER,
                _REPO,
                ToolParameter(name="issue_number", type="integer", description="Issue number to get the ID for.", minimum=1),
            ],
        ),
        ToolDefinition(
            name="add_sub_issues",
            description="Add multiple sub-issues to a GitHub issue using GitHub Sub-Issues API. Each ID is added independently; failures are reported per item.",
            parameters=[
                _OWNER,
                _REPO,
                ToolParameter(name="issue_number", type="integer", description="Parent issue number to add sub-issues to.", minimum=1),
                ToolParameter(name="sub_issue_ids", type="array", items="integer", description="Sub-issue IDs to add to the parent issue. These must be internal GitHub issue IDs, not issue numbers."),
                ToolParameter(name="replace_parent", type="boolean", description="When true, replaces the current parent issue for each sub-issue.", default=False, required=False),
            ],
        ),
    ],
)
