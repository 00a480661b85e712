"""Command-line entry points for the GitHub MCP server."""

from __future__ import annotations

import asyncio
import json

import click

from shared.config import get_settings


def run_async(coro):
    """Run an async function in a new event loop."""
    return asyncio.run(coro)


@click.group()
def cli():
    """GitHub MCP server administration CLI."""
    pass


@cli.command()
@click.option("--host", default=None, help="Bind address (defaults to HOST).")
@click.option("--port", default=None, type=int, help="Port (defaults to PORT).")
def serve(host, port):
    """Run the HTTP server (JSON-RPC on /mcp)."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "modules.github_mcp.main:app",
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level,
    )


@cli.command("tools")
def list_tools():
    """List the tools the server exposes."""
    from modules.github_mcp.manifest import MANIFEST

    for tool in MANIFEST.tools:
        params = ", ".join(p.name if p.required else f"[{p.name}]" for p in tool.parameters)
        click.echo(f"{tool.name}({params})")
        click.echo(f"    {tool.description}")


@cli.command()
@click.argument("tool_name")
@click.option("--args", "raw_args", default="{}", help="Tool arguments as a JSON object.")
@click.option("--token", default=None, envvar="GITHUB_TOKEN", help="GitHub token for this call.")
def call(tool_name, raw_args, token):
    """Invoke one tool against the live GitHub API and print the result."""
    from modules.github_mcp.client import GitHubClient
    from modules.github_mcp.credentials import CredentialResolver
    from modules.github_mcp.registry import UnknownTool
    from modules.github_mcp.tools import GitHubTools, build_registry

    try:
        arguments = json.loads(raw_args)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--args")

    settings = get_settings()
    resolver = CredentialResolver(settings.github_pat_for_project)

    async def _run():
        client = GitHubClient(
            base_url=settings.github_api_base_url,
            user_agent=settings.github_user_agent,
            timeout=settings.github_request_timeout,
        )
        try:
            registry = build_registry(GitHubTools(client))
            return await registry.dispatch(tool_name, arguments, resolver.resolve(token))
        finally:
            await client.aclose()

    try:
        result = run_async(_run())
    except UnknownTool as e:
        raise click.ClickException(str(e))

    click.echo(result.joined_text)
    if result.is_error:
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
