"""GitHub MCP module: FastAPI service.

Serves the tool catalog two ways:

* ``POST /mcp``: JSON-RPC 2.0 (``initialize``, ``ping``, ``tools/list``,
  ``tools/call``), the surface MCP clients talk to. The caller's GitHub
  token travels in ``X-GITHUB-TOKEN``.
* ``POST /execute`` and ``GET /manifest``: the plain module protocol used by
  internal services, guarded by ``SERVICE_AUTH_TOKEN``.

When a request carries no token, the global ``GITHUB_PAT_FOR_PROJECT`` is
used instead.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog
from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from modules.github_mcp.client import GitHubClient
from modules.github_mcp.credentials import CredentialResolver
from modules.github_mcp.manifest import MANIFEST
from modules.github_mcp.registry import ToolRegistry, UnknownTool
from modules.github_mcp.tools import GitHubTools, build_registry
from shared.auth import get_github_token, github_token_from_headers, require_service_auth
from shared.config import get_settings
from shared.schemas.common import HealthResponse, ServerStatus
from shared.schemas.jsonrpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    JSONRPCRequest,
    JSONRPCResponse,
    request_id_of,
)
from shared.schemas.tools import ModuleManifest, ToolCall, ToolResult

settings = get_settings()

structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(settings.log_level.upper())
    ),
)

logger = structlog.get_logger()
app = FastAPI(title="GitHub MCP Server", version=settings.server_version)

DEFAULT_PROTOCOL_VERSION = "2025-03-26"

_client: GitHubClient | None = None
_registry: ToolRegistry | None = None


def get_registry() -> ToolRegistry:
    """Return the process-wide registry, building it on first use."""
    global _client, _registry
    if _registry is None:
        _client = GitHubClient(
            base_url=settings.github_api_base_url,
            user_agent=settings.github_user_agent,
            timeout=settings.github_request_timeout,
        )
        _registry = build_registry(GitHubTools(_client))
    return _registry


def get_resolver() -> CredentialResolver:
    return CredentialResolver(settings.github_pat_for_project)


@app.on_event("startup")
async def startup():
    registry = get_registry()
    logger.info(
        "github_mcp_ready",
        tools=len(registry),
        fallback_token=bool(settings.github_pat_for_project),
    )


@app.on_event("shutdown")
async def shutdown():
    if _client is not None:
        await _client.aclose()


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------


@app.get("/", response_model=ServerStatus)
async def status():
    return ServerStatus(name=settings.server_name, version=settings.server_version)


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok")


# ---------------------------------------------------------------------------
# Module protocol
# ---------------------------------------------------------------------------


@app.get("/manifest", response_model=ModuleManifest)
async def manifest(_=Depends(require_service_auth)):
    """Return the module manifest."""
    return MANIFEST


@app.post("/execute", response_model=ToolResult)
async def execute(
    call: ToolCall,
    _=Depends(require_service_auth),
    token: str | None = Depends(get_github_token),
    registry: ToolRegistry = Depends(get_registry),
    resolver: CredentialResolver = Depends(get_resolver),
):
    """Execute a tool call."""
    tool_name = call.tool_name.split(".")[-1]
    try:
        return await registry.dispatch(tool_name, call.arguments, resolver.resolve(token))
    except UnknownTool as e:
        raise HTTPException(status_code=404, detail=str(e))


# ---------------------------------------------------------------------------
# JSON-RPC
# ---------------------------------------------------------------------------


async def handle_jsonrpc(
    message: Any, registry: ToolRegistry, credential: str | None,
) -> JSONRPCResponse | None:
    """Answer one JSON-RPC message. Returns None for notifications."""
    try:
        request = JSONRPCRequest.model_validate(message)
    except ValidationError:
        return JSONRPCResponse.failure(request_id_of(message), INVALID_REQUEST, "Invalid Request")

    if request.is_notification:
        logger.debug("jsonrpc_notification", method=request.method)
        return None

    params = request.params or {}

    if request.method == "initialize":
        return JSONRPCResponse.success(request.id, {
            "protocolVersion": params.get("protocolVersion") or DEFAULT_PROTOCOL_VERSION,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": {"name": settings.server_name, "version": settings.server_version},
        })

    if request.method == "ping":
        return JSONRPCResponse.success(request.id, {})

    if request.method == "tools/list":
        return JSONRPCResponse.success(request.id, {"tools": [t.to_mcp() for t in registry.list()]})

    if request.method == "tools/call":
        name = params.get("name")
        arguments = params.get("arguments")
        if not isinstance(name, str) or not (arguments is None or isinstance(arguments, dict)):
            return JSONRPCResponse.failure(
                request.id, INVALID_PARAMS, "tools/call requires a string 'name' and an object 'arguments'",
            )
        try:
            result = await registry.dispatch(name, arguments or {}, credential)
        except UnknownTool as e:
            return JSONRPCResponse.failure(request.id, METHOD_NOT_FOUND, str(e))
        return JSONRPCResponse.success(request.id, result.to_mcp())

    return JSONRPCResponse.failure(request.id, METHOD_NOT_FOUND, f"Unknown method: {request.method}")


@app.post("/mcp")
async def mcp(
    request: Request,
    registry: ToolRegistry = Depends(get_registry),
    resolver: CredentialResolver = Depends(get_resolver),
):
    """JSON-RPC endpoint. Accepts a single message or a batch array."""
    try:
        payload = await request.json()
    except ValueError:
        return JSONResponse(JSONRPCResponse.failure(None, PARSE_ERROR, "Parse error").to_wire())

    credential = resolver.resolve(github_token_from_headers(request.headers, allow_authorization=True))

    try:
        if isinstance(payload, list):
            if not payload:
                return JSONResponse(JSONRPCResponse.failure(None, INVALID_REQUEST, "Empty batch").to_wire())
            responses = [await handle_jsonrpc(m, registry, credential) for m in payload]
            answered = [r.to_wire() for r in responses if r is not None]
            return JSONResponse(answered) if answered else Response(status_code=202)

        response = await handle_jsonrpc(payload, registry, credential)
    except Exception as e:
        logger.error("jsonrpc_internal_error", error=str(e), exc_info=True)
        return JSONResponse(
            JSONRPCResponse.failure(request_id_of(payload), INTERNAL_ERROR, "Internal error").to_wire()
        )

    if response is None:
        return Response(status_code=202)
    return JSONResponse(response.to_wire())
