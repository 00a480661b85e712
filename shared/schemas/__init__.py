"""Pydantic schemas for the GitHub MCP server."""

from shared.schemas.common import HealthResponse, ServerStatus
from shared.schemas.jsonrpc import JSONRPCError, JSONRPCRequest, JSONRPCResponse
from shared.schemas.tools import (
    ModuleManifest,
    TextContent,
    ToolCall,
    ToolDefinition,
    ToolParameter,
    ToolResult,
)

__all__ = [
    "HealthResponse",
    "JSONRPCError",
    "JSONRPCRequest",
    "JSONRPCResponse",
    "ModuleManifest",
    "ServerStatus",
    "TextContent",
    "ToolCall",
    "ToolDefinition",
    "ToolParameter",
    "ToolResult",
]
