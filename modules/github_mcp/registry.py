"""Tool registry: the fixed catalog of tools and their dispatch.

Arguments are validated against each tool's pydantic model here, before any
handler code runs, so a malformed call never reaches the GitHub API.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import ValidationError

from modules.github_mcp.models import ToolArguments
from shared.schemas.tools import ToolDefinition, ToolResult

logger = structlog.get_logger()

Handler = Callable[[Any, str | None], Awaitable[ToolResult]]


class UnknownTool(LookupError):
    """Raised by ``dispatch`` for a tool name that was never registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


@dataclass(frozen=True)
class InvalidArguments:
    """A failed argument check: one ``(field, reason)`` pair per violation."""

    tool_name: str
    violations: tuple[tuple[str, str], ...]

    @classmethod
    def from_validation_error(cls, tool_name: str, exc: ValidationError) -> InvalidArguments:
        violations = []
        for err in exc.errors():
            field = ".".join(str(part) for part in err.get("loc", ())) or "arguments"
            violations.append((field, err.get("msg", "invalid value")))
        return cls(tool_name, tuple(violations))

    def to_result(self) -> ToolResult:
        detail = "; ".join(f"{field}: {reason}" for field, reason in self.violations)
        return ToolResult.error(f"Invalid arguments for {self.tool_name}: {detail}")


@dataclass(frozen=True)
class RegisteredTool:
    definition: ToolDefinition
    arguments_model: type[ToolArguments]
    handler: Handler

    def validate(self, arguments: Any) -> ToolArguments | InvalidArguments:
        if arguments is None:
            arguments = {}
        try:
            return self.arguments_model.model_validate(arguments)
        except ValidationError as e:
            return InvalidArguments.from_validation_error(self.definition.name, e)


class ToolRegistry:
    """Ordered name -> tool table. Registration order is listing order."""

    def __init__(self) -> None:
        self._tools: dict[str, RegisteredTool] = {}

    def register(
        self,
        definition: ToolDefinition,
        arguments_model: type[ToolArguments],
        handler: Handler,
    ) -> None:
        if definition.name in self._tools:
            raise ValueError(f"Tool already registered: {definition.name}")
        self._tools[definition.name] = RegisteredTool(definition, arguments_model, handler)

    def list(self) -> list[ToolDefinition]:
        return [tool.definition for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def get(self, name: str) -> RegisteredTool:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownTool(name) from None

    async def dispatch(self, name: str, arguments: Any, credential: str | None = None) -> ToolResult:
        """Validate ``arguments`` and run the named tool.

        Raises ``UnknownTool`` for an unregistered name. Everything else,
        including validation failures, comes back as a ``ToolResult``.
        """
        tool = self.get(name)
        validated = tool.validate(arguments)
        if isinstance(validated, InvalidArguments):
            logger.info("tool_invalid_arguments", tool=name, violations=[f for f, _ in validated.violations])
            return validated.to_result()

        logger.info("tool_call", tool=name, authenticated=credential is not None)
        try:
            return await tool.handler(validated, credential)
        except Exception as e:
            logger.error("tool_execution_error", tool=name, error=str(e), exc_info=True)
            return ToolResult.error(f"Error: {e}")
