"""Explicit registry mapping tool names to their definitions."""

import time
from collections.abc import Awaitable, Callable, Iterator
from typing import Any

import pydantic
from pydantic import BaseModel

from vectorize_mcp.exceptions import ToolNotFoundError, ValidationError
from vectorize_mcp.logging_config import get_logger
from vectorize_mcp.observability.metrics import track_tool_call
from vectorize_mcp.tools.context import ToolContext
from vectorize_mcp.tools.results import ToolResponse, ToolResult
from vectorize_mcp.vectorize.models import ToolParams

logger = get_logger(__name__)

ToolHandler = Callable[[Any, ToolContext], Awaitable[ToolResult]]


class ToolDefinition(BaseModel):
    """A registered tool.

    Attributes:
        name: Tool name exposed to agents.
        description: Human-readable description shown to agents.
        params_model: Model validating the tool arguments.
        handler: Coroutine function running the tool.
    """

    name: str
    description: str
    params_model: type[ToolParams]
    handler: ToolHandler

    def input_schema(self) -> dict[str, Any]:
        """JSON schema of the tool arguments."""
        return self.params_model.model_json_schema(by_alias=True)


class ToolRegistry:
    """Tools by name, built once at startup and shared by reference."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def register(
        self,
        name: str,
        description: str,
        params_model: type[ToolParams],
        handler: ToolHandler,
    ) -> ToolDefinition:
        """Register a tool.

        Raises:
            ValueError: If a tool with the same name is already registered.
        """
        if name in self._tools:
            raise ValueError(f"Tool already registered: {name}")

        definition = ToolDefinition(
            name=name,
            description=description,
            params_model=params_model,
            handler=handler,
        )
        self._tools[name] = definition
        return definition

    def get(self, name: str) -> ToolDefinition:
        """Look up a tool.

        Raises:
            ToolNotFoundError: If no tool has this name.
        """
        try:
            return self._tools[name]
        except KeyError:
            raise ToolNotFoundError(
                f"Unknown tool: {name}",
                details={"tool": name, "available": self.names()},
            ) from None

    def names(self) -> list[str]:
        return list(self._tools)

    def definitions(self) -> list[ToolDefinition]:
        return list(self._tools.values())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def validate(self, name: str, arguments: dict[str, Any] | None) -> ToolParams:
        """Validate raw arguments against the tool's parameter model.

        Raises:
            ToolNotFoundError: If no tool has this name.
            ValidationError: If the arguments break the tool's schema.
        """
        definition = self.get(name)
        try:
            return definition.params_model.model_validate(arguments or {})
        except pydantic.ValidationError as e:
            errors = e.errors(include_url=False, include_context=False)
            summary = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'arguments'}: {error['msg']}"
                for error in errors
            )
            raise ValidationError(
                f"Invalid arguments for tool {name}: {summary}",
                details={"tool": name, "errors": errors},
            ) from e

    async def invoke(
        self,
        name: str,
        arguments: dict[str, Any] | None,
        context: ToolContext,
    ) -> ToolResponse:
        """Validate arguments, run the tool and wrap its result.

        Validation happens before the handler runs, so invalid arguments
        never reach the remote API.

        Raises:
            ToolNotFoundError: If no tool has this name.
            ValidationError: If the arguments break the tool's schema.
        """
        definition = self.get(name)
        params = self.validate(name, arguments)

        start_time = time.perf_counter()
        result = await definition.handler(params, context)
        duration = time.perf_counter() - start_time

        track_tool_call(name, result.kind.value, duration)
        logger.info(
            f"Tool {name} finished: {result.kind.value}",
            extra={"tool": name},
        )
        return result.to_response()
