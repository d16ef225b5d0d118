"""Agent tools: registry, results and the Vectorize operations."""

from vectorize_mcp.tools.context import AccountResolver, StaticAccountResolver, ToolContext
from vectorize_mcp.tools.registry import ToolDefinition, ToolRegistry
from vectorize_mcp.tools.results import (
    MISSING_ACCOUNT_MESSAGE,
    ToolResponse,
    ToolResult,
    ToolResultKind,
)
from vectorize_mcp.tools.vectorize import (
    VectorizeTool,
    build_vectorize_registry,
    register_vectorize_tools,
)

__all__ = [
    "MISSING_ACCOUNT_MESSAGE",
    "AccountResolver",
    "StaticAccountResolver",
    "ToolContext",
    "ToolDefinition",
    "ToolRegistry",
    "ToolResponse",
    "ToolResult",
    "ToolResultKind",
    "VectorizeTool",
    "build_vectorize_registry",
    "register_vectorize_tools",
]
