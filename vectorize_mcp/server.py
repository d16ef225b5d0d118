"""MCP stdio server exposing the tool registry.

Tools are listed and dispatched straight from the registry, so the MCP
surface and the HTTP surface always advertise the same tools.
"""

from collections.abc import Awaitable, Callable
from typing import Any

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from vectorize_mcp.config import Settings, get_settings
from vectorize_mcp.logging_config import get_logger, setup_logging
from vectorize_mcp.tools import (
    StaticAccountResolver,
    ToolContext,
    ToolRegistry,
    build_vectorize_registry,
)
from vectorize_mcp.vectorize.client import CloudflareVectorizeClient

logger = get_logger(__name__)

ListToolsHandler = Callable[[], Awaitable[list[types.Tool]]]
CallToolHandler = Callable[[str, dict[str, Any]], Awaitable[list[types.TextContent]]]


def make_handlers(
    registry: ToolRegistry,
    context: ToolContext,
) -> tuple[ListToolsHandler, CallToolHandler]:
    """Build the MCP ``tools/list`` and ``tools/call`` handlers.

    Validation and unknown-tool errors are raised; the MCP server reports
    them to the client as error results.
    """

    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=definition.name,
                description=definition.description,
                inputSchema=definition.input_schema(),
            )
            for definition in registry
        ]

    async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        response = await registry.invoke(name, arguments, context)
        return [types.TextContent(type="text", text=block.text) for block in response.content]

    return list_tools, call_tool


def create_server(
    registry: ToolRegistry,
    context: ToolContext,
    name: str = "vectorize-mcp",
) -> Server:
    """Create an MCP server serving the registry's tools.

    Args:
        registry: Tools to expose.
        context: Account resolver and Vectorize client shared by all calls.
        name: Server identity advertised to clients.

    Returns:
        Configured MCP server.
    """
    server: Server = Server(name)
    list_tools, call_tool = make_handlers(registry, context)
    server.list_tools()(list_tools)
    server.call_tool()(call_tool)
    return server


async def serve_stdio(settings: Settings | None = None) -> None:
    """Run the MCP server over stdin/stdout until the client disconnects."""
    settings = settings or get_settings()
    setup_logging(level=settings.log_level)

    client = CloudflareVectorizeClient(settings.cloudflare)
    context = ToolContext(
        account_resolver=StaticAccountResolver(settings.cloudflare.account_id),
        client=client,
    )
    registry = build_vectorize_registry()
    server = create_server(registry, context, name=settings.server_name)

    logger.info(f"Starting MCP server {settings.server_name} with {len(registry)} tools")
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await client.close()
        logger.info("MCP server stopped")
