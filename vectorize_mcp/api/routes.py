"""API routes for listing and invoking tools over HTTP."""

from typing import Any

from fastapi import APIRouter, Body, Header, Request
from pydantic import BaseModel, Field

from vectorize_mcp.tools import StaticAccountResolver, ToolContext, ToolRegistry, ToolResponse
from vectorize_mcp.vectorize.client import VectorizeAPI

router = APIRouter(prefix="/api/v1", tags=["Tools"])


class ToolInfo(BaseModel):
    """Tool listing entry."""

    name: str = Field(description="Tool name")
    description: str = Field(description="What the tool does")
    input_schema: dict[str, Any] = Field(description="JSON schema of the arguments")


def _registry(request: Request) -> ToolRegistry:
    return request.app.state.registry


def _client(request: Request) -> VectorizeAPI:
    return request.app.state.vectorize_client


@router.get("/tools", response_model=list[ToolInfo])
async def list_tools_endpoint(request: Request) -> list[ToolInfo]:
    """List the registered tools with their argument schemas."""
    return [
        ToolInfo(
            name=definition.name,
            description=definition.description,
            input_schema=definition.input_schema(),
        )
        for definition in _registry(request)
    ]


@router.post("/tools/{name}", response_model=ToolResponse)
async def invoke_tool_endpoint(
    name: str,
    request: Request,
    arguments: dict[str, Any] | None = Body(default=None),
    x_account_id: str | None = Header(default=None),
) -> ToolResponse:
    """Invoke a tool.

    The active account is taken from the ``X-Account-Id`` header, falling
    back to the configured default account. Tool failures come back as a
    200 response whose text starts with ``Error``; only invalid arguments
    and unknown tools produce HTTP errors.
    """
    account_id = x_account_id or request.app.state.settings.cloudflare.account_id
    context = ToolContext(
        account_resolver=StaticAccountResolver(account_id),
        client=_client(request),
    )
    return await _registry(request).invoke(name, arguments, context)
