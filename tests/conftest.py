"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr

from vectorize_mcp.api.app import create_app
from vectorize_mcp.config import CloudflareSettings, Settings
from vectorize_mcp.tools import StaticAccountResolver, ToolContext
from vectorize_mcp.vectorize.client import VectorizeAPI

ACCOUNT_ID = "acct-123"


@pytest.fixture
def settings() -> Settings:
    """Settings with a configured API token and default account."""
    return Settings(
        cloudflare=CloudflareSettings(
            api_base_url="https://api.test/client/v4",
            api_token=SecretStr("test-token"),
            account_id="acct-default",
        )
    )


@pytest.fixture
def vectorize_client() -> AsyncMock:
    """Call-recording stand-in for the remote Vectorize API."""
    return AsyncMock(spec=VectorizeAPI)


@pytest.fixture
def tool_context(vectorize_client: AsyncMock) -> ToolContext:
    """Context with an active account."""
    return ToolContext(
        account_resolver=StaticAccountResolver(ACCOUNT_ID),
        client=vectorize_client,
    )


@pytest.fixture
def no_account_context(vectorize_client: AsyncMock) -> ToolContext:
    """Context whose session has no active account."""
    return ToolContext(
        account_resolver=StaticAccountResolver(None),
        client=vectorize_client,
    )


@pytest.fixture
async def client(
    settings: Settings,
    vectorize_client: AsyncMock,
) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client for FastAPI app.

    Yields:
        AsyncClient configured for testing.
    """
    app = create_app(settings=settings, client=vectorize_client)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
