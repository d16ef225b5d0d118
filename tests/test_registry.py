"""Tests for the tool registry."""

from unittest.mock import AsyncMock

import pytest

from vectorize_mcp.exceptions import ErrorCode, ToolNotFoundError, ValidationError
from vectorize_mcp.tools import (
    ToolContext,
    ToolRegistry,
    ToolResult,
    VectorizeTool,
    build_vectorize_registry,
)
from vectorize_mcp.vectorize.models import IndexNameParams


@pytest.fixture
def registry() -> ToolRegistry:
    return build_vectorize_registry()


class TestRegistration:
    """Tests for registering and looking up tools."""

    def test_all_tools_registered(self, registry: ToolRegistry) -> None:
        """Every Vectorize tool is registered exactly once."""
        assert len(registry) == 10
        assert sorted(registry.names()) == sorted(tool.value for tool in VectorizeTool)

    def test_descriptions_present(self, registry: ToolRegistry) -> None:
        """Every tool carries a description."""
        assert all(definition.description for definition in registry)

    def test_duplicate_name_rejected(self) -> None:
        """Registering the same name twice fails."""
        registry = ToolRegistry()
        handler = AsyncMock(return_value=ToolResult.notice("ok"))
        registry.register("tool", "A tool", IndexNameParams, handler)

        with pytest.raises(ValueError, match="already registered"):
            registry.register("tool", "Again", IndexNameParams, handler)

    def test_unknown_tool(self, registry: ToolRegistry) -> None:
        """Looking up an unknown name raises ToolNotFoundError."""
        with pytest.raises(ToolNotFoundError) as exc_info:
            registry.get("vectorize_index_rename")

        assert exc_info.value.code == ErrorCode.TOOL_NOT_FOUND
        assert exc_info.value.details["tool"] == "vectorize_index_rename"
        assert "vectorize_index_get" in exc_info.value.details["available"]

    def test_contains(self, registry: ToolRegistry) -> None:
        assert "vectorize_index_query" in registry
        assert "nope" not in registry


class TestInputSchema:
    """Tests for the published argument schemas."""

    def test_query_schema_uses_wire_names(self, registry: ToolRegistry) -> None:
        """Aliased query options are published under their wire names."""
        schema = registry.get(VectorizeTool.INDEX_QUERY.value).input_schema()

        properties = schema["properties"]
        assert {"name", "vector", "filter", "returnMetadata", "returnValues", "topK"} <= set(
            properties
        )
        assert "top_k" not in properties
        assert set(schema["required"]) == {"name", "vector"}

    def test_create_schema_requires_name_and_config(self, registry: ToolRegistry) -> None:
        schema = registry.get(VectorizeTool.INDEX_CREATE.value).input_schema()

        assert set(schema["required"]) == {"name", "config"}

    def test_name_pattern_published(self, registry: ToolRegistry) -> None:
        """Name bounds are visible to agents."""
        schema = registry.get(VectorizeTool.INDEX_GET.value).input_schema()

        name = schema["properties"]["name"]
        assert name["minLength"] == 1
        assert name["maxLength"] == 64
        assert name["pattern"] == "^[a-zA-Z0-9_-]+$"


class TestInvoke:
    """Tests for validation and dispatch."""

    @pytest.mark.asyncio
    async def test_invalid_name_never_reaches_api(
        self,
        registry: ToolRegistry,
        tool_context: ToolContext,
        vectorize_client: AsyncMock,
    ) -> None:
        """Validation fails before the remote client is touched."""
        with pytest.raises(ValidationError) as exc_info:
            await registry.invoke(
                VectorizeTool.INDEX_CREATE.value,
                {"name": "bad name!", "config": {"dimensions": 32, "metric": "cosine"}},
                tool_context,
            )

        assert exc_info.value.code == ErrorCode.VALIDATION_ERROR
        assert exc_info.value.details["tool"] == VectorizeTool.INDEX_CREATE.value
        assert "name" in exc_info.value.message
        assert vectorize_client.mock_calls == []

    @pytest.mark.asyncio
    async def test_empty_ndjson_rejected(
        self,
        registry: ToolRegistry,
        tool_context: ToolContext,
        vectorize_client: AsyncMock,
    ) -> None:
        """An empty batch never reaches the API."""
        with pytest.raises(ValidationError):
            await registry.invoke(
                VectorizeTool.INDEX_INSERT.value,
                {"name": "idx", "ndjson_body": ""},
                tool_context,
            )

        vectorize_client.insert_vectors.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_arguments(
        self,
        registry: ToolRegistry,
        tool_context: ToolContext,
    ) -> None:
        """No arguments at all fails for tools with required fields."""
        with pytest.raises(ValidationError, match="name"):
            await registry.invoke(VectorizeTool.INDEX_GET.value, None, tool_context)

    @pytest.mark.asyncio
    async def test_unknown_tool_invoke(
        self,
        registry: ToolRegistry,
        tool_context: ToolContext,
    ) -> None:
        with pytest.raises(ToolNotFoundError):
            await registry.invoke("vectorize_index_rename", {}, tool_context)

    @pytest.mark.asyncio
    async def test_returns_envelope(
        self,
        registry: ToolRegistry,
        tool_context: ToolContext,
        vectorize_client: AsyncMock,
    ) -> None:
        """A successful call is wrapped in a single text block."""
        vectorize_client.list_indexes.return_value = [{"name": "a"}]

        response = await registry.invoke(VectorizeTool.INDEX_LIST.value, {}, tool_context)

        dumped = response.model_dump()
        assert dumped == {"content": [{"type": "text", "text": '[{"name": "a"}]'}]}

    @pytest.mark.asyncio
    async def test_fault_is_error_envelope(
        self,
        registry: ToolRegistry,
        tool_context: ToolContext,
        vectorize_client: AsyncMock,
    ) -> None:
        """Remote faults stay inside the envelope."""
        vectorize_client.get_index_info.side_effect = RuntimeError("boom")

        response = await registry.invoke(
            VectorizeTool.INDEX_INFO.value, {"name": "idx"}, tool_context
        )

        assert len(response.content) == 1
        assert response.text == 'Error getting info for Vectorize Index "idx": boom'

    @pytest.mark.asyncio
    async def test_query_aliases_accepted(
        self,
        registry: ToolRegistry,
        tool_context: ToolContext,
        vectorize_client: AsyncMock,
    ) -> None:
        """Query options arrive under their camelCase names."""
        vectorize_client.query_vectors.return_value = {"matches": [{"id": "a"}]}

        await registry.invoke(
            VectorizeTool.INDEX_QUERY.value,
            {
                "name": "idx",
                "vector": [0.5],
                "filter": {"genre": {"$eq": "drama"}},
                "returnMetadata": "all",
                "returnValues": False,
                "topK": 3,
            },
            tool_context,
        )

        vectorize_client.query_vectors.assert_awaited_once_with(
            "acct-123",
            "idx",
            {
                "vector": [0.5],
                "filter": {"genre": {"$eq": "drama"}},
                "returnMetadata": "all",
                "returnValues": False,
                "topK": 3,
            },
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("tool", "arguments"),
        [
            (VectorizeTool.INDEX_QUERY, {"name": "idx", "vector": [0.1], "topK": "5"}),
            (VectorizeTool.INDEX_QUERY, {"name": "idx", "vector": ["0.1"]}),
            (VectorizeTool.INDEX_QUERY, {"name": "idx", "vector": [True]}),
            (VectorizeTool.INDEX_QUERY, {"name": "idx", "vector": [0.1], "returnValues": "yes"}),
            (VectorizeTool.INDEX_LIST, {"page": "2"}),
            (VectorizeTool.INDEX_LIST, {"per_page": True}),
        ],
    )
    async def test_no_type_coercion(
        self,
        tool: VectorizeTool,
        arguments: dict[str, object],
        registry: ToolRegistry,
        tool_context: ToolContext,
        vectorize_client: AsyncMock,
    ) -> None:
        """Strings and booleans are not converted into numbers or flags."""
        with pytest.raises(ValidationError):
            await registry.invoke(tool.value, arguments, tool_context)

        assert vectorize_client.mock_calls == []
