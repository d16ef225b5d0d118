"""Vectorize index and vector tools.

Every tool runs the same protocol: resolve the active account, build the
remote request from validated arguments, call the Vectorize API exactly
once and map the result into a ToolResult. Exceptions never escape a tool;
they become ``Error ...`` results.
"""

import functools
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, TypeVar

from vectorize_mcp.logging_config import get_logger
from vectorize_mcp.tools.context import ToolContext
from vectorize_mcp.tools.registry import ToolRegistry
from vectorize_mcp.tools.results import ToolResult
from vectorize_mcp.vectorize.client import VectorizeAPI
from vectorize_mcp.vectorize.models import (
    CreateIndexParams,
    IndexNameParams,
    ListIndexesParams,
    QueryVectorsParams,
    ToolParams,
    VectorBatchParams,
    VectorIdsParams,
)

logger = get_logger(__name__)

P = TypeVar("P", bound=ToolParams)


class VectorizeTool(str, Enum):
    """Names of the Vectorize tools."""

    INDEX_CREATE = "vectorize_index_create"
    INDEX_LIST = "vectorize_index_list"
    INDEX_GET = "vectorize_index_get"
    INDEX_DELETE = "vectorize_index_delete"
    INDEX_INFO = "vectorize_index_info"
    INDEX_INSERT = "vectorize_index_insert"
    INDEX_UPSERT = "vectorize_index_upsert"
    INDEX_QUERY = "vectorize_index_query"
    INDEX_GET_BY_IDS = "vectorize_index_get_by_ids"
    INDEX_DELETE_BY_IDS = "vectorize_index_delete_by_ids"


def vectorize_operation(
    describe: Callable[[P], str],
) -> Callable[
    [Callable[[P, VectorizeAPI, str], Awaitable[ToolResult]]],
    Callable[[P, ToolContext], Awaitable[ToolResult]],
]:
    """Wrap a tool body in account resolution and failure handling.

    Args:
        describe: Builds the action phrase used in error text,
            e.g. ``creating Vectorize Index``.
    """

    def decorator(
        func: Callable[[P, VectorizeAPI, str], Awaitable[ToolResult]],
    ) -> Callable[[P, ToolContext], Awaitable[ToolResult]]:
        @functools.wraps(func)
        async def wrapper(params: P, context: ToolContext) -> ToolResult:
            try:
                account_id = await context.resolve_account_id()
                if not account_id:
                    logger.warning(
                        f"{func.__name__}: no active account",
                        extra={"operation": func.__name__},
                    )
                    return ToolResult.missing_account()
                return await func(params, context.client, account_id)
            except Exception as e:
                logger.error(
                    f"{func.__name__} failed: {e}",
                    exc_info=True,
                    extra={"operation": func.__name__},
                )
                return ToolResult.error(describe(params), e)

        return wrapper

    return decorator


@vectorize_operation(lambda params: "creating Vectorize Index")
async def create_index(
    params: CreateIndexParams,
    client: VectorizeAPI,
    account_id: str,
) -> ToolResult:
    result = await client.create_index(account_id, params.to_request())
    if not result:
        return ToolResult.notice("Index created successfully (no detailed response).")
    return ToolResult.success(result)


@vectorize_operation(lambda params: "listing Vectorize Indexes")
async def list_indexes(
    params: ListIndexesParams,
    client: VectorizeAPI,
    account_id: str,
) -> ToolResult:
    # Empty listings are returned as-is.
    result = await client.list_indexes(account_id, params.to_request())
    return ToolResult.success(result)


@vectorize_operation(lambda params: f'getting Vectorize Index "{params.name}"')
async def get_index(
    params: IndexNameParams,
    client: VectorizeAPI,
    account_id: str,
) -> ToolResult:
    result = await client.get_index(account_id, params.name)
    if result is None:
        return ToolResult.not_found(f'Vectorize Index "{params.name}" not found.')
    return ToolResult.success(result)


@vectorize_operation(lambda params: f'deleting Vectorize Index "{params.name}"')
async def delete_index(
    params: IndexNameParams,
    client: VectorizeAPI,
    account_id: str,
) -> ToolResult:
    await client.delete_index(account_id, params.name)
    return ToolResult.success(
        {
            "success": True,
            "message": f'Vectorize Index "{params.name}" deleted successfully.',
        }
    )


@vectorize_operation(lambda params: f'getting info for Vectorize Index "{params.name}"')
async def get_index_info(
    params: IndexNameParams,
    client: VectorizeAPI,
    account_id: str,
) -> ToolResult:
    result = await client.get_index_info(account_id, params.name)
    if result is None:
        return ToolResult.not_found(f'No info found for Vectorize Index "{params.name}".')
    return ToolResult.success(result)


@vectorize_operation(lambda params: f'inserting vectors into Vectorize Index "{params.name}"')
async def insert_vectors(
    params: VectorBatchParams,
    client: VectorizeAPI,
    account_id: str,
) -> ToolResult:
    # NDJSON is forwarded untouched; the API applies unparsable_behavior.
    result = await client.insert_vectors(
        account_id,
        params.name,
        params.ndjson_body,
        unparsable_behavior=params.unparsable_behavior,
    )
    if not result:
        return ToolResult.notice(
            f'Vectors inserted into Vectorize Index "{params.name}" (no detailed response).'
        )
    return ToolResult.success(result)


@vectorize_operation(lambda params: f'upserting vectors into Vectorize Index "{params.name}"')
async def upsert_vectors(
    params: VectorBatchParams,
    client: VectorizeAPI,
    account_id: str,
) -> ToolResult:
    result = await client.upsert_vectors(
        account_id,
        params.name,
        params.ndjson_body,
        unparsable_behavior=params.unparsable_behavior,
    )
    if not result:
        return ToolResult.notice(
            f'Vectors upserted into Vectorize Index "{params.name}" (no detailed response).'
        )
    return ToolResult.success(result)


@vectorize_operation(lambda params: f'querying Vectorize Index "{params.name}"')
async def query_vectors(
    params: QueryVectorsParams,
    client: VectorizeAPI,
    account_id: str,
) -> ToolResult:
    result = await client.query_vectors(account_id, params.name, params.to_request())
    if not _has_matches(result):
        return ToolResult.notice(f'No matching vectors found in Vectorize Index "{params.name}".')
    return ToolResult.success(result)


@vectorize_operation(lambda params: f'getting vectors by ID from Vectorize Index "{params.name}"')
async def get_vectors_by_ids(
    params: VectorIdsParams,
    client: VectorizeAPI,
    account_id: str,
) -> ToolResult:
    result = await client.get_vectors_by_ids(
        account_id, params.name, params.to_request(exclude={"name"})
    )
    if not result:
        return ToolResult.not_found(
            f'No vectors found in Vectorize Index "{params.name}" '
            f"for IDs: {', '.join(params.ids)}."
        )
    return ToolResult.success(result)


@vectorize_operation(lambda params: f'deleting vectors by ID from Vectorize Index "{params.name}"')
async def delete_vectors_by_ids(
    params: VectorIdsParams,
    client: VectorizeAPI,
    account_id: str,
) -> ToolResult:
    result = await client.delete_vectors_by_ids(
        account_id, params.name, params.to_request(exclude={"name"})
    )
    payload: dict[str, Any] = {
        "success": True,
        "message": (
            f"Deletion of {len(params.ids)} vector(s) from Vectorize Index "
            f'"{params.name}" accepted.'
        ),
    }
    if isinstance(result, dict) and result.get("mutationId"):
        payload["mutationId"] = result["mutationId"]
    return ToolResult.success(payload)


def _has_matches(result: Any) -> bool:
    if not result:
        return False
    if isinstance(result, dict):
        return bool(result.get("matches"))
    return True


def register_vectorize_tools(registry: ToolRegistry) -> ToolRegistry:
    """Register all Vectorize tools on a registry.

    Args:
        registry: Registry to populate.

    Returns:
        The same registry, for chaining.
    """
    registry.register(
        VectorizeTool.INDEX_CREATE.value,
        "Creates a new Vectorize Index. "
        "Use this when a user wants to set up a new vector database.",
        CreateIndexParams,
        create_index,
    )
    registry.register(
        VectorizeTool.INDEX_LIST.value,
        "Lists Vectorize Indexes in the current account, with optional pagination. "
        "Use this when a user asks to see their indexes.",
        ListIndexesParams,
        list_indexes,
    )
    registry.register(
        VectorizeTool.INDEX_GET.value,
        "Retrieves the details and configuration of a specific Vectorize Index by its name.",
        IndexNameParams,
        get_index,
    )
    registry.register(
        VectorizeTool.INDEX_DELETE.value,
        "Deletes a specific Vectorize Index by its name. This action is permanent.",
        IndexNameParams,
        delete_index,
    )
    registry.register(
        VectorizeTool.INDEX_INFO.value,
        "Gets operational information about a Vectorize Index, "
        "such as the number of vectors it contains.",
        IndexNameParams,
        get_index_info,
    )
    registry.register(
        VectorizeTool.INDEX_INSERT.value,
        "Inserts vectors into a Vectorize Index from newline-delimited JSON. "
        "Fails for vectors whose IDs already exist.",
        VectorBatchParams,
        insert_vectors,
    )
    registry.register(
        VectorizeTool.INDEX_UPSERT.value,
        "Inserts or replaces vectors in a Vectorize Index from newline-delimited JSON.",
        VectorBatchParams,
        upsert_vectors,
    )
    registry.register(
        VectorizeTool.INDEX_QUERY.value,
        "Finds the nearest neighbors of a vector in a Vectorize Index, "
        "optionally filtered by metadata.",
        QueryVectorsParams,
        query_vectors,
    )
    registry.register(
        VectorizeTool.INDEX_GET_BY_IDS.value,
        "Retrieves specific vectors from a Vectorize Index by their IDs.",
        VectorIdsParams,
        get_vectors_by_ids,
    )
    registry.register(
        VectorizeTool.INDEX_DELETE_BY_IDS.value,
        "Deletes specific vectors from a Vectorize Index by their IDs.",
        VectorIdsParams,
        delete_vectors_by_ids,
    )
    return registry


def build_vectorize_registry() -> ToolRegistry:
    """Build a registry holding every Vectorize tool."""
    return register_vectorize_tools(ToolRegistry())
