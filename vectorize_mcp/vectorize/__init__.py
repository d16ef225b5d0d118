"""Vectorize schemas and remote API client."""

from vectorize_mcp.vectorize.client import CloudflareVectorizeClient, VectorizeAPI
from vectorize_mcp.vectorize.models import (
    CreateIndexParams,
    IndexDimensionConfig,
    IndexNameParams,
    IndexPresetConfig,
    ListIndexesParams,
    QueryVectorsParams,
    VectorBatchParams,
    VectorIdsParams,
)

__all__ = [
    "CloudflareVectorizeClient",
    "CreateIndexParams",
    "IndexDimensionConfig",
    "IndexNameParams",
    "IndexPresetConfig",
    "ListIndexesParams",
    "QueryVectorsParams",
    "VectorBatchParams",
    "VectorIdsParams",
    "VectorizeAPI",
]
