"""Vectorize tool parameter schemas.

Field types carry the validation bounds of every tool argument. Parameter
models collapse absent and null optional values into ``None`` and drop them
when building the outgoing request, so the remote API never receives an
explicit null for an argument the caller left out.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool

# Index identity and description

IndexName = Annotated[
    str,
    Field(
        min_length=1,
        max_length=64,
        pattern=r"^[a-zA-Z0-9_-]+$",
        description=(
            "The name of the Vectorize Index. Alphanumeric characters, "
            "underscores and hyphens only."
        ),
    ),
]

IndexDescription = Annotated[
    str,
    Field(
        max_length=1024,
        description="An optional description for the Vectorize Index.",
    ),
]

# Index configuration

Dimensions = Annotated[
    int,
    Field(
        strict=True,
        ge=32,
        le=1536,
        description="The number of dimensions for the vectors in the index.",
    ),
]

Metric = Literal["cosine", "euclidean", "dot-product"]

Preset = Literal[
    "@cf/baai/bge-small-en-v1.5",
    "@cf/baai/bge-base-en-v1.5",
    "@cf/baai/bge-large-en-v1.5",
    "openai/text-embedding-ada-002",
    "cohere/embed-multilingual-v2.0",
]


class IndexDimensionConfig(BaseModel):
    """Configuration specifying the dimensions and distance metric."""

    model_config = ConfigDict(extra="forbid")

    dimensions: Dimensions
    metric: Metric = Field(
        description="The distance metric to use for similarity calculations.",
    )


class IndexPresetConfig(BaseModel):
    """Configuration specifying a pre-defined embedding model preset."""

    model_config = ConfigDict(extra="forbid")

    preset: Preset = Field(description="The embedding model preset.")


# Tried in order; the first variant that validates wins.
IndexConfig = Annotated[
    IndexDimensionConfig | IndexPresetConfig,
    Field(
        union_mode="left_to_right",
        description=(
            "The configuration for the Vectorize Index, specifying either "
            "dimensions/metric or a preset model."
        ),
    ),
]

# Vector payloads

VectorId = Annotated[str, Field(min_length=1)]

VectorIdList = Annotated[
    list[VectorId],
    Field(min_length=1, description="A list of vector identifiers."),
]

NdjsonBody = Annotated[
    str,
    Field(
        min_length=1,
        description=(
            "A string containing newline-delimited JSON objects representing "
            "vectors to insert or upsert."
        ),
    ),
]

UnparsableBehavior = Literal["error", "discard"]

VectorComponent = Annotated[float, Field(strict=True, allow_inf_nan=False)]

QueryVector = Annotated[
    list[VectorComponent],
    Field(min_length=1, description="The vector used to find nearest neighbors."),
]

ReturnMetadata = Literal["none", "indexed", "all"]

TopK = Annotated[
    int,
    Field(strict=True, gt=0, description="The number of nearest neighbors to retrieve."),
]

# Pagination

ListPage = Annotated[
    int,
    Field(strict=True, gt=0, description="Page number for pagination."),
]

ListPerPage = Annotated[
    int,
    Field(strict=True, gt=0, le=100, description="Number of indexes to return per page (max 100)."),
]

ListDirection = Literal["asc", "desc"]


class ToolParams(BaseModel):
    """Base class for tool argument models."""

    model_config = ConfigDict(populate_by_name=True)

    def to_request(self, exclude: set[str] | None = None) -> dict[str, Any]:
        """Dump the arguments as a remote request body, omitting unset values."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude=exclude)


class CreateIndexParams(ToolParams):
    """Arguments for creating an index."""

    name: IndexName
    config: IndexConfig
    description: IndexDescription | None = None


class ListIndexesParams(ToolParams):
    """Arguments for listing indexes."""

    page: ListPage | None = None
    per_page: ListPerPage | None = None
    order: str | None = Field(
        default=None,
        description='Field to order results by (e.g., "name", "created_on").',
    )
    direction: ListDirection | None = Field(
        default=None,
        description="Direction to order results (ascending or descending).",
    )


class IndexNameParams(ToolParams):
    """Arguments for tools addressing a single index by name."""

    name: IndexName


class VectorBatchParams(ToolParams):
    """Arguments for inserting or upserting an NDJSON vector batch."""

    name: IndexName
    ndjson_body: NdjsonBody
    unparsable_behavior: UnparsableBehavior | None = Field(
        default=None,
        description="Behavior for handling unparsable lines in NDJSON input.",
    )


class QueryVectorsParams(ToolParams):
    """Arguments for a nearest-neighbor query."""

    name: IndexName
    vector: QueryVector
    filter: dict[str, Any] | None = Field(
        default=None,
        description="A metadata filter expression (JSON object) used to limit search results.",
    )
    return_metadata: ReturnMetadata | None = Field(
        default=None,
        alias="returnMetadata",
        description=(
            "Specifies whether to return no metadata, only indexed metadata, "
            "or all metadata."
        ),
    )
    return_values: StrictBool | None = Field(
        default=None,
        alias="returnValues",
        description="Specifies whether to return the vector values themselves in the results.",
    )
    top_k: TopK | None = Field(default=None, alias="topK")

    def to_request(self, exclude: set[str] | None = None) -> dict[str, Any]:
        """Build the query body.

        The filter is forwarded verbatim, including any null values it holds.
        """
        body = super().to_request(exclude={"name", "filter"} | (exclude or set()))
        if self.filter is not None:
            body["filter"] = self.filter
        return body


class VectorIdsParams(ToolParams):
    """Arguments for tools addressing vectors by identifier."""

    name: IndexName
    ids: VectorIdList
