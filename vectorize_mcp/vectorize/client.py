"""Vectorize API interface and Cloudflare REST implementation."""

import time
from abc import ABC, abstractmethod
from typing import Any

import httpx

from vectorize_mcp.config import CloudflareSettings, get_settings
from vectorize_mcp.exceptions import ConfigurationError, ErrorCode, VectorizeAPIError
from vectorize_mcp.logging_config import get_logger
from vectorize_mcp.observability.metrics import track_api_request

logger = get_logger(__name__)


class VectorizeAPI(ABC):
    """Abstract base class for the remote Vectorize API.

    Every operation is scoped to one account. Results are returned as the
    decoded ``result`` member of the API response.
    """

    @abstractmethod
    async def create_index(self, account_id: str, body: dict[str, Any]) -> Any:
        """Create an index.

        Args:
            account_id: Account owning the index.
            body: ``name``, ``config`` and optional ``description``.

        Returns:
            The created index description.

        Raises:
            VectorizeAPIError: If the request fails.
        """
        ...

    @abstractmethod
    async def list_indexes(self, account_id: str, query: dict[str, Any]) -> Any:
        """List indexes with optional pagination and ordering query parameters."""
        ...

    @abstractmethod
    async def get_index(self, account_id: str, name: str) -> Any | None:
        """Get an index by name.

        Returns:
            The index description, or None if the index does not exist.
        """
        ...

    @abstractmethod
    async def delete_index(self, account_id: str, name: str) -> None:
        """Delete an index by name."""
        ...

    @abstractmethod
    async def get_index_info(self, account_id: str, name: str) -> Any | None:
        """Get operational info for an index.

        Returns:
            Index info (vector count, last mutation), or None if the index
            does not exist.
        """
        ...

    @abstractmethod
    async def insert_vectors(
        self,
        account_id: str,
        name: str,
        body: str,
        unparsable_behavior: str | None = None,
    ) -> Any:
        """Insert an NDJSON batch of vectors.

        Args:
            account_id: Account owning the index.
            name: Index name.
            body: NDJSON payload, forwarded verbatim.
            unparsable_behavior: ``error`` or ``discard`` for malformed lines.

        Returns:
            The mutation descriptor.
        """
        ...

    @abstractmethod
    async def upsert_vectors(
        self,
        account_id: str,
        name: str,
        body: str,
        unparsable_behavior: str | None = None,
    ) -> Any:
        """Upsert an NDJSON batch of vectors."""
        ...

    @abstractmethod
    async def query_vectors(
        self,
        account_id: str,
        name: str,
        body: dict[str, Any],
    ) -> Any:
        """Run a nearest-neighbor query."""
        ...

    @abstractmethod
    async def get_vectors_by_ids(
        self,
        account_id: str,
        name: str,
        body: dict[str, Any],
    ) -> Any:
        """Fetch vectors by identifier."""
        ...

    @abstractmethod
    async def delete_vectors_by_ids(
        self,
        account_id: str,
        name: str,
        body: dict[str, Any],
    ) -> Any:
        """Delete vectors by identifier."""
        ...


class CloudflareVectorizeClient(VectorizeAPI):
    """Vectorize client for the Cloudflare v2 REST API."""

    NDJSON_CONTENT_TYPE = "application/x-ndjson"

    def __init__(
        self,
        settings: CloudflareSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Cloudflare client.

        Args:
            settings: Cloudflare configuration.
            client: HTTP client (for testing).
        """
        self._settings = settings or get_settings().cloudflare
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _index_url(self, account_id: str, path: str = "") -> str:
        base_url = self._settings.api_base_url.rstrip("/")
        return f"{base_url}/accounts/{account_id}/vectorize/v2/indexes{path}"

    def _auth_headers(self) -> dict[str, str]:
        if self._settings.api_token is None:
            raise ConfigurationError(
                "Cloudflare API token is not configured",
                details={"setting": "CLOUDFLARE_API_TOKEN"},
            )
        return {"Authorization": f"Bearer {self._settings.api_token.get_secret_value()}"}

    async def create_index(self, account_id: str, body: dict[str, Any]) -> Any:
        """Create an index."""
        return await self._request(
            "create_index",
            "POST",
            self._index_url(account_id),
            json=body,
        )

    async def list_indexes(self, account_id: str, query: dict[str, Any]) -> Any:
        """List indexes."""
        return await self._request(
            "list_indexes",
            "GET",
            self._index_url(account_id),
            params=query,
        )

    async def get_index(self, account_id: str, name: str) -> Any | None:
        """Get an index by name."""
        return await self._request(
            "get_index",
            "GET",
            self._index_url(account_id, f"/{name}"),
            allow_not_found=True,
        )

    async def delete_index(self, account_id: str, name: str) -> None:
        """Delete an index by name."""
        await self._request(
            "delete_index",
            "DELETE",
            self._index_url(account_id, f"/{name}"),
        )

    async def get_index_info(self, account_id: str, name: str) -> Any | None:
        """Get operational info for an index."""
        return await self._request(
            "get_index_info",
            "GET",
            self._index_url(account_id, f"/{name}/info"),
            allow_not_found=True,
        )

    async def insert_vectors(
        self,
        account_id: str,
        name: str,
        body: str,
        unparsable_behavior: str | None = None,
    ) -> Any:
        """Insert an NDJSON batch of vectors."""
        return await self._send_ndjson(
            "insert_vectors", account_id, name, "insert", body, unparsable_behavior
        )

    async def upsert_vectors(
        self,
        account_id: str,
        name: str,
        body: str,
        unparsable_behavior: str | None = None,
    ) -> Any:
        """Upsert an NDJSON batch of vectors."""
        return await self._send_ndjson(
            "upsert_vectors", account_id, name, "upsert", body, unparsable_behavior
        )

    async def query_vectors(
        self,
        account_id: str,
        name: str,
        body: dict[str, Any],
    ) -> Any:
        """Run a nearest-neighbor query."""
        return await self._request(
            "query_vectors",
            "POST",
            self._index_url(account_id, f"/{name}/query"),
            json=body,
        )

    async def get_vectors_by_ids(
        self,
        account_id: str,
        name: str,
        body: dict[str, Any],
    ) -> Any:
        """Fetch vectors by identifier."""
        return await self._request(
            "get_vectors_by_ids",
            "POST",
            self._index_url(account_id, f"/{name}/get_by_ids"),
            json=body,
        )

    async def delete_vectors_by_ids(
        self,
        account_id: str,
        name: str,
        body: dict[str, Any],
    ) -> Any:
        """Delete vectors by identifier."""
        return await self._request(
            "delete_vectors_by_ids",
            "POST",
            self._index_url(account_id, f"/{name}/delete_by_ids"),
            json=body,
        )

    async def _send_ndjson(
        self,
        operation: str,
        account_id: str,
        name: str,
        action: str,
        body: str,
        unparsable_behavior: str | None,
    ) -> Any:
        params = {}
        if unparsable_behavior is not None:
            params["unparsable-behavior"] = unparsable_behavior

        return await self._request(
            operation,
            "POST",
            self._index_url(account_id, f"/{name}/{action}"),
            content=body.encode("utf-8"),
            params=params,
            headers={"Content-Type": self.NDJSON_CONTENT_TYPE},
        )

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        json: dict[str, Any] | None = None,
        content: bytes | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        allow_not_found: bool = False,
    ) -> Any:
        """Send one request and unwrap the Cloudflare response envelope.

        Args:
            operation: Operation name for logs and metrics.
            method: HTTP method.
            url: Request URL.
            json: JSON request body.
            content: Raw request body.
            params: Query parameters.
            headers: Extra request headers.
            allow_not_found: Return None instead of raising on HTTP 404.

        Returns:
            The ``result`` member of the response, or None.

        Raises:
            VectorizeAPIError: If the request fails or the API reports failure.
        """
        request_headers = {**self._auth_headers(), **(headers or {})}
        client = await self._get_client()
        start_time = time.perf_counter()

        try:
            result = await self._send(
                client,
                operation,
                method,
                url,
                json=json,
                content=content,
                params=params or None,
                headers=request_headers,
                allow_not_found=allow_not_found,
            )
        except VectorizeAPIError:
            track_api_request(operation, time.perf_counter() - start_time, success=False)
            raise

        track_api_request(operation, time.perf_counter() - start_time, success=True)
        return result

    async def _send(
        self,
        client: httpx.AsyncClient,
        operation: str,
        method: str,
        url: str,
        *,
        json: dict[str, Any] | None,
        content: bytes | None,
        params: dict[str, Any] | None,
        headers: dict[str, str],
        allow_not_found: bool,
    ) -> Any:
        try:
            response = await client.request(
                method,
                url,
                json=json,
                content=content,
                params=params,
                headers=headers,
            )
            response.raise_for_status()

        except httpx.TimeoutException as e:
            logger.error(
                f"Vectorize {operation} timed out: {e}",
                extra={"operation": operation, "url": url},
            )
            raise VectorizeAPIError(
                "Vectorize API request timed out",
                code=ErrorCode.API_TIMEOUT,
                details={"operation": operation, "timeout": self._settings.timeout},
            ) from e

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404 and allow_not_found:
                logger.debug(
                    f"Vectorize {operation} returned 404",
                    extra={"operation": operation, "url": url},
                )
                return None

            api_errors = _error_messages(e.response)
            logger.error(
                f"Vectorize {operation} failed: {status}",
                extra={"operation": operation, "url": url, "status": status},
            )

            if status == 429:
                code = ErrorCode.API_RATE_LIMIT
            elif status in (401, 403):
                code = ErrorCode.API_AUTH_ERROR
            else:
                code = ErrorCode.API_ERROR

            message = f"Vectorize API returned {status}"
            if api_errors:
                message = f"{message}: {'; '.join(api_errors)}"
            raise VectorizeAPIError(
                message,
                code=code,
                details={"operation": operation, "status_code": status},
            ) from e

        except httpx.RequestError as e:
            logger.error(
                f"Vectorize {operation} connection error: {e}",
                extra={"operation": operation, "url": url},
            )
            raise VectorizeAPIError(
                f"Failed to connect to Vectorize API: {e}",
                code=ErrorCode.API_CONNECTION_ERROR,
                details={"operation": operation},
            ) from e

        if not response.content:
            return None

        try:
            data = response.json()
        except ValueError as e:
            raise VectorizeAPIError(
                f"Invalid response from Vectorize API: {e}",
                code=ErrorCode.API_INVALID_RESPONSE,
                details={"operation": operation},
            ) from e

        if not isinstance(data, dict):
            raise VectorizeAPIError(
                "Invalid response from Vectorize API: expected a JSON object",
                code=ErrorCode.API_INVALID_RESPONSE,
                details={"operation": operation},
            )

        if data.get("success") is False:
            api_errors = _errors_from_payload(data)
            raise VectorizeAPIError(
                "Vectorize API reported failure: " + ("; ".join(api_errors) or "unknown error"),
                code=ErrorCode.API_ERROR,
                details={"operation": operation, "errors": data.get("errors", [])},
            )

        return data.get("result")


def _errors_from_payload(data: dict[str, Any]) -> list[str]:
    """Collect ``errors[].message`` entries from a Cloudflare envelope."""
    messages: list[str] = []
    for error in data.get("errors") or []:
        if isinstance(error, dict) and error.get("message"):
            code = error.get("code")
            messages.append(f"{error['message']} ({code})" if code else str(error["message"]))
    return messages


def _error_messages(response: httpx.Response) -> list[str]:
    try:
        data = response.json()
    except ValueError:
        return [response.text] if response.text else []
    if isinstance(data, dict):
        return _errors_from_payload(data)
    return []
