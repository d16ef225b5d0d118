"""Prometheus metrics for the Vectorize tools.

Provides metrics instrumentation for:
- HTTP request latency and counts
- Tool invocations by outcome
- Vectorize API request latency
"""

import time
from collections.abc import Awaitable, Callable, Container

from fastapi import Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

# HTTP Request Metrics
HTTP_REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint", "status_code"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

HTTP_REQUEST_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

# Tool Metrics
TOOL_CALL_DURATION = Histogram(
    "tool_call_duration_seconds",
    "Tool invocation duration in seconds",
    ["tool", "outcome"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

TOOL_CALL_TOTAL = Counter(
    "tool_calls_total",
    "Total tool invocations",
    ["tool", "outcome"],  # "outcome" label values: ToolResultKind values
)

# Vectorize API Metrics
VECTORIZE_API_REQUEST_DURATION = Histogram(
    "vectorize_api_request_duration_seconds",
    "Vectorize API request duration in seconds",
    ["operation", "status"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
)

VECTORIZE_API_REQUEST_TOTAL = Counter(
    "vectorize_api_requests_total",
    "Total Vectorize API requests",
    ["operation", "status"],
)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to collect HTTP request metrics."""

    def __init__(self, app: ASGIApp) -> None:
        """Initialize the middleware."""
        super().__init__(app)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Process request and collect metrics."""
        # Skip metrics endpoint to avoid recursion
        if request.url.path == "/metrics":
            return await call_next(request)

        start_time = time.perf_counter()

        response = await call_next(request)

        duration = time.perf_counter() - start_time

        registry = getattr(request.app.state, "registry", None)
        endpoint = self._normalize_endpoint(request.url.path, registry or ())

        HTTP_REQUEST_DURATION.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).observe(duration)

        HTTP_REQUEST_TOTAL.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).inc()

        return response

    def _normalize_endpoint(self, path: str, known_tools: Container[str]) -> str:
        """Normalize endpoint path to reduce cardinality.

        Registered tool names are kept; any other name collapses to a
        single placeholder label.
        """
        if path.startswith("/health"):
            return "/health"
        if path.startswith("/api/v1/tools/"):
            name = path.removeprefix("/api/v1/tools/")
            if name in known_tools:
                return f"/api/v1/tools/{name}"
            return "/api/v1/tools/{name}"
        return path


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST


def track_tool_call(
    tool: str,
    outcome: str,
    duration: float,
) -> None:
    """Track a tool invocation.

    Args:
        tool: Tool name.
        outcome: Result kind (success, notice, not_found, missing_account, error).
        duration: Invocation duration in seconds.
    """
    TOOL_CALL_DURATION.labels(tool=tool, outcome=outcome).observe(duration)
    TOOL_CALL_TOTAL.labels(tool=tool, outcome=outcome).inc()


def track_api_request(
    operation: str,
    duration: float,
    success: bool = True,
) -> None:
    """Track Vectorize API request metrics.

    Args:
        operation: Client operation name.
        duration: Request duration in seconds.
        success: Whether the request succeeded.
    """
    status = "success" if success else "error"

    VECTORIZE_API_REQUEST_DURATION.labels(operation=operation, status=status).observe(duration)
    VECTORIZE_API_REQUEST_TOTAL.labels(operation=operation, status=status).inc()
