"""Observability module for metrics and monitoring."""

from vectorize_mcp.observability.metrics import (
    MetricsMiddleware,
    get_metrics,
    get_metrics_content_type,
    track_api_request,
    track_tool_call,
)

__all__ = [
    "MetricsMiddleware",
    "get_metrics",
    "get_metrics_content_type",
    "track_api_request",
    "track_tool_call",
]
