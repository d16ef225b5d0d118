"""FastAPI application entry point.

Configures the application with logging, exception handling, metrics,
health checks and the tool routes.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from vectorize_mcp import __version__
from vectorize_mcp.api.routes import router as tools_router
from vectorize_mcp.config import Settings, get_settings
from vectorize_mcp.exceptions import ErrorCode, VectorizeToolsError
from vectorize_mcp.logging_config import get_logger, setup_logging
from vectorize_mcp.observability.metrics import (
    MetricsMiddleware,
    get_metrics,
    get_metrics_content_type,
)
from vectorize_mcp.tools import ToolRegistry, build_vectorize_registry
from vectorize_mcp.vectorize.client import CloudflareVectorizeClient, VectorizeAPI

logger = get_logger(__name__)

# Error code -> HTTP status; anything unlisted is a 500
_STATUS_CODES = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.TOOL_NOT_FOUND: 404,
    ErrorCode.API_RATE_LIMIT: 429,
    ErrorCode.API_AUTH_ERROR: 502,
    ErrorCode.API_ERROR: 502,
    ErrorCode.API_CONNECTION_ERROR: 502,
    ErrorCode.API_INVALID_RESPONSE: 502,
    ErrorCode.API_TIMEOUT: 504,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    settings: Settings = app.state.settings
    setup_logging(level=settings.log_level)
    logger.info(
        "Starting Vectorize tools API",
        extra={
            "version": __version__,
            "environment": settings.environment.value,
        },
    )

    yield

    client = app.state.vectorize_client
    if isinstance(client, CloudflareVectorizeClient):
        await client.close()
    logger.info("Shutting down Vectorize tools API")


def create_app(
    settings: Settings | None = None,
    registry: ToolRegistry | None = None,
    client: VectorizeAPI | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings (default from environment).
        registry: Tool registry (default: all Vectorize tools).
        client: Vectorize client (default: Cloudflare REST client).

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Vectorize MCP Tools",
        description="Vectorize index management and search tools for AI agents",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.state.settings = settings
    app.state.registry = registry or build_vectorize_registry()
    app.state.vectorize_client = client or CloudflareVectorizeClient(settings.cloudflare)

    app.add_exception_handler(VectorizeToolsError, tools_exception_handler)
    app.add_middleware(MetricsMiddleware)

    app.add_api_route("/health", health_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/health/ready", readiness_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/health/live", liveness_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/metrics", metrics_endpoint, methods=["GET"], tags=["Metrics"])
    app.include_router(tools_router)

    return app


async def tools_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle VectorizeToolsError exceptions.

    Converts exceptions to structured JSON responses.
    """
    if not isinstance(exc, VectorizeToolsError):
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": ErrorCode.INTERNAL_ERROR.value,
                    "message": str(exc),
                    "details": {},
                }
            },
        )

    logger.error(
        f"Request failed: {exc.message}",
        extra={
            "error_code": exc.code.value,
            "path": request.url.path,
        },
    )

    return JSONResponse(
        status_code=_STATUS_CODES.get(exc.code, 500),
        content=exc.to_dict(),
    )


async def health_check() -> dict[str, Any]:
    """Basic health check endpoint.

    Returns:
        Health status with version and timestamp.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
    }


async def readiness_check(request: Request) -> dict[str, Any]:
    """Readiness probe.

    The service is ready once tools are registered and a Cloudflare API
    token is configured.

    Returns:
        Readiness status with component checks.
    """
    settings: Settings = request.app.state.settings
    registry: ToolRegistry = request.app.state.registry

    checks: dict[str, str] = {
        "config": "ok",
        "tools": "ok" if len(registry) > 0 else "empty",
        "api_token": "ok" if settings.cloudflare.api_token is not None else "missing",
    }

    all_ok = all(v == "ok" for v in checks.values())

    return {
        "status": "ready" if all_ok else "not_ready",
        "checks": checks,
        "timestamp": datetime.now(UTC).isoformat(),
    }


async def liveness_check() -> dict[str, str]:
    """Liveness probe.

    Returns:
        Liveness status.
    """
    return {"status": "alive"}


async def metrics_endpoint() -> Response:
    """Expose Prometheus metrics."""
    return Response(content=get_metrics(), media_type=get_metrics_content_type())


app = create_app()
