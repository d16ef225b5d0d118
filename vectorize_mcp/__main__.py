"""Command-line entry point.

Usage:
    python -m vectorize_mcp stdio
    python -m vectorize_mcp http --host 127.0.0.1 --port 8000
"""

import argparse
import asyncio
import sys

import uvicorn

from vectorize_mcp.config import get_settings
from vectorize_mcp.server import serve_stdio


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="vectorize-mcp",
        description="Serve Vectorize index tools to AI agents",
    )
    subparsers = parser.add_subparsers(dest="transport", required=True)

    subparsers.add_parser("stdio", help="Serve tools over MCP stdio")

    http_parser = subparsers.add_parser("http", help="Serve tools over HTTP")
    http_parser.add_argument("--host", default=settings.api_host, help="Bind address")
    http_parser.add_argument("--port", type=int, default=settings.api_port, help="Bind port")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the selected transport until it exits."""
    args = parse_args(argv)

    if args.transport == "stdio":
        asyncio.run(serve_stdio())
    else:
        uvicorn.run(
            "vectorize_mcp.api.app:app",
            host=args.host,
            port=args.port,
            log_config=None,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
