"""Tests for logging configuration."""

import io
import json
import logging
import sys
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from pydantic import SecretStr

from vectorize_mcp.config import CloudflareSettings, Environment, Settings
from vectorize_mcp.exceptions import VectorizeAPIError
from vectorize_mcp.logging_config import (
    QUIET_LOGGERS,
    DevFormatter,
    JSONFormatter,
    record_context,
    setup_logging,
)
from vectorize_mcp.vectorize.client import CloudflareVectorizeClient


def _capture(json_output: bool) -> io.StringIO:
    """Install logging and redirect its single handler into a buffer."""
    setup_logging(level="DEBUG", json_output=json_output)
    buffer = io.StringIO()
    handler = logging.getLogger().handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    handler.setStream(buffer)
    return buffer


class TestContextFields:
    """Tests for extracting context passed via extra=."""

    def test_known_fields_collected(self) -> None:
        record = logging.makeLogRecord(
            {"msg": "x", "tool": "vectorize_index_get", "status": 429, "unrelated": 1}
        )

        assert record_context(record) == {"tool": "vectorize_index_get", "status": 429}

    def test_none_values_skipped(self) -> None:
        record = logging.makeLogRecord({"msg": "x", "url": None})

        assert record_context(record) == {}


class TestJSONOutput:
    """Tests for JSON log lines."""

    def test_extras_propagated(self) -> None:
        """Context passed via extra= appears as top-level keys."""
        buffer = _capture(json_output=True)

        logging.getLogger("vectorize_mcp.test").error(
            "Vectorize query_vectors failed: 500",
            extra={
                "operation": "query_vectors",
                "url": "https://api.test/indexes/idx/query",
                "status": 500,
            },
        )

        entry = json.loads(buffer.getvalue().strip())
        assert entry["level"] == "ERROR"
        assert entry["logger"] == "vectorize_mcp.test"
        assert entry["operation"] == "query_vectors"
        assert entry["url"] == "https://api.test/indexes/idx/query"
        assert entry["status"] == 500
        assert "tool" not in entry

    def test_exception_included(self) -> None:
        buffer = _capture(json_output=True)

        try:
            raise RuntimeError("remote fault")
        except RuntimeError:
            logging.getLogger("vectorize_mcp.test").exception("failed", extra={"tool": "t"})

        entry = json.loads(buffer.getvalue().strip())
        assert entry["tool"] == "t"
        assert "RuntimeError: remote fault" in entry["exception"]


class TestDevOutput:
    """Tests for console log lines."""

    def test_context_appended(self) -> None:
        """Context fields follow the message as key=value pairs."""
        record = logging.makeLogRecord(
            {
                "name": "vectorize_mcp.tools.registry",
                "levelno": logging.INFO,
                "levelname": "INFO",
                "msg": "Tool vectorize_index_list finished: success",
                "tool": "vectorize_index_list",
            }
        )

        line = DevFormatter().format(record)

        assert line.endswith(
            "| Tool vectorize_index_list finished: success | tool=vectorize_index_list"
        )

    def test_plain_message_unchanged(self) -> None:
        record = logging.makeLogRecord({"msg": "MCP server stopped", "levelname": "INFO"})

        assert DevFormatter().format(record).endswith("| MCP server stopped")


class TestSetupLogging:
    """Tests for logging setup."""

    def test_logs_to_stderr(self) -> None:
        """stdout stays free for the MCP stdio transport."""
        setup_logging(level="INFO", json_output=False)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0].stream is sys.stderr

    def test_third_party_loggers_quieted(self) -> None:
        """MCP and HTTP client chatter is capped at WARNING."""
        setup_logging(level="DEBUG", json_output=False)

        assert "mcp" in QUIET_LOGGERS
        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
        assert logging.getLogger().level == logging.DEBUG

    @pytest.mark.parametrize(
        ("environment", "formatter"),
        [(Environment.PRODUCTION, JSONFormatter), (Environment.DEVELOPMENT, DevFormatter)],
    )
    def test_formatter_follows_environment(
        self,
        environment: Environment,
        formatter: type[logging.Formatter],
    ) -> None:
        with patch(
            "vectorize_mcp.logging_config.get_settings",
            return_value=Settings(environment=environment),
        ):
            setup_logging()

        assert isinstance(logging.getLogger().handlers[0].formatter, formatter)


class TestClientLogging:
    """The Vectorize client logs failures with request context."""

    @pytest.mark.asyncio
    async def test_status_error_context(self, caplog: pytest.LogCaptureFixture) -> None:
        response = MagicMock()
        response.status_code = 500
        response.json.return_value = {"success": False, "errors": []}
        response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError("500", request=MagicMock(), response=response)
        )
        http = AsyncMock(spec=httpx.AsyncClient)
        http.request.return_value = response
        client = CloudflareVectorizeClient(
            settings=CloudflareSettings(
                api_base_url="https://api.test/client/v4",
                api_token=SecretStr("token"),
            ),
            client=http,
        )

        with caplog.at_level(logging.ERROR, logger="vectorize_mcp.vectorize.client"):
            with pytest.raises(VectorizeAPIError):
                await client.get_index_info("acct-1", "idx")

        record = next(r for r in caplog.records if r.name == "vectorize_mcp.vectorize.client")
        assert record_context(record) == {
            "operation": "get_index_info",
            "url": "https://api.test/client/v4/accounts/acct-1/vectorize/v2/indexes/idx/info",
            "status": 500,
        }
