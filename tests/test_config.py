"""Tests for application configuration."""

import os
from unittest.mock import patch

from vectorize_mcp.config import (
    CloudflareSettings,
    Environment,
    Settings,
    get_settings,
)


class TestCloudflareSettings:
    """Tests for Cloudflare configuration."""

    def test_default_values(self) -> None:
        """Default values point to the public Cloudflare API."""
        with patch.dict(os.environ, {}, clear=True):
            settings = CloudflareSettings()
        assert settings.api_base_url == "https://api.cloudflare.com/client/v4"
        assert settings.api_token is None
        assert settings.account_id is None
        assert settings.timeout == 30.0

    def test_api_token_is_secret_when_set(self) -> None:
        """API token should be masked when set."""
        with patch.dict(os.environ, {"CLOUDFLARE_API_TOKEN": "secret-token"}):
            settings = CloudflareSettings()
            assert settings.api_token is not None
            assert "secret-token" not in str(settings.api_token)
            assert settings.api_token.get_secret_value() == "secret-token"

    def test_env_override(self) -> None:
        """Environment variables override defaults."""
        with patch.dict(
            os.environ,
            {"CLOUDFLARE_ACCOUNT_ID": "acct-env", "CLOUDFLARE_TIMEOUT": "5"},
        ):
            settings = CloudflareSettings()
            assert settings.account_id == "acct-env"
            assert settings.timeout == 5.0


class TestSettings:
    """Tests for main application settings."""

    def test_default_environment(self) -> None:
        """Default environment is development."""
        settings = Settings()
        assert settings.environment == Environment.DEVELOPMENT

    def test_default_api_settings(self) -> None:
        """Default API host and port."""
        settings = Settings()
        assert settings.api_host == "0.0.0.0"
        assert settings.api_port == 8000

    def test_default_server_name(self) -> None:
        """MCP server name has a default."""
        settings = Settings()
        assert settings.server_name == "vectorize-mcp"

    def test_nested_settings_loaded(self) -> None:
        """Nested settings are initialized."""
        settings = Settings()
        assert isinstance(settings.cloudflare, CloudflareSettings)

    def test_environment_enum(self) -> None:
        """Environment can be set via string."""
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            settings = Settings()
            assert settings.environment == Environment.PRODUCTION


class TestGetSettings:
    """Tests for settings singleton."""

    def test_returns_settings_instance(self) -> None:
        """get_settings returns a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_caching(self) -> None:
        """Settings are cached."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
