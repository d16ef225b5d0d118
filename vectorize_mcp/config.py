"""Application configuration using Pydantic Settings.

All configuration is loaded from environment variables.
No secrets are hardcoded.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class CloudflareSettings(BaseSettings):
    """Cloudflare API configuration.

    The API token must carry Vectorize read/write permissions for the
    accounts the agent operates on.
    """

    model_config = SettingsConfigDict(env_prefix="CLOUDFLARE_")

    api_base_url: str = Field(
        default="https://api.cloudflare.com/client/v4",
        description="Cloudflare API base URL",
    )
    api_token: SecretStr | None = Field(
        default=None,
        description="Cloudflare API token",
    )
    account_id: str | None = Field(
        default=None,
        description="Default active account ID (used when the caller supplies none)",
    )
    timeout: float = Field(
        default=30.0,
        description="Request timeout in seconds",
    )


class Settings(BaseSettings):
    """Main application settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application settings
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    server_name: str = Field(
        default="vectorize-mcp",
        description="Server identity advertised to MCP clients",
    )

    # API settings
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host",
    )
    api_port: int = Field(
        default=8000,
        description="API server port",
    )

    # Nested settings
    cloudflare: CloudflareSettings = Field(default_factory=CloudflareSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()
