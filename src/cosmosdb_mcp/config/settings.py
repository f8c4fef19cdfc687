"""Centralized configuration management using Pydantic Settings.

This module provides type-safe configuration with environment variable support,
validation, and clear defaults for the Cosmos DB MCP server. It is the single
source of truth for the store endpoint, credential, database name and logging.

Configuration can be overridden via environment variables (e.g., COSMOSDB_URI)
and is validated at startup so the server fails fast on a bad configuration.

Example:
    Loading and validating settings:
    >>> from cosmosdb_mcp.config.settings import settings
    >>> settings.validate_configuration()
    >>> print(settings.cosmosdb_database)
    'todos'
"""

import logging
from typing import Literal
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cosmosdb_mcp.mcp_server.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables with validation.

    Settings are loaded from:
    1. Environment variables (highest priority)
    2. .env file (if present)
    3. Class defaults (lowest priority)

    All settings can be overridden via environment variables using uppercase names
    (e.g., COSMOSDB_DATABASE=inventory).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================================================
    # Cosmos DB Configuration
    # ========================================================================

    cosmosdb_uri: str | None = Field(
        default=None,
        description=(
            "Cosmos DB account endpoint URI. "
            "Format: https://<account>.documents.azure.com:443/"
        ),
    )

    cosmosdb_key: str | None = Field(
        default=None,
        description="Cosmos DB account key used as the client credential",
    )

    cosmosdb_database: str = Field(
        default="todos",
        description="Name of the Cosmos DB database all tools operate in",
        min_length=1,
    )

    cosmosdb_container: str = Field(
        default="tasks",
        description=(
            "Default container name. Tools take containerName on every call, "
            "so this is only reported at startup"
        ),
        min_length=1,
    )

    # ========================================================================
    # MCP Server Configuration
    # ========================================================================

    mcp_server_name: str = Field(
        default="cosmosdb-mcp-server",
        description="Server name advertised to MCP clients during initialization",
    )

    # ========================================================================
    # Logging Configuration
    # ========================================================================

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level for application logs. DEBUG provides most detail",
    )

    # ========================================================================
    # Field Validators
    # ========================================================================

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Accept log levels in any case (e.g. ``debug``)."""
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("cosmosdb_uri", "cosmosdb_key", mode="before")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        """Treat empty or whitespace-only values as unset."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    # ========================================================================
    # Helper Properties
    # ========================================================================

    @property
    def masked_key(self) -> str:
        """Account key with everything but the last four characters hidden."""
        if not self.cosmosdb_key:
            return "<unset>"
        return f"***{self.cosmosdb_key[-4:]}"

    # ========================================================================
    # Helper Methods
    # ========================================================================

    def validate_configuration(self) -> None:
        """Validate complete application configuration at startup.

        Raises:
            ConfigurationError: If the endpoint or key is missing, or the
                endpoint is not an http(s) URL

        Example:
            >>> from cosmosdb_mcp.config.settings import settings
            >>> try:
            ...     settings.validate_configuration()
            ... except ConfigurationError as e:
            ...     print(f"Configuration error: {e.message}")
        """
        logger.info("Validating application configuration...")

        if not self.cosmosdb_uri:
            logger.error("COSMOSDB_URI is not configured")
            raise ConfigurationError(
                message="Cosmos DB endpoint not configured",
                details={"env_var": "COSMOSDB_URI"},
            )

        parsed = urlparse(self.cosmosdb_uri)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            logger.error(f"COSMOSDB_URI is not a valid endpoint: {self.cosmosdb_uri}")
            raise ConfigurationError(
                message=f"Invalid Cosmos DB endpoint: {self.cosmosdb_uri}",
                details={"env_var": "COSMOSDB_URI"},
            )

        if not self.cosmosdb_key:
            logger.error("COSMOSDB_KEY is not configured")
            raise ConfigurationError(
                message="Cosmos DB key not configured",
                details={"env_var": "COSMOSDB_KEY"},
            )

        logger.info("Configuration validation passed")

    def log_config(self) -> None:
        """Log the current configuration, masking the account key."""
        logger.info(f"Cosmos DB endpoint: {self.cosmosdb_uri}")
        logger.info(f"Cosmos DB key: {self.masked_key}")
        logger.info(f"Database: {self.cosmosdb_database}")
        logger.info(f"Default container: {self.cosmosdb_container}")
        logger.info(f"Log level: {self.log_level}")


# Global settings instance - initialized once at module import
settings = Settings()
