"""Configuration settings management for the TaskFlow service.

This module provides centralized, hierarchical configuration using
pydantic-settings with validation and environment variable support.

Features:
- Nested settings for the database, the HTTP server and the API client
- Environment variable support with the TASKFLOW_ prefix
- Nested overrides with ``__`` (e.g. ``TASKFLOW_DATABASE__URL``)
- Support for .env files
- Global settings caching
"""

import logging
from functools import lru_cache

from pydantic import Field, HttpUrl, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database configuration for the task store."""

    model_config = SettingsConfigDict(env_prefix="DATABASE_")

    url: str = Field("sqlite:///tasks.db", description="Task database connection URL")
    echo_sql: bool = Field(False, description="Enable SQL query logging for debugging")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Only SQLite URLs are supported."""
        if not v.startswith("sqlite://"):
            raise ValueError(f"Unsupported database URL: {v}")
        return v

    @property
    def is_memory(self) -> bool:
        """True when the URL points at an in-memory SQLite database."""
        return self.url in ("sqlite://", "sqlite:///:memory:")


class ServerSettings(BaseSettings):
    """HTTP server configuration."""

    model_config = SettingsConfigDict(env_prefix="SERVER_")

    host: str = Field("127.0.0.1", description="Interface to bind")
    port: int = Field(5000, ge=1, le=65535, description="Port to listen on")
    api_prefix: str = Field(
        "", description="Route prefix for the task endpoints (e.g. /api)"
    )
    reload: bool = Field(False, description="Enable uvicorn auto-reload")

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """Normalize to a leading slash and no trailing slash."""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = f"/{v}"
        return v


class ClientSettings(BaseSettings):
    """Task API client configuration."""

    model_config = SettingsConfigDict(env_prefix="CLIENT_")

    base_url: HttpUrl = Field(
        "http://127.0.0.1:5000", description="Base URL of the task API"
    )
    timeout_seconds: float = Field(
        10.0, gt=0.0, le=300.0, description="Request timeout in seconds"
    )


class TaskflowSettings(BaseSettings):
    """Root configuration combining all subsystem settings."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)

    # Development and debugging
    debug_mode: bool = Field(False, description="Enable debug logging")
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        env_prefix="TASKFLOW_",
        extra="ignore",
        validate_default=True,
        case_sensitive=False,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept only the standard logging level names."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def apply_debug_mode(self) -> "TaskflowSettings":
        """Debug mode forces DEBUG logging."""
        if self.debug_mode:
            self.log_level = "DEBUG"
        return self


@lru_cache(maxsize=1)
def get_settings() -> TaskflowSettings:
    """Get cached global settings instance.

    Returns:
        Global TaskflowSettings instance

    """
    return TaskflowSettings()


__all__ = [
    "ClientSettings",
    "DatabaseSettings",
    "ServerSettings",
    "TaskflowSettings",
    "get_settings",
]
