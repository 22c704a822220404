"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./directory.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    identity_strategy: Literal["auto", "native", "table"] = Field(
        default="auto",
        description=(
            "How user ids are generated: the store's native serial sequence, "
            "an identity_sequence table, or auto (native on PostgreSQL)"
        ),
    )
    create_tables: bool = Field(
        default=True, description="Create missing tables when the API starts"
    )
    sync_sequence_on_startup: bool = Field(
        default=True,
        description="Advance the identity sequence past max(id) when the API starts",
    )

    @computed_field
    @property
    def dialect(self) -> str:
        """Backend name of the configured URL (postgresql, sqlite, ...)."""
        from sqlalchemy.engine import make_url

        return make_url(self.url).get_backend_name()

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string, keeping any inline password."""
        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)
        if base_url.password and self.dialect == "postgresql":
            logger.warning(
                "Database URL contains a password; "
                "consider injecting it through an environment variable."
            )
        return base_url.render_as_string(hide_password=False)


class QueryConfig(BaseModel):
    """Defaults applied when list requests omit paging parameters."""

    default_page: int = Field(default=1, ge=1, description="Page used when none is given")
    default_limit: int = Field(
        default=5, ge=1, description="Page size used when none is given"
    )
    max_page_size: int | None = Field(
        default=None,
        ge=1,
        description="Optional upper bound on the page size (unbounded when null)",
    )


class AppConfig(BaseModel):
    """Application configuration model."""

    name: str = Field(default="user-directory", description="Service name")
    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    query: QueryConfig = Field(
        default_factory=QueryConfig, description="List query defaults"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
