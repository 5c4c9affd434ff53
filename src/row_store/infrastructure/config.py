"""Configuration management for the row store."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from row_store.domain.value_objects import PAGE_SIZE, ROW_SIZE, TABLE_MAX_PAGES, TableLayout


class StorageConfig(BaseModel):
    """Table storage configuration."""

    page_size: int = Field(
        default=PAGE_SIZE, ge=ROW_SIZE, le=65536, description="Page size in bytes"
    )
    table_max_pages: int = Field(
        default=TABLE_MAX_PAGES, ge=1, le=100000, description="Page slots per table"
    )


class ReplConfig(BaseModel):
    """Interactive front end configuration."""

    prompt: str = Field(default="db > ", description="Prompt printed before each line")


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="REST API port")
    metrics_port: int = Field(default=8001, ge=1, le=65535, description="Prometheus metrics port")


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="console", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="row_store", description="Service name for tracing")


class Config(BaseSettings):
    """Main configuration for the row store."""

    model_config = SettingsConfigDict(
        env_prefix="ROW_STORE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    repl: ReplConfig = Field(default_factory=ReplConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    def table_layout(self) -> TableLayout:
        """Build the table geometry described by the storage settings."""
        return TableLayout(
            page_size=self.storage.page_size,
            max_pages=self.storage.table_max_pages,
        )


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
