"""
Catalog Search Configuration Management Module

Provides type-safe configuration management using pydantic-settings.
Supports loading configuration from environment variables and .env files.

Usage:
    from config.settings import settings
    print(settings.data_dir)
    print(settings.search.max_limit)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory
PROJECT_ROOT = Path(__file__).resolve().parent.parent


class SearchSettings(BaseSettings):
    """Search configuration"""

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_SEARCH_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_limit: int = Field(default=10, description="Products returned per page when limit is omitted")
    max_limit: int = Field(default=100, description="Hard ceiling for the limit parameter")
    new_arrivals_days: int = Field(default=30, description="Window (days) for the recent-product bonus")
    trace_enabled: bool = Field(default=True, description="Emit search trace logs at orchestration points")
    trace_top_n: int = Field(default=3, description="Number of top candidates included in the trace")

    @model_validator(mode="after")
    def check_limits(self) -> SearchSettings:
        """Keep default_limit within the allowed range"""
        if self.max_limit < 1:
            raise ValueError("max_limit must be >= 1")
        if not 1 <= self.default_limit <= self.max_limit:
            raise ValueError("default_limit must be between 1 and max_limit")
        return self


class WebSettings(BaseSettings):
    """Web application configuration"""

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    access_log: bool = Field(default=False, description="Enable access logging")
    max_content_length: int = Field(default=1048576, description="Max request body size (bytes)")

    # Prometheus endpoint
    enable_metrics: bool = Field(default=False, description="Expose /metrics")
    metrics_key: str = Field(default="", description="Shared key required by /metrics (empty disables check)")


class DatabaseSettings(BaseSettings):
    """Database configuration"""

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_SEARCH_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    timeout: int = Field(default=30, description="SQLite connection timeout (seconds)")
    max_retries: int = Field(default=5, description="Database operation max retries")
    retry_base_sleep: float = Field(default=0.2, description="Retry base sleep time (seconds)")


class SentrySettings(BaseSettings):
    """Sentry error reporting configuration"""

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_SEARCH_SENTRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = Field(default=False, description="Enable Sentry reporting")
    dsn: str = Field(default="", description="Sentry DSN")
    environment: str = Field(default="", description="Sentry environment name")
    release: str = Field(default="", description="Release identifier")
    traces_sample_rate: float = Field(default=0.0, description="Performance traces sample rate")
    profiles_sample_rate: float = Field(default=0.0, description="Profiling sample rate")


class Settings(BaseSettings):
    """Main configuration class"""

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Data directories
    data_dir: Path = PROJECT_ROOT / "data"
    log_dir: Path | None = None  # Log directory (default data_dir/logs)

    # Service configuration
    host: str = "127.0.0.1"  # Bind address of the development server
    serve_port: int = 3000

    # Log configuration
    log_level: str = "WARNING"
    log_format: Literal["text", "json"] = "text"
    log_to_file: bool = False  # Also write logs to log_dir/catalog_search.log

    # Feature switches
    enable_swagger: bool = False

    search: SearchSettings = Field(default_factory=SearchSettings)
    web: WebSettings = Field(default_factory=WebSettings)
    db: DatabaseSettings = Field(default_factory=DatabaseSettings)
    sentry: SentrySettings = Field(default_factory=SentrySettings)

    @property
    def access_log(self) -> bool:
        return bool(self.web.access_log)

    @model_validator(mode="after")
    def set_defaults(self) -> Settings:
        """Set dependent default values"""
        if self.log_dir is None:
            self.log_dir = self.data_dir / "logs"
        return self

    @field_validator("data_dir", "log_dir", mode="before")
    @classmethod
    def resolve_path(cls, v):
        """Resolve relative paths against the project root"""
        if v is None:
            return v
        p = Path(v)
        if not p.is_absolute():
            p = (PROJECT_ROOT / p).resolve()
        return p


@lru_cache
def get_settings() -> Settings:
    """Get settings singleton (with cache)"""
    return Settings()


# Global settings instance
settings: Settings = get_settings()


def reload_settings() -> Settings:
    """Reload settings (clear cache)"""
    get_settings.cache_clear()
    # Note: this does not update module-level settings variable, caller should use return value
    # To update global settings, use config package's reload_settings
    return get_settings()
