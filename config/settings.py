"""Application configuration using pydantic-settings."""

import os
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the automation runner.

    Configuration priority (highest to lowest):
    1. Environment variables
    2. .env.{ENVIRONMENT} file (e.g., .env.production)
    3. .env file (shared defaults)
    4. Field defaults in this class

    Job-specific behaviour (target URL, steps, scraping rules) lives in the YAML
    job file, not here.
    """

    model_config = SettingsConfigDict(
        env_file=(
            ".env",
            f".env.{os.getenv('ENVIRONMENT', 'development')}",
        ),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "autoscrape"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production", "testing"] = Field(
        default="development",
        description="Application environment",
    )

    # Browser
    headless: bool = Field(
        default=False,
        description="Run the browser without a window (HEADLESS=true or HEADLESS=1)",
    )
    browser_type: Literal["chromium", "firefox", "webkit"] = Field(
        default="chromium",
        description="Playwright browser engine to launch",
    )
    navigation_wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = Field(
        default="domcontentloaded",
        description="Load state awaited after the initial navigation",
    )
    navigation_timeout_ms: int = Field(
        default=30000,
        description="Timeout in milliseconds for the initial navigation",
    )

    # Step execution
    step_settle_ms: int = Field(
        default=500,
        description="Pause in milliseconds after each step before the next one starts",
    )

    # Extraction
    list_wait_timeout_ms: int = Field(
        default=10000,
        description="Timeout in milliseconds waiting for the list selector on each page",
    )
    pagination_settle_ms: int = Field(
        default=1000,
        description="Pause in milliseconds after a next-page click and network idle",
    )
    pagination_max_pages: int | None = Field(
        default=None,
        description="Default page cap when a job does not set pagination.max_pages",
    )

    # Google Sheets
    google_service_account_json: str | None = Field(
        default=None,
        description="Path to the Google service account JSON key file",
    )
    google_sheet_id: str | None = Field(
        default=None,
        description="Spreadsheet ID used when the job file does not set one",
    )

    # Chatwork
    chatwork_api_token: str | None = Field(default=None, description="Chatwork API token")
    chatwork_room_id: str | None = Field(
        default=None,
        description="Room ID used when the job file does not set one",
    )
    chatwork_api_base_url: str = "https://api.chatwork.com/v2"
    http_timeout: float = 30.0

    # Monitoring
    metrics_port: int | None = Field(
        default=None,
        description="Serve Prometheus metrics on this port while a command runs",
    )

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "console"

    @field_validator("step_settle_ms", "list_wait_timeout_ms", "pagination_settle_ms")
    @classmethod
    def validate_non_negative_delay(cls, v: int) -> int:
        """Validate delays and timeouts are not negative."""
        if v < 0:
            raise ValueError("delays and timeouts must be >= 0")
        return v

    @field_validator("pagination_max_pages")
    @classmethod
    def validate_max_pages(cls, v: int | None) -> int | None:
        """Validate the page cap is positive when set."""
        if v is not None and v < 1:
            raise ValueError("pagination_max_pages must be at least 1")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid option."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


def get_settings() -> Settings:
    """Get a settings instance.

    Settings are cheap to build, so callers construct a fresh instance instead of
    sharing a module-level singleton. Tests pass explicit ``Settings(...)`` objects.
    """
    return Settings()
