"""Centralized configuration management using Pydantic Settings."""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BrowserType(str, Enum):
    """Supported browser types."""

    CHROME = "chrome"
    FIREFOX = "firefox"
    EDGE = "edge"


class Settings(BaseSettings):
    """Harness settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WEBTESTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    debug: bool = Field(default=False, description="Debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_to_file: bool = Field(default=False, description="Also write logs under logs_dir")
    logs_dir: Path = Field(default=Path("./logs"), description="Log file directory")

    # Driver
    browser_type: BrowserType = Field(default=BrowserType.CHROME, description="Browser type")
    driver_path: str | None = Field(
        default=None, description="Driver binary path (installed on demand if unset)"
    )
    headless: bool = Field(default=True, description="Run browser in headless mode")
    platform_name: str = Field(default="linux", description="Requested platformName capability")

    # Waiting
    poll_interval: float = Field(
        default=0.5, gt=0, description="Seconds between predicate evaluations"
    )
    wait_timeout: float = Field(default=10.0, ge=0, description="Total wait deadline in seconds")
    page_load_timeout: float | None = Field(
        default=None, ge=0, description="Page load timeout applied to new sessions"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
