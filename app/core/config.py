"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file

Every external collaborator (KV store, e-mail) is optional. Its presence is
detected from configuration and its absence only degrades functionality.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    site_url: str = Field(
        "https://kristofpc.vercel.app",
        description="Public base URL of the site",
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable per-IP rate limiting on the contact endpoint",
    )
    contact_rate_limit_requests: int = Field(
        5,
        description="Maximum number of contact submissions per window (per client IP)",
        ge=1,
    )
    contact_rate_limit_window_seconds: int = Field(
        600,
        description="Contact rate limit window size in seconds",
        ge=1,
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include X-RateLimit-* headers when throttling",
    )

    locale_cookie_name: str = Field(
        "lang",
        description="Cookie holding the preferred locale",
    )
    locale_cookie_max_age: int = Field(
        60 * 60 * 24 * 365,
        description="Lifetime of the locale cookie in seconds",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class KVSettings(BaseSettings):
    """Durable key-value store (Upstash / Vercel KV REST API)."""

    url: str | None = Field(
        None,
        description="REST endpoint of the KV store",
    )
    token: str | None = Field(
        None,
        description="Bearer token for the KV REST API",
    )
    timeout_seconds: float = Field(
        2.0,
        description="Request timeout in seconds",
    )

    model_config = SettingsConfigDict(
        env_prefix="KV_REST_API_",
        case_sensitive=False,
    )

    @property
    def configured(self) -> bool:
        return bool(self.url and self.token)


class EmailSettings(BaseSettings):
    """Contact notification e-mail via the Resend HTTP API."""

    resend_api_key: str | None = Field(None, description="Resend API key")
    contact_to: str | None = Field(
        None,
        description="Comma-separated list of recipients",
    )
    contact_from: str | None = Field(None, description="Sender address")
    resend_base_url: str = Field(
        "https://api.resend.com",
        description="Resend API base URL",
    )
    timeout_seconds: float = Field(5.0, description="Request timeout in seconds")

    model_config = SettingsConfigDict(case_sensitive=False)

    @property
    def configured(self) -> bool:
        return bool(self.resend_api_key and self.contact_to and self.contact_from)


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="json or plain")
    output: str = Field("stdout", description="stdout or file")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(
        0,
        description="Rotate log file after this many bytes (0 disables rotation)",
    )
    backup_count: int = Field(3, description="Number of rotated files to keep")
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header carrying the correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Nested settings are created via default_factory so env loading works
    for each group independently.
    """

    app_env: str = APP_ENV
    app: AppSettings = Field(default_factory=AppSettings)
    kv: KVSettings = Field(default_factory=KVSettings)
    email: EmailSettings = Field(default_factory=EmailSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


settings = Settings()
