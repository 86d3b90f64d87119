"""Application configuration using Pydantic Settings.

Loads settings from environment variables and .env file.
All settings have sensible defaults for local development.
"""

from __future__ import annotations

import json
import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Valid Python logging levels
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _parse_list(raw: str) -> list[str]:
    """Parse a JSON list or comma-separated string."""
    raw = raw.strip()
    if raw.startswith("["):
        return [str(item).strip() for item in json.loads(raw) if str(item).strip()]
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseSettings):
    """Service-wide configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Server ---
    service_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 15020
    debug: bool = False

    # --- Logging ---
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level to uppercase.

        Falls back to INFO if an invalid level is provided.
        """
        normalized = v.upper().strip()
        if normalized not in VALID_LOG_LEVELS:
            # Log a warning (to stderr since logging may not be configured yet)
            import sys

            print(
                f"WARNING: Invalid LOG_LEVEL '{v}'. "
                f"Valid levels are: {', '.join(sorted(VALID_LOG_LEVELS))}. "
                "Falling back to INFO.",
                file=sys.stderr,
            )
            return "INFO"
        return normalized

    def get_log_level_int(self) -> int:
        """Return the integer value of the configured log level."""
        return getattr(logging, self.log_level, logging.INFO)

    # --- Remote scraping (Firecrawl) ---
    # Unset key disables the remote tier; local extraction still runs
    firecrawl_api_key: str | None = None
    firecrawl_api_url: str = "https://api.firecrawl.dev"
    remote_timeout_seconds: float = 60.0

    # --- Local fetch ---
    local_fetch_timeout_seconds: float = 60.0
    max_redirects: int = 10
    max_response_bytes: int = 20 * 1024 * 1024  # 20 MB max page body
    user_agent: str = "Mozilla/5.0 (compatible; SEOExtractor/1.0)"

    # Extra chrome selectors (JSON list or comma-separated); empty = built-in list
    chrome_selectors: str = ""

    def get_chrome_selectors(self) -> list[str]:
        """Parse chrome_selectors into an ordered list of CSS selectors."""
        return _parse_list(self.chrome_selectors)

    # --- Quality gate for remote results ---
    min_accept_score: int = 50
    min_accept_text_length: int = 400

    # --- URL validation ---
    max_url_length: int = 2048

    # --- CORS ---
    cors_origins: str = "http://localhost:3000"

    def get_cors_origins(self) -> list[str]:
        """Parse cors_origins as JSON list or comma-separated string."""
        return _parse_list(self.cors_origins)


settings = Settings()
