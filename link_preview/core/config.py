"""Application configuration using Pydantic Settings.

Loads settings from environment variables and .env file.
All settings have sensible defaults for local development.
"""

from __future__ import annotations

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Valid Python logging levels
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


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

    # --- Link Content Extraction ---
    link_max_characters: int = 8000  # Default character budget for extracted content
    link_fetch_timeout_ms: int = 5000  # Per-operation network timeout
    link_min_html_content_characters: int = 200  # Below this, HTML counts as thin
    link_max_response_bytes: int = 20 * 1024 * 1024  # 20 MB max HTML response
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36 link-preview/0.1"
    )

    # --- Firecrawl (scraping fallback) ---
    # Fallback is disabled entirely when no API key is configured
    firecrawl_api_key: str | None = None
    firecrawl_base_url: str = "https://api.firecrawl.dev"

    # --- YouTube transcripts ---
    apify_api_token: str | None = None
    apify_transcript_actor: str = "pintostudio~youtube-transcript-scraper"
    youtube_transcript_languages: str = "en,en-US,en-GB"

    def get_transcript_languages(self) -> list[str]:
        """Parse youtube_transcript_languages as a comma-separated list."""
        return [
            lang.strip()
            for lang in self.youtube_transcript_languages.split(",")
            if lang.strip()
        ]


settings = Settings()
