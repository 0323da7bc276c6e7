"""
Configuration management using Pydantic Settings.
Loads environment variables and provides type-safe configuration.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # PageSpeed Insights API key (PSI_KEY)
    psi_key: str


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Constants

# PageSpeed Insights
PSI_ENDPOINT = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"
PSI_STRATEGY = "mobile"

# No client-side timeout; the hosting platform bounds the request
PSI_REQUEST_TIMEOUT = None

# Front-end origins allowed to read responses
ALLOWED_ORIGINS = frozenset({
    "https://pinedesignmarketing.com",
    "https://www.pinedesignmarketing.com",
    "http://localhost:3000",  # dev only
})

ALLOWED_METHODS = "POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type"

# Unit conversions
MS_PER_SECOND = 1000
BYTES_PER_MB = 1024 * 1024
