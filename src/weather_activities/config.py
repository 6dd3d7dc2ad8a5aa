"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
Nothing is required: every setting has a default pointing at the public
Open-Meteo hosts.

## Optional Environment Variables

- OPEN_METEO_BASE_URL: Forecast API host (default: https://api.open-meteo.com)
- GEOCODING_BASE_URL: Geocoding API host (default: https://geocoding-api.open-meteo.com)
- CACHE_TTL_SECONDS: Lifetime of cached upstream responses (default: 300)
- FORCE_IPV4: Connect to upstream hosts over IPv4 only (default: true)
- LOG_LEVEL: Root log level (default: INFO)

## Example .env file

```
OPEN_METEO_BASE_URL=http://localhost:8080
CACHE_TTL_SECONDS=60
LOG_LEVEL=DEBUG
```
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Weather Activity Ranking"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="CORS allowed origins",
    )

    # Upstream provider
    open_meteo_base_url: str = Field(
        default="https://api.open-meteo.com",
        description="Open-Meteo forecast API host",
    )
    geocoding_base_url: str = Field(
        default="https://geocoding-api.open-meteo.com",
        description="Open-Meteo geocoding API host",
    )
    user_agent: str = "weather-activities/0.1.0"
    http_timeout_seconds: float = Field(default=10.0, gt=0)
    max_attempts: int = Field(default=3, ge=1, le=10)
    retry_backoff_seconds: float = Field(
        default=0.2,
        ge=0,
        description="Linear backoff step; attempt N waits N * step before retrying",
    )
    force_ipv4: bool = Field(
        default=True,
        description="Bind outgoing connections to 0.0.0.0 so only IPv4 is used",
    )

    # Caching
    cache_ttl_seconds: float = Field(default=300.0, gt=0)
    cache_max_entries: int = Field(default=1024, ge=1)
    city_registry_max_entries: int = Field(default=10_000, ge=1)

    # City search
    max_query_length: int = Field(default=50, ge=1)

    @field_validator("open_meteo_base_url", "geocoding_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs so paths can be appended directly."""
        return v.rstrip("/") if isinstance(v, str) else v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lower-case level names."""
        return v.upper() if isinstance(v, str) else v


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the CLI and the API server."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
