"""Application settings loaded from environment variables.

Uses Pydantic Settings v2 for validated, type-safe configuration.
Every tunable of the extraction pipeline (navigation timeouts, wait
conditions, the scheduled target URL) is read through this module so that
tests can swap values without touching the scraper code.

Usage::

    from product_pulse.config.settings import get_settings

    settings = get_settings()
    timeout = settings.primary_navigation_timeout
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from product_pulse.scraper.config import (
    DEFAULT_FALLBACK_TIMEOUT,
    DEFAULT_FALLBACK_WAIT_UNTIL,
    DEFAULT_PRIMARY_TIMEOUT,
    DEFAULT_PRIMARY_WAIT_UNTIL,
    USER_AGENT,
)


class Settings(BaseSettings):
    """Application-wide configuration backed by environment variables and an optional .env file.

    Every field has a default, so the service starts without any environment
    in development.  Timeouts are expressed in seconds.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Application behaviour
    # ------------------------------------------------------------------

    app_name: str = "Product Pulse"
    """Human-readable application name shown in the OpenAPI docs."""

    debug: bool = False
    """Enable FastAPI debug mode and verbose error responses.  Never True in production."""

    log_level: str = "INFO"
    """Logging verbosity.  One of: DEBUG, INFO, WARNING, ERROR, CRITICAL."""

    allowed_origins: list[str] = ["http://localhost:4000"]
    """Origins permitted by the CORS middleware."""

    # ------------------------------------------------------------------
    # Page fetcher
    # ------------------------------------------------------------------

    primary_navigation_timeout: float = Field(default=DEFAULT_PRIMARY_TIMEOUT, gt=0)
    """Seconds allowed for the primary (network idle) navigation attempt."""

    fallback_navigation_timeout: float = Field(default=DEFAULT_FALLBACK_TIMEOUT, gt=0)
    """Seconds allowed for the single fallback (DOM parsed) navigation attempt."""

    primary_wait_until: str = DEFAULT_PRIMARY_WAIT_UNTIL
    """Playwright ``wait_until`` condition for the primary attempt."""

    fallback_wait_until: str = DEFAULT_FALLBACK_WAIT_UNTIL
    """Playwright ``wait_until`` condition for the fallback attempt."""

    browser_headless: bool = True
    """Run Chromium without a visible window.  Disable only for local debugging."""

    browser_user_agent: str = USER_AGENT
    """User-agent string presented by every browser context."""

    # ------------------------------------------------------------------
    # Scheduled extraction
    # ------------------------------------------------------------------

    scheduled_scrape_url: str = "http://localhost:8000/dior-product-list.html"
    """Listing page scraped in product mode by the daily scheduled run."""

    scheduled_scrape_hour: int = Field(default=0, ge=0, le=23)
    """Hour of day (in ``scheduler_timezone``) at which the scheduled run fires."""

    scheduled_scrape_minute: int = Field(default=0, ge=0, le=59)
    """Minute past ``scheduled_scrape_hour`` at which the scheduled run fires."""

    scheduler_timezone: str = "UTC"
    """Timezone used by Celery Beat to interpret the schedule."""

    api_base_url: str = "http://localhost:4000"
    """Base URL of the API process.  Worker tasks trigger runs through it so
    the records land in the store the API queries."""

    api_request_timeout: float = Field(default=150.0, gt=0)
    """Seconds a worker task waits for the API to finish a triggered run."""

    # ------------------------------------------------------------------
    # Celery task queue
    # ------------------------------------------------------------------

    celery_broker_url: str = "redis://localhost:6379/1"
    """Redis URL used as Celery's message broker."""

    celery_result_backend: str = "redis://localhost:6379/2"
    """Redis URL used to store Celery task results."""

    @model_validator(mode="after")
    def _check_timeouts(self) -> "Settings":
        if self.fallback_navigation_timeout > self.primary_navigation_timeout:
            raise ValueError(
                "fallback_navigation_timeout must not exceed primary_navigation_timeout"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the cached application settings singleton.

    Uses ``functools.lru_cache`` so that Pydantic Settings reads the environment
    and .env file exactly once per process lifetime.  In tests, call
    ``get_settings.cache_clear()`` after patching environment variables.

    Returns:
        Settings: The validated settings object.
    """
    return Settings()
