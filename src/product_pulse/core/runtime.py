"""Process-wide instances of the stores and the scrape orchestrator.

Each getter builds its object once per process (``functools.lru_cache``),
so the API handlers and the Celery tasks running in the same process share
one :class:`ExtractionStore` and one :class:`Catalog`.  Tests either
override the FastAPI dependencies or call ``<getter>.cache_clear()``.
"""

from __future__ import annotations

from functools import lru_cache

from product_pulse.config.settings import get_settings
from product_pulse.core.catalog import Catalog
from product_pulse.core.extraction_store import ExtractionStore
from product_pulse.scraper.orchestrator import ScrapeOrchestrator
from product_pulse.scraper.page_fetcher import PageFetcher


@lru_cache
def get_extraction_store() -> ExtractionStore:
    return ExtractionStore()


@lru_cache
def get_catalog() -> Catalog:
    return Catalog()


@lru_cache
def get_orchestrator() -> ScrapeOrchestrator:
    """Return the orchestrator wired to the process-wide store and catalog."""
    settings = get_settings()
    return ScrapeOrchestrator(
        store=get_extraction_store(),
        fetcher=PageFetcher.from_settings(settings),
        product_lookup=get_catalog().find_product,
        scheduled_url=settings.scheduled_scrape_url,
    )


def reset_runtime() -> None:
    """Drop every cached instance so the next call builds fresh ones."""
    get_orchestrator.cache_clear()
    get_catalog.cache_clear()
    get_extraction_store.cache_clear()
