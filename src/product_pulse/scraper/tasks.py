"""Celery tasks for the extraction pipeline.

The extraction store lives in the API process, so these tasks do not scrape
in the worker.  They ask the API to run the scrape, which appends the
records to the same store that ``GET /api/scraping/*`` reads.

``scheduled_product_scrape_task``
    Beat target.  Calls ``POST /api/scraping/scheduled-run``, which runs
    :meth:`ScrapeOrchestrator.scheduled_run` against the configured listing
    page.  Fire-and-forget: failures are logged, never raised, and nothing
    is returned.

``scrape_products_task``
    On-demand product-mode run for one URL via ``POST
    /api/scraping/products``.  Returns the number of records appended
    (``0`` on any failure).

Retry policy:
    ``max_retries=0``.  The fetcher already makes one primary and one
    fallback navigation attempt; a failed run is abandoned.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import httpx

from product_pulse.config.settings import get_settings
from product_pulse.workers.celery_app import celery_app

logger = logging.getLogger(__name__)

SCHEDULED_RUN_PATH = "/api/scraping/scheduled-run"
SCRAPE_PRODUCTS_PATH = "/api/scraping/products"


def _api_client() -> httpx.AsyncClient:
    settings = get_settings()
    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=settings.api_request_timeout,
    )


async def _post(path: str, payload: Optional[dict[str, Any]] = None) -> httpx.Response:
    async with _api_client() as client:
        response = await client.post(path, json=payload)
        response.raise_for_status()
        return response


@celery_app.task(
    name="product_pulse.scraper.tasks.scheduled_product_scrape_task",
    bind=False,
    acks_late=True,
    max_retries=0,
)
def scheduled_product_scrape_task() -> None:
    """Trigger the scheduled product scrape in the API process."""
    logger.info("scraper: triggering daily product scrape")
    try:
        asyncio.run(_post(SCHEDULED_RUN_PATH))
    except Exception as exc:  # noqa: BLE001
        logger.error("scraper: scheduled scrape task failed: %s", exc)


@celery_app.task(
    name="product_pulse.scraper.tasks.scrape_products_task",
    bind=True,
    acks_late=True,
    max_retries=0,
)
def scrape_products_task(self: Any, source_url: str) -> dict[str, Any]:
    """Scrape products from ``source_url`` through the API.

    Returns:
        Dict with ``source_url`` and the number of ``records`` appended.
    """
    logger.info("scraper: scrape_products_task %s started for %s", self.request.id, source_url)
    try:
        response = asyncio.run(_post(SCRAPE_PRODUCTS_PATH, {"source_url": source_url}))
        records = len(response.json())
    except Exception as exc:  # noqa: BLE001
        logger.error("scraper: scrape_products_task failed for %s: %s", source_url, exc)
        records = 0
    return {"source_url": source_url, "records": records}
