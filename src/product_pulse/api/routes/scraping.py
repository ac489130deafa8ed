"""Scraping routes: on-demand extraction runs and the scraped-record queries.

``POST /api/scraping/reviews`` and ``POST /api/scraping/products`` always
answer HTTP 200 with a list.  A run that failed to load the page returns
an empty list, the same as a page with nothing to extract; the cause is only
in the logs.

``POST /api/scraping/scheduled-run`` is the target of the daily Beat task.
It runs the scheduled scrape in this process, so its records are visible to
the query routes, and answers 204 whatever the outcome.
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, status

from product_pulse.api.dependencies import catalog_dep, orchestrator_dep, store_dep
from product_pulse.core.catalog import Catalog
from product_pulse.core.extraction_store import ExtractionStore
from product_pulse.core.schemas.records import ScrapedProduct, ScrapedReview
from product_pulse.core.schemas.requests import (
    ScrapedReviewRead,
    ScrapeProductsRequest,
    ScrapeReviewsRequest,
)
from product_pulse.scraper.orchestrator import ScrapeOrchestrator

logger = structlog.get_logger(__name__)

router = APIRouter()


def _with_product(reviews: list[ScrapedReview], catalog: Catalog) -> list[ScrapedReviewRead]:
    return [
        ScrapedReviewRead(
            **review.model_dump(),
            product=catalog.find_product(review.product_id),
        )
        for review in reviews
    ]


@router.post("/reviews", response_model=list[ScrapedReviewRead])
async def scrape_reviews(
    payload: ScrapeReviewsRequest,
    orchestrator: Annotated[ScrapeOrchestrator, Depends(orchestrator_dep)],
    catalog: Annotated[Catalog, Depends(catalog_dep)],
) -> list[ScrapedReviewRead]:
    logger.info(
        "scrape_reviews_requested",
        product_id=payload.product_id,
        source_url=payload.source_url,
    )
    reviews = await orchestrator.scrape_reviews(payload.product_id, payload.source_url)
    return _with_product(reviews, catalog)


@router.post("/products", response_model=list[ScrapedProduct])
async def scrape_products(
    payload: ScrapeProductsRequest,
    orchestrator: Annotated[ScrapeOrchestrator, Depends(orchestrator_dep)],
) -> list[ScrapedProduct]:
    logger.info("scrape_products_requested", source_url=payload.source_url)
    return await orchestrator.scrape_products(payload.source_url)


@router.post("/scheduled-run", status_code=status.HTTP_204_NO_CONTENT)
async def scheduled_run(
    orchestrator: Annotated[ScrapeOrchestrator, Depends(orchestrator_dep)],
) -> None:
    """Run the scheduled product scrape in this process; the Beat task calls this."""
    logger.info("scheduled_run_requested", source_url=orchestrator.scheduled_url)
    await orchestrator.scheduled_run()


@router.get("/reviews", response_model=list[ScrapedReviewRead])
async def list_scraped_reviews(
    product_id: Annotated[str, Query(min_length=1)],
    store: Annotated[ExtractionStore, Depends(store_dep)],
    catalog: Annotated[Catalog, Depends(catalog_dep)],
) -> list[ScrapedReviewRead]:
    return _with_product(store.query_by_product(product_id), catalog)


@router.get("/products", response_model=list[ScrapedProduct])
async def list_scraped_products(
    source: Annotated[str, Query(min_length=1)],
    store: Annotated[ExtractionStore, Depends(store_dep)],
) -> list[ScrapedProduct]:
    return store.query_by_source(source)
