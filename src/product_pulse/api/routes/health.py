"""Health check route handler.

``GET /api/health`` is a shallow liveness check that also reports how many
scraped records the in-memory store holds.  It never raises HTTP 5xx.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any

from fastapi import APIRouter, Depends

from product_pulse import __version__
from product_pulse.api.dependencies import store_dep
from product_pulse.core.extraction_store import ExtractionStore
from product_pulse.scraper.site_rules import list_rules

router = APIRouter(tags=["system"])


@router.get("/api/health")
async def health(
    store: Annotated[ExtractionStore, Depends(store_dep)],
) -> dict[str, Any]:
    return {
        "status": "ok",
        "version": __version__,
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        "scraped_reviews": store.review_count,
        "scraped_products": store.product_count,
        "site_rules": [rule.name for rule in list_rules()],
    }
