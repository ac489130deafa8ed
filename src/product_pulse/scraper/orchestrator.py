"""Scrape orchestrator: fetch, extract and store, without raising to callers.

Each run is a single sequential pipeline::

    PageFetcher.fetch(url) -> MarkupSnapshot
        -> extract_reviews / extract_products -> candidates
        -> identity + shared timestamp -> ExtractionStore.append(batch)

Internally a run returns a :class:`RunOutcome` (``RunSucceeded`` with the
appended records, or ``RunFailed`` with the stage and cause), so tests can
inspect why a run produced nothing.  The public entry points
(:meth:`ScrapeOrchestrator.scrape_reviews`,
:meth:`ScrapeOrchestrator.scrape_products`,
:meth:`ScrapeOrchestrator.scheduled_run`) log a failure and collapse it to
an empty result.  A failed run appends nothing.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional, Protocol, Union

from product_pulse.core.extraction_store import ExtractionStore
from product_pulse.core.schemas.records import (
    Product,
    ScrapedProduct,
    ScrapedRecord,
    ScrapedReview,
    new_record_id,
    utc_now,
)
from product_pulse.scraper.content_extractor import extract_products, extract_reviews
from product_pulse.scraper.snapshot import MarkupSnapshot

logger = logging.getLogger(__name__)

STAGE_VALIDATE = "validate"
STAGE_FETCH = "fetch"
STAGE_EXTRACT = "extract"
STAGE_STORE = "store"


class SnapshotFetcher(Protocol):
    async def fetch(self, url: str) -> MarkupSnapshot: ...


ProductLookup = Callable[[str], Optional[Product]]


# ---------------------------------------------------------------------------
# Run outcomes
# ---------------------------------------------------------------------------


@dataclass
class RunSucceeded:
    """A run that appended ``records`` (possibly none) to the store."""

    source: str
    records: list[ScrapedRecord] = field(default_factory=list)

    ok = True


@dataclass
class RunFailed:
    """A run abandoned at ``stage``; nothing was appended."""

    source: str
    stage: str
    cause: BaseException

    ok = False

    @property
    def records(self) -> list[ScrapedRecord]:
        return []


RunOutcome = Union[RunSucceeded, RunFailed]


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class ScrapeOrchestrator:
    """Sequence fetcher, extractor and store for one extraction run at a time.

    Args:
        store: Process-wide extraction store the batches are appended to.
        fetcher: Anything with an async ``fetch(url) -> MarkupSnapshot``.
        product_lookup: Optional canonical product lookup.  An unknown
            product id is logged, not rejected.
        scheduled_url: Listing page used by :meth:`scheduled_run`.
    """

    def __init__(
        self,
        *,
        store: ExtractionStore,
        fetcher: SnapshotFetcher,
        product_lookup: Optional[ProductLookup] = None,
        scheduled_url: Optional[str] = None,
    ) -> None:
        self.store = store
        self.fetcher = fetcher
        self.product_lookup = product_lookup
        self.scheduled_url = scheduled_url

    # ------------------------------------------------------------------
    # Outcome-returning runs
    # ------------------------------------------------------------------

    async def run_reviews(self, product_id: str, source_url: str) -> RunOutcome:
        """Scrape reviews from ``source_url`` and tag them with ``product_id``."""
        started_at = utc_now()
        if not product_id or not source_url:
            return RunFailed(
                source=source_url,
                stage=STAGE_VALIDATE,
                cause=ValueError("product_id and source_url are required"),
            )

        self._check_product(product_id)

        snapshot = await self._fetch(source_url)
        if isinstance(snapshot, RunFailed):
            return snapshot

        try:
            candidates = extract_reviews(snapshot.html, source_url)
            timestamp = max(utc_now(), started_at)
            records: list[ScrapedRecord] = [
                ScrapedReview(
                    id=new_record_id(),
                    product_id=product_id,
                    source=source_url,
                    rating=candidate.rating,
                    comment=candidate.comment,
                    timestamp=timestamp,
                )
                for candidate in candidates
            ]
        except Exception as exc:  # noqa: BLE001
            return RunFailed(source=source_url, stage=STAGE_EXTRACT, cause=exc)

        return self._store(source_url, records)

    async def run_products(self, source_url: str) -> RunOutcome:
        """Scrape product listings from ``source_url``."""
        started_at = utc_now()
        if not source_url:
            return RunFailed(
                source=source_url,
                stage=STAGE_VALIDATE,
                cause=ValueError("source_url is required"),
            )

        snapshot = await self._fetch(source_url)
        if isinstance(snapshot, RunFailed):
            return snapshot

        try:
            candidates = extract_products(snapshot.html, source_url)
            tiers = Counter(candidate.tier for candidate in candidates)
            if tiers:
                logger.info(
                    "scraper: product candidates by tier for %s: %s",
                    source_url,
                    ", ".join(f"{tier}={count}" for tier, count in tiers.items()),
                )
            timestamp = max(utc_now(), started_at)
            records: list[ScrapedRecord] = [
                ScrapedProduct(
                    id=new_record_id(),
                    name=candidate.name,
                    price=candidate.price,
                    description=candidate.description,
                    source=source_url,
                    timestamp=timestamp,
                )
                for candidate in candidates
            ]
        except Exception as exc:  # noqa: BLE001
            return RunFailed(source=source_url, stage=STAGE_EXTRACT, cause=exc)

        return self._store(source_url, records)

    def _check_product(self, product_id: str) -> None:
        if self.product_lookup is None:
            return
        try:
            known = self.product_lookup(product_id) is not None
        except Exception as exc:  # noqa: BLE001
            logger.warning("scraper: product lookup failed for %s: %s", product_id, exc)
            return
        if not known:
            logger.warning(
                "scraper: product %s is not in the catalog; storing reviews with the raw id",
                product_id,
            )

    async def _fetch(self, source_url: str) -> Union[MarkupSnapshot, RunFailed]:
        try:
            return await self.fetcher.fetch(source_url)
        except Exception as exc:  # noqa: BLE001
            return RunFailed(source=source_url, stage=STAGE_FETCH, cause=exc)

    def _store(self, source_url: str, records: list[ScrapedRecord]) -> RunOutcome:
        try:
            self.store.append(records)
        except Exception as exc:  # noqa: BLE001
            return RunFailed(source=source_url, stage=STAGE_STORE, cause=exc)
        return RunSucceeded(source=source_url, records=records)

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    async def scrape_reviews(self, product_id: str, source_url: str) -> list[ScrapedReview]:
        """Scrape reviews; returns the appended records or ``[]`` on any failure."""
        outcome = await self.run_reviews(product_id, source_url)
        if isinstance(outcome, RunFailed):
            _log_failure("review scraping", outcome)
            return []
        logger.info(
            "scraper: scraped %d reviews for product %s from %s",
            len(outcome.records),
            product_id,
            source_url,
        )
        return [r for r in outcome.records if isinstance(r, ScrapedReview)]

    async def scrape_products(self, source_url: str) -> list[ScrapedProduct]:
        """Scrape products; returns the appended records or ``[]`` on any failure."""
        outcome = await self.run_products(source_url)
        if isinstance(outcome, RunFailed):
            _log_failure("product scraping", outcome)
            return []
        logger.info(
            "scraper: scraped %d products from %s", len(outcome.records), source_url
        )
        return [p for p in outcome.records if isinstance(p, ScrapedProduct)]

    async def scheduled_run(self) -> None:
        """Product-mode run against the configured URL; results are only logged."""
        if not self.scheduled_url:
            logger.error("scraper: scheduled run skipped, no scheduled URL configured")
            return

        logger.info("scraper: running scheduled product scrape of %s", self.scheduled_url)
        outcome = await self.run_products(self.scheduled_url)
        if isinstance(outcome, RunFailed):
            _log_failure("scheduled scraping", outcome)
            return
        logger.info(
            "scraper: scheduled run scraped %d products from %s",
            len(outcome.records),
            self.scheduled_url,
        )


def _log_failure(what: str, outcome: RunFailed) -> None:
    logger.error(
        "scraper: %s failed for %s at %s stage: %s",
        what,
        outcome.source,
        outcome.stage,
        outcome.cause,
    )
