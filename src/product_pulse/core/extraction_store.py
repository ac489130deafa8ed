"""Append-only in-memory store for scraped records.

One ``ExtractionStore`` is created per process (see
:func:`product_pulse.core.runtime.get_extraction_store`) and injected into
the scrape orchestrator.  It owns two ordered collections:

- scraped reviews, retrieved by the canonical product id they were tagged
  with;
- scraped products, retrieved by the source they were scraped from.

There is no update, delete or uniqueness check: scraping the same URL twice
appends two batches.  Appends are serialised with a lock and validated before
any record is written, so concurrent runs never interleave or half-write a
batch.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from product_pulse.core.exceptions import RecordValidationError
from product_pulse.core.schemas.records import (
    ScrapedProduct,
    ScrapedRecord,
    ScrapedReview,
)

logger = logging.getLogger(__name__)


class ExtractionStore:
    """Append-only collection of scraped reviews and products."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._reviews: list[ScrapedReview] = []
        self._products: list[ScrapedProduct] = []

    def append(self, records: Iterable[ScrapedRecord]) -> int:
        """Append a batch of scraped records, preserving their order.

        The whole batch is checked before the lock is taken; a batch with a
        foreign object in it is rejected without writing anything.

        Args:
            records: ``ScrapedReview`` and/or ``ScrapedProduct`` instances.

        Returns:
            Number of records appended.

        Raises:
            RecordValidationError: If any item is not a scraped record.
        """
        batch = list(records)
        reviews: list[ScrapedReview] = []
        products: list[ScrapedProduct] = []
        for record in batch:
            if isinstance(record, ScrapedReview):
                reviews.append(record)
            elif isinstance(record, ScrapedProduct):
                products.append(record)
            else:
                raise RecordValidationError(
                    f"cannot store object of type {type(record).__name__}"
                )

        with self._lock:
            self._reviews.extend(reviews)
            self._products.extend(products)

        logger.debug(
            "store: appended %d reviews and %d products", len(reviews), len(products)
        )
        return len(batch)

    def query_by_source(self, source: str) -> list[ScrapedProduct]:
        """Return every scraped product whose source equals ``source``."""
        with self._lock:
            return [p for p in self._products if p.source == source]

    def query_by_product(self, product_id: str) -> list[ScrapedReview]:
        """Return every scraped review tagged with ``product_id``."""
        with self._lock:
            return [r for r in self._reviews if r.product_id == product_id]

    @property
    def review_count(self) -> int:
        with self._lock:
            return len(self._reviews)

    @property
    def product_count(self) -> int:
        with self._lock:
            return len(self._products)

    def __len__(self) -> int:
        with self._lock:
            return len(self._reviews) + len(self._products)
