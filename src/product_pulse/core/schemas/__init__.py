"""Pydantic record and request schemas for Product Pulse."""

from __future__ import annotations

from product_pulse.core.schemas.records import (
    Feedback,
    Product,
    ScrapedProduct,
    ScrapedRecord,
    ScrapedReview,
    User,
)

__all__ = [
    "Feedback",
    "Product",
    "ScrapedProduct",
    "ScrapedRecord",
    "ScrapedReview",
    "User",
]
