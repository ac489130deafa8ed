"""Pydantic request/response schemas for the HTTP API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from product_pulse.core.schemas.records import Product, ScrapedReview


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str


class FeedbackCreate(BaseModel):
    user_id: str
    product_id: str
    rating: int
    comment: str


class AverageRatingRead(BaseModel):
    product_id: str
    average_rating: float


class ScrapeReviewsRequest(BaseModel):
    """Payload for an on-demand review scrape.

    Attributes:
        product_id: Canonical product the reviews are tagged with.  Not
            required to exist in the catalog.
        source_url: Page to scrape.  Not validated as a well-formed URL.
    """

    product_id: str = Field(..., min_length=1)
    source_url: str = Field(..., min_length=1)


class ScrapeProductsRequest(BaseModel):
    source_url: str = Field(..., min_length=1)


class ScrapedReviewRead(ScrapedReview):
    """A scraped review with its canonical product embedded when known."""

    product: Optional[Product] = None
