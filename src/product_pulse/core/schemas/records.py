"""Record types shared by the catalog, the extraction store and the API.

Canonical entities (``User``, ``Product``, ``Feedback``) are created through
explicit catalog calls.  Scraped entities (``ScrapedReview``,
``ScrapedProduct``) are created only by the scrape orchestrator.  All models
are frozen: a record never changes after construction.

Construction of an incomplete scraped record fails with
``pydantic.ValidationError``:

- ``source`` must be a non-blank string.
- ``ScrapedProduct.name`` must be non-blank and must not be the unresolved
  name placeholder.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from product_pulse.scraper.config import UNRESOLVED_NAME


def new_record_id() -> str:
    """Return a fresh, process-unique record identity."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(tz=timezone.utc)


class _FrozenRecord(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Canonical entities
# ---------------------------------------------------------------------------


class User(_FrozenRecord):
    """A registered first-party user."""

    id: str = Field(default_factory=new_record_id)
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)


class Product(_FrozenRecord):
    """A canonical product that feedback and scraped reviews refer to."""

    id: str = Field(default_factory=new_record_id)
    name: str = Field(..., min_length=1)
    description: str


class Feedback(_FrozenRecord):
    """First-party feedback left by a user on a canonical product."""

    id: str = Field(default_factory=new_record_id)
    user_id: str
    product_id: str
    rating: int
    comment: str
    timestamp: datetime = Field(default_factory=utc_now)


# ---------------------------------------------------------------------------
# Scraped entities
# ---------------------------------------------------------------------------


class ScrapedReview(_FrozenRecord):
    """A review recovered from a third-party page.

    Attributes:
        id: Process-unique identity assigned by the orchestrator.
        product_id: Canonical product the review was requested for.  Stored
            as given, whether or not the catalog knows it.
        source: URL the review was scraped from.
        rating: Integer rating, ``0`` when the page carried none.
        comment: Review text, or the no-comment placeholder.
        timestamp: Capture time of the extraction run.
    """

    id: str = Field(default_factory=new_record_id)
    product_id: str = Field(..., min_length=1)
    source: str
    rating: int
    comment: str
    timestamp: datetime

    @field_validator("source")
    @classmethod
    def _source_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("source must not be blank")
        return value


class ScrapedProduct(_FrozenRecord):
    """A product listing recovered from a third-party page.

    Not linked to a canonical ``Product``.  ``price`` is free text exactly as
    shown on the page; currency and format are not normalised.
    """

    id: str = Field(default_factory=new_record_id)
    name: str
    price: Optional[str] = None
    description: Optional[str] = None
    source: str
    timestamp: datetime

    @field_validator("source")
    @classmethod
    def _source_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("source must not be blank")
        return value

    @field_validator("name")
    @classmethod
    def _name_resolved(cls, value: str) -> str:
        if not value.strip() or value == UNRESOLVED_NAME:
            raise ValueError("name is unresolved")
        return value


ScrapedRecord = Union[ScrapedReview, ScrapedProduct]
