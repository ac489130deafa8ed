"""Heuristic extraction of reviews and products from rendered HTML.

Two independent modes share the same shape: take the markup and the source
identifier, return candidate records without identity or timestamp (the
orchestrator assigns those).

Reviews
    Every ``.review`` element yields one candidate.  Its rating is the
    leading integer of the nested ``.rating`` text (``0`` when missing or
    unparsable) and its comment is the nested ``.comment`` text (the
    no-comment placeholder when missing or blank).  There is no fallback.

Products
    *Generic tier*: every ``div``/``article``/``section`` whose lower-cased
    class attribute contains ``product``, ``item``, ``card`` or ``tile`` is a
    container.  Name, price and description are resolved independently by
    trying ordered selector groups and keeping the first non-blank text.
    Candidates whose name stays unresolved are dropped.

    *Site tier*: runs only when the generic tier accepted nothing **and** a
    registered :class:`~product_pulse.scraper.site_rules.SiteRule` matches
    the source.  The rule's own container and field selectors replace the
    generic ones.

Matching nothing is a valid outcome and yields an empty list.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from product_pulse.scraper.config import (
    DEFAULT_RATING,
    GENERIC_DESCRIPTION_SELECTORS,
    GENERIC_NAME_SELECTORS,
    GENERIC_PRICE_SELECTORS,
    NO_COMMENT,
    PRODUCT_CLASS_KEYWORDS,
    PRODUCT_CONTAINER_TAGS,
    REVIEW_COMMENT_SELECTOR,
    REVIEW_CONTAINER_SELECTOR,
    REVIEW_RATING_SELECTOR,
    UNRESOLVED_NAME,
)
from product_pulse.scraper.site_rules import SiteRule, find_rule

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?[0-9]+)")

GENERIC_TIER = "generic"

# ---------------------------------------------------------------------------
# Candidate dataclasses
# ---------------------------------------------------------------------------


@dataclass
class ReviewCandidate:
    """A review recovered from markup, before identity is assigned."""

    rating: int
    comment: str


@dataclass
class ProductCandidate:
    """A product recovered from markup, before identity is assigned.

    Attributes:
        name: Resolved product name; never the unresolved placeholder.
        price: Price text as displayed, or ``""``.
        description: Description text, or ``""``.
        tier: ``"generic"`` or the name of the site rule that produced it.
    """

    name: str
    price: str
    description: str
    tier: str = GENERIC_TIER


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def _text(element: Tag | None) -> str:
    if element is None:
        return ""
    return element.get_text().strip()


def parse_rating(raw: str | None) -> int:
    """Return the leading integer of ``raw``, or the default rating.

    ``"5"`` → 5, ``" 4 stars"`` → 4, ``"4.5"`` → 4, ``"five"`` → 0.
    """
    if not raw:
        return DEFAULT_RATING
    match = _LEADING_INT_RE.match(raw)
    if match is None:
        return DEFAULT_RATING
    return int(match.group(1))


def first_text(container: Tag, selector_groups: Sequence[str]) -> str:
    """Return the first non-blank text found by the ordered selector groups.

    Each group is a CSS selector list; its matches are visited in document
    order.  Later groups are consulted only when every match of the earlier
    ones is blank.
    """
    for group in selector_groups:
        for element in container.select(group):
            text = _text(element)
            if text:
                return text
    return ""


def _is_product_container(element: Tag) -> bool:
    classes = element.get("class")
    if not classes:
        return False
    if isinstance(classes, str):
        class_attr = classes.lower()
    else:
        class_attr = " ".join(classes).lower()
    return any(keyword in class_attr for keyword in PRODUCT_CLASS_KEYWORDS)


def _resolve_product(
    container: Tag,
    name_selectors: Sequence[str],
    price_selectors: Sequence[str],
    description_selectors: Sequence[str],
    tier: str,
) -> ProductCandidate | None:
    name = first_text(container, name_selectors) or UNRESOLVED_NAME
    if name == UNRESOLVED_NAME:
        return None
    return ProductCandidate(
        name=name,
        price=first_text(container, price_selectors),
        description=first_text(container, description_selectors),
        tier=tier,
    )


# ---------------------------------------------------------------------------
# Public extraction functions
# ---------------------------------------------------------------------------


def extract_reviews(html: str, source: str) -> list[ReviewCandidate]:
    """Extract review candidates from ``html``.

    Args:
        html: Rendered page markup.
        source: Source identifier, used for logging only.

    Returns:
        One candidate per review container, in document order.
    """
    soup = _parse(html)
    candidates: list[ReviewCandidate] = []
    for element in soup.select(REVIEW_CONTAINER_SELECTOR):
        rating = parse_rating(_text(element.select_one(REVIEW_RATING_SELECTOR)))
        comment = _text(element.select_one(REVIEW_COMMENT_SELECTOR)) or NO_COMMENT
        candidates.append(ReviewCandidate(rating=rating, comment=comment))

    logger.debug("scraper: %d review candidates from %s", len(candidates), source)
    return candidates


def extract_products_generic(soup: BeautifulSoup) -> list[ProductCandidate]:
    """Run the generic product tier over a parsed document."""
    candidates: list[ProductCandidate] = []
    discarded = 0
    for container in soup.find_all(list(PRODUCT_CONTAINER_TAGS)):
        if not _is_product_container(container):
            continue
        candidate = _resolve_product(
            container,
            GENERIC_NAME_SELECTORS,
            GENERIC_PRICE_SELECTORS,
            GENERIC_DESCRIPTION_SELECTORS,
            GENERIC_TIER,
        )
        if candidate is None:
            discarded += 1
            continue
        candidates.append(candidate)

    if discarded:
        logger.debug("scraper: discarded %d containers with unresolved names", discarded)
    return candidates


def extract_products_for_site(soup: BeautifulSoup, rule: SiteRule) -> list[ProductCandidate]:
    """Run a site-specific fallback rule over a parsed document."""
    containers = soup.select(rule.container_selector)
    logger.info("scraper: found %d %s product tiles", len(containers), rule.name)

    candidates: list[ProductCandidate] = []
    for container in containers:
        candidate = _resolve_product(
            container,
            (rule.name_selector,),
            (rule.price_selector,),
            (rule.description_selector,),
            rule.name,
        )
        if candidate is not None:
            candidates.append(candidate)

    logger.info("scraper: extracted %d %s products", len(candidates), rule.name)
    return candidates


def extract_products(html: str, source: str) -> list[ProductCandidate]:
    """Extract product candidates from ``html`` using the tiered heuristics.

    Args:
        html: Rendered page markup.
        source: Source identifier; gates the site-specific tier.

    Returns:
        Accepted candidates from the generic tier or, if it found none and a
        site rule matches ``source``, from that rule.
    """
    soup = _parse(html)
    candidates = extract_products_generic(soup)
    logger.debug("scraper: %d generic product candidates from %s", len(candidates), source)
    if candidates:
        return candidates

    rule = find_rule(source)
    if rule is None:
        return []

    logger.info("scraper: generic tier found nothing on %s; applying '%s' rule", source, rule.name)
    return extract_products_for_site(soup, rule)
