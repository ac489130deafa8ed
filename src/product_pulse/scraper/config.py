"""Constants and tuning parameters for the extraction pipeline."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------

#: Seconds allowed for the primary navigation attempt.
DEFAULT_PRIMARY_TIMEOUT: float = 60.0

#: Seconds allowed for the single fallback navigation attempt.
DEFAULT_FALLBACK_TIMEOUT: float = 30.0

#: Primary completion condition: the network has been idle for a short
#: settle period.
DEFAULT_PRIMARY_WAIT_UNTIL: str = "networkidle"

#: Fallback completion condition: the initial DOM has been parsed.
DEFAULT_FALLBACK_WAIT_UNTIL: str = "domcontentloaded"

#: User-agent string presented by the headless browser.
USER_AGENT: str = (
    "Mozilla/5.0 (X11; Linux x86_64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# ---------------------------------------------------------------------------
# Review markers
# ---------------------------------------------------------------------------

REVIEW_CONTAINER_SELECTOR: str = ".review"
REVIEW_RATING_SELECTOR: str = ".rating"
REVIEW_COMMENT_SELECTOR: str = ".comment"

#: Rating assigned when the rating marker is missing or not an integer.
DEFAULT_RATING: int = 0

#: Comment assigned when the comment marker is missing or blank.
NO_COMMENT: str = "No comment"

# ---------------------------------------------------------------------------
# Product markers
# ---------------------------------------------------------------------------

#: Tag names scanned as candidate product containers.
PRODUCT_CONTAINER_TAGS: tuple[str, ...] = ("div", "article", "section")

#: A container qualifies when its lower-cased class attribute contains any
#: of these substrings.
PRODUCT_CLASS_KEYWORDS: tuple[str, ...] = ("product", "item", "card", "tile")

#: Placeholder for a product whose name could not be resolved.  Candidates
#: carrying it are discarded.
UNRESOLVED_NAME: str = "Unknown"

#: Ordered selector groups for the product name.  Groups are tried in order
#: and the first element with non-blank text wins.
GENERIC_NAME_SELECTORS: tuple[str, ...] = (
    '[class*="name"], [class*="title"]',
    "h1, h2, h3",
    ".css-1ma869u",
)

GENERIC_PRICE_SELECTORS: tuple[str, ...] = (
    '[class*="price"], [class*="cost"]',
    ".price, .amount",
    ".css-1f35s9q span",
)

GENERIC_DESCRIPTION_SELECTORS: tuple[str, ...] = (
    '[class*="description"], [class*="details"]',
    "p",
    ".css-l6xvpz",
)
