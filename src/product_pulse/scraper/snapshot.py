"""Immutable rendered-markup snapshot handed from the fetcher to the extractor."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone


class NavigationStrategy(str, enum.Enum):
    """Which navigation attempt produced a snapshot."""

    PRIMARY = "primary"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class MarkupSnapshot:
    """The fully rendered HTML of a page at one point in time.

    Attributes:
        html: Page markup as serialised by the browser.
        url: URL that was requested.
        final_url: URL after redirects, as reported by the browser.
        strategy: Navigation attempt that satisfied its wait condition.
        captured_at: UTC time the markup was read from the page.
    """

    html: str
    url: str
    final_url: str | None = None
    strategy: NavigationStrategy = NavigationStrategy.PRIMARY
    captured_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))

