"""Playwright-based headless browser fetcher producing markup snapshots.

Each :meth:`PageFetcher.fetch` call launches one isolated Chromium instance,
loads the URL and reads back the rendered DOM.  Navigation is attempted at
most twice on the same page:

1. **Primary** — ``wait_until="networkidle"`` with the long timeout
   (60 s by default).
2. **Fallback** — only if the primary attempt failed:
   ``wait_until="domcontentloaded"`` with the short timeout (30 s by
   default).  The primary strategy is never retried.

If both attempts fail, :class:`~product_pulse.core.exceptions.NavigationFailedError`
is raised.  Page, context and browser are closed in ``finally`` blocks on
every exit path.  A Playwright error while closing is logged and does not
replace the fetched snapshot or the navigation error.

Install Playwright and download the Chromium browser binary::

    pip install playwright
    playwright install chromium
"""

from __future__ import annotations

import logging
from typing import Any

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, async_playwright

from product_pulse.config.settings import Settings
from product_pulse.core.exceptions import NavigationFailedError
from product_pulse.scraper.config import (
    DEFAULT_FALLBACK_TIMEOUT,
    DEFAULT_FALLBACK_WAIT_UNTIL,
    DEFAULT_PRIMARY_TIMEOUT,
    DEFAULT_PRIMARY_WAIT_UNTIL,
    USER_AGENT,
)
from product_pulse.scraper.snapshot import MarkupSnapshot, NavigationStrategy

logger = logging.getLogger(__name__)


async def _close_quietly(resource: Any, what: str, url: str) -> None:
    """Close a Playwright resource without letting a close error replace the outcome."""
    try:
        await resource.close()
    except PlaywrightError as exc:
        logger.warning("scraper: failed to close %s for %s: %s", what, url, exc)


class PageFetcher:
    """Load a URL in headless Chromium with a primary/fallback wait strategy.

    Args:
        primary_timeout: Seconds allowed for the primary attempt.
        fallback_timeout: Seconds allowed for the fallback attempt.
        primary_wait_until: Playwright completion condition for the primary
            attempt.
        fallback_wait_until: Playwright completion condition for the fallback
            attempt.
        headless: Launch the browser without a window.
        user_agent: User-agent string for the browser context.
    """

    def __init__(
        self,
        *,
        primary_timeout: float = DEFAULT_PRIMARY_TIMEOUT,
        fallback_timeout: float = DEFAULT_FALLBACK_TIMEOUT,
        primary_wait_until: str = DEFAULT_PRIMARY_WAIT_UNTIL,
        fallback_wait_until: str = DEFAULT_FALLBACK_WAIT_UNTIL,
        headless: bool = True,
        user_agent: str = USER_AGENT,
    ) -> None:
        self.primary_timeout = primary_timeout
        self.fallback_timeout = fallback_timeout
        self.primary_wait_until = primary_wait_until
        self.fallback_wait_until = fallback_wait_until
        self.headless = headless
        self.user_agent = user_agent

    @classmethod
    def from_settings(cls, settings: Settings) -> PageFetcher:
        return cls(
            primary_timeout=settings.primary_navigation_timeout,
            fallback_timeout=settings.fallback_navigation_timeout,
            primary_wait_until=settings.primary_wait_until,
            fallback_wait_until=settings.fallback_wait_until,
            headless=settings.browser_headless,
            user_agent=settings.browser_user_agent,
        )

    async def fetch(self, url: str) -> MarkupSnapshot:
        """Fetch ``url`` and return the rendered markup.

        Args:
            url: Target URL.  Not validated; a malformed URL surfaces as a
                navigation failure.

        Returns:
            A non-empty :class:`MarkupSnapshot`.

        Raises:
            NavigationFailedError: If the browser could not be started, both
                navigation attempts failed, or the page rendered no markup.
        """
        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(headless=self.headless)
                try:
                    context = await browser.new_context(user_agent=self.user_agent)
                    try:
                        page = await context.new_page()
                        try:
                            strategy = await self._navigate(page, url)
                            html = await page.content()
                            final_url = page.url
                        finally:
                            await _close_quietly(page, "page", url)
                    finally:
                        await _close_quietly(context, "context", url)
                finally:
                    await _close_quietly(browser, "browser", url)
        except NavigationFailedError:
            raise
        except PlaywrightError as exc:
            raise NavigationFailedError(url, exc) from exc

        if not html or not html.strip():
            raise NavigationFailedError(url, "page rendered an empty document")

        logger.debug(
            "scraper: fetched %s via %s navigation (%d chars)",
            url,
            strategy.value,
            len(html),
        )
        return MarkupSnapshot(
            html=html,
            url=url,
            final_url=final_url,
            strategy=strategy,
        )

    async def _navigate(self, page: Page, url: str) -> NavigationStrategy:
        """Run the primary attempt and, if it fails, exactly one fallback."""
        try:
            await page.goto(
                url,
                wait_until=self.primary_wait_until,
                timeout=self.primary_timeout * 1000,
            )
            return NavigationStrategy.PRIMARY
        except PlaywrightError as primary_exc:
            logger.warning(
                "scraper: primary navigation failed for %s: %s. Trying fallback...",
                url,
                primary_exc,
            )
            try:
                await page.goto(
                    url,
                    wait_until=self.fallback_wait_until,
                    timeout=self.fallback_timeout * 1000,
                )
            except PlaywrightError as fallback_exc:
                raise NavigationFailedError(
                    url, fallback_exc, primary_cause=primary_exc
                ) from fallback_exc
            return NavigationStrategy.FALLBACK
