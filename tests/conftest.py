"""Shared pytest fixtures for Product Pulse tests.

Fixture summary
---------------
store           — Fresh, empty ExtractionStore.
catalog         — Fresh, empty Catalog.
fake_fetcher    — Object with an ``AsyncMock`` ``fetch``; set ``html`` or
                  ``side_effect`` per test.
orchestrator    — ScrapeOrchestrator wired to the three fixtures above.
api_client      — httpx.AsyncClient against the FastAPI app with the
                  store, catalog and orchestrator dependencies overridden.

No test touches a real browser or network: the Playwright entry point is
patched wherever the page fetcher itself is exercised.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from product_pulse.config.settings import get_settings
from product_pulse.core.catalog import Catalog
from product_pulse.core.extraction_store import ExtractionStore
from product_pulse.scraper.orchestrator import ScrapeOrchestrator
from product_pulse.scraper.snapshot import MarkupSnapshot

get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class FakeFetcher:
    """Stand-in for PageFetcher returning canned markup."""

    def __init__(self, html: str = "<html><body></body></html>") -> None:
        self.html = html
        self.fetch = AsyncMock(side_effect=self._fetch)

    async def _fetch(self, url: str) -> MarkupSnapshot:
        return MarkupSnapshot(html=self.html, url=url, final_url=url)


def make_fake_playwright(page: Any) -> tuple[MagicMock, MagicMock, MagicMock]:
    """Build a fake ``async_playwright`` factory around ``page``.

    Returns:
        ``(factory, browser, context)`` so tests can assert on the
        close calls.
    """
    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    context.close = AsyncMock()

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()

    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)

    manager = MagicMock()
    manager.__aenter__ = AsyncMock(return_value=playwright)
    manager.__aexit__ = AsyncMock(return_value=False)

    factory = MagicMock(return_value=manager)
    return factory, browser, context


def make_fake_page(
    html: str = "<html><body><p>ok</p></body></html>",
    goto_side_effect: Any = None,
    url: str = "https://example.com/",
) -> MagicMock:
    page = MagicMock()
    page.goto = AsyncMock(side_effect=goto_side_effect)
    page.content = AsyncMock(return_value=html)
    page.close = AsyncMock()
    page.url = url
    return page


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store() -> ExtractionStore:
    return ExtractionStore()


@pytest.fixture
def catalog() -> Catalog:
    return Catalog()


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def orchestrator(
    store: ExtractionStore, catalog: Catalog, fake_fetcher: FakeFetcher
) -> ScrapeOrchestrator:
    return ScrapeOrchestrator(
        store=store,
        fetcher=fake_fetcher,
        product_lookup=catalog.find_product,
        scheduled_url="http://localhost:8000/dior-product-list.html",
    )


@pytest_asyncio.fixture
async def api_client(
    store: ExtractionStore,
    catalog: Catalog,
    orchestrator: ScrapeOrchestrator,
) -> AsyncGenerator[AsyncClient, None]:
    from product_pulse.api.dependencies import (  # noqa: PLC0415
        catalog_dep,
        orchestrator_dep,
        store_dep,
    )
    from product_pulse.api.main import create_app  # noqa: PLC0415

    app = create_app()
    app.dependency_overrides[store_dep] = lambda: store
    app.dependency_overrides[catalog_dep] = lambda: catalog
    app.dependency_overrides[orchestrator_dep] = lambda: orchestrator

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client
