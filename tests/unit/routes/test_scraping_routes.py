"""Route tests for the scraping endpoints and the health check.

The orchestrator behind the routes uses the fake fetcher from conftest, so
each test controls the page markup (or the navigation failure) directly.
"""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from product_pulse.core.catalog import Catalog
from product_pulse.core.exceptions import NavigationFailedError
from product_pulse.scraper.orchestrator import ScrapeOrchestrator
from tests.conftest import FakeFetcher

_URL = "https://shop.example.com/lipstick/reviews"

_TWO_REVIEWS_HTML = (
    '<div class="review"><span class="rating">5</span><p class="comment">Great</p></div>'
    '<div class="review"><span class="rating">3</span><p class="comment">Ok</p></div>'
)


@pytest.mark.asyncio
class TestScrapeReviewsRoute:
    async def test_returns_reviews_with_embedded_product(
        self, api_client: AsyncClient, fake_fetcher: FakeFetcher, catalog: Catalog
    ) -> None:
        product = catalog.create_product("Rouge", "Lipstick")
        fake_fetcher.html = _TWO_REVIEWS_HTML

        resp = await api_client.post(
            "/api/scraping/reviews", json={"product_id": product.id, "source_url": _URL}
        )

        assert resp.status_code == 200
        body = resp.json()
        assert [r["rating"] for r in body] == [5, 3]
        assert all(r["source"] == _URL for r in body)
        assert body[0]["product"]["name"] == "Rouge"

    async def test_unknown_product_has_no_embedded_product(
        self, api_client: AsyncClient, fake_fetcher: FakeFetcher
    ) -> None:
        fake_fetcher.html = _TWO_REVIEWS_HTML
        resp = await api_client.post(
            "/api/scraping/reviews", json={"product_id": "free-text", "source_url": _URL}
        )
        assert resp.status_code == 200
        assert [r["product"] for r in resp.json()] == [None, None]

    async def test_navigation_failure_is_empty_200(
        self, api_client: AsyncClient, fake_fetcher: FakeFetcher
    ) -> None:
        fake_fetcher.fetch.side_effect = NavigationFailedError(_URL, "timed out")
        resp = await api_client.post(
            "/api/scraping/reviews", json={"product_id": "p1", "source_url": _URL}
        )
        assert resp.status_code == 200
        assert resp.json() == []

    async def test_missing_source_url_is_422(self, api_client: AsyncClient) -> None:
        resp = await api_client.post("/api/scraping/reviews", json={"product_id": "p1"})
        assert resp.status_code == 422

    async def test_stored_reviews_queryable(
        self, api_client: AsyncClient, fake_fetcher: FakeFetcher
    ) -> None:
        fake_fetcher.html = _TWO_REVIEWS_HTML
        await api_client.post("/api/scraping/reviews", json={"product_id": "p1", "source_url": _URL})

        resp = await api_client.get("/api/scraping/reviews", params={"product_id": "p1"})

        assert [r["comment"] for r in resp.json()] == ["Great", "Ok"]


@pytest.mark.asyncio
class TestScrapeProductsRoute:
    async def test_returns_and_stores_products(
        self, api_client: AsyncClient, fake_fetcher: FakeFetcher
    ) -> None:
        fake_fetcher.html = '<div class="product-card"><h2>Lipstick</h2></div>'

        resp = await api_client.post("/api/scraping/products", json={"source_url": _URL})

        assert resp.status_code == 200
        [product] = resp.json()
        assert product["name"] == "Lipstick"
        assert product["price"] == ""

        listed = await api_client.get("/api/scraping/products", params={"source": _URL})
        assert [p["id"] for p in listed.json()] == [product["id"]]

    async def test_source_query_required(self, api_client: AsyncClient) -> None:
        resp = await api_client.get("/api/scraping/products")
        assert resp.status_code == 422


@pytest.mark.asyncio
class TestHealth:
    async def test_health_reports_counts(
        self, api_client: AsyncClient, fake_fetcher: FakeFetcher
    ) -> None:
        fake_fetcher.html = _TWO_REVIEWS_HTML
        await api_client.post("/api/scraping/reviews", json={"product_id": "p1", "source_url": _URL})

        resp = await api_client.get("/api/health")

        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["scraped_reviews"] == 2
        assert body["scraped_products"] == 0
        assert "sephora" in body["site_rules"]
        assert "X-Request-ID" in resp.headers


@pytest.mark.asyncio
class TestScheduledRunRoute:
    async def test_scheduled_products_are_queryable(
        self,
        api_client: AsyncClient,
        fake_fetcher: FakeFetcher,
        orchestrator: ScrapeOrchestrator,
    ) -> None:
        fake_fetcher.html = '<div class="product-card"><h2>Dior Serum</h2></div>'

        resp = await api_client.post("/api/scraping/scheduled-run")

        assert resp.status_code == 204
        listed = await api_client.get(
            "/api/scraping/products", params={"source": orchestrator.scheduled_url}
        )
        assert [p["name"] for p in listed.json()] == ["Dior Serum"]

    async def test_failed_scheduled_run_still_204(
        self, api_client: AsyncClient, fake_fetcher: FakeFetcher
    ) -> None:
        fake_fetcher.fetch.side_effect = NavigationFailedError("http://localhost:8000/", "down")

        resp = await api_client.post("/api/scraping/scheduled-run")

        assert resp.status_code == 204
