"""Route tests for the user, product and feedback endpoints."""

from __future__ import annotations

import pytest
from httpx import AsyncClient


async def _create_user(client: AsyncClient) -> str:
    resp = await client.post("/api/users", json={"username": "ada", "email": "ada@example.com"})
    assert resp.status_code == 201
    return resp.json()["id"]


async def _create_product(client: AsyncClient, name: str = "Rouge") -> str:
    resp = await client.post("/api/products", json={"name": name, "description": "Lipstick"})
    assert resp.status_code == 201
    return resp.json()["id"]


@pytest.mark.asyncio
class TestUserAndProductRoutes:
    async def test_user_roundtrip(self, api_client: AsyncClient) -> None:
        user_id = await _create_user(api_client)

        resp = await api_client.get(f"/api/users/{user_id}")

        assert resp.status_code == 200
        assert resp.json()["username"] == "ada"

    async def test_unknown_user_is_404(self, api_client: AsyncClient) -> None:
        resp = await api_client.get("/api/users/ghost")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "User with ID ghost not found"

    async def test_product_roundtrip(self, api_client: AsyncClient) -> None:
        product_id = await _create_product(api_client)
        resp = await api_client.get(f"/api/products/{product_id}")
        assert resp.status_code == 200
        assert resp.json() == {"id": product_id, "name": "Rouge", "description": "Lipstick"}

    async def test_empty_product_name_is_422(self, api_client: AsyncClient) -> None:
        resp = await api_client.post("/api/products", json={"name": "", "description": ""})
        assert resp.status_code == 422


@pytest.mark.asyncio
class TestFeedbackRoutes:
    async def test_submit_and_average(self, api_client: AsyncClient) -> None:
        user_id = await _create_user(api_client)
        product_id = await _create_product(api_client)

        for rating in (5, 2):
            resp = await api_client.post(
                "/api/feedback",
                json={"user_id": user_id, "product_id": product_id, "rating": rating, "comment": ""},
            )
            assert resp.status_code == 201

        listed = await api_client.get(f"/api/products/{product_id}/feedback")
        assert [f["rating"] for f in listed.json()] == [5, 2]

        avg = await api_client.get(f"/api/products/{product_id}/average-rating")
        assert avg.json() == {"product_id": product_id, "average_rating": 3.5}

    async def test_feedback_for_unknown_product_is_404(self, api_client: AsyncClient) -> None:
        user_id = await _create_user(api_client)

        resp = await api_client.post(
            "/api/feedback",
            json={"user_id": user_id, "product_id": "nope", "rating": 4, "comment": "x"},
        )

        assert resp.status_code == 404
        assert resp.json() == {
            "detail": "Product with ID nope not found",
            "kind": "product",
            "id": "nope",
        }
