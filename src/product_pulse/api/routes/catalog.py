"""User, canonical product and feedback routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from product_pulse.api.dependencies import catalog_dep
from product_pulse.core.catalog import Catalog
from product_pulse.core.schemas.records import Feedback, Product, User
from product_pulse.core.schemas.requests import (
    AverageRatingRead,
    FeedbackCreate,
    ProductCreate,
    UserCreate,
)

router = APIRouter()

CatalogDep = Annotated[Catalog, Depends(catalog_dep)]


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@router.post("/users", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, catalog: CatalogDep) -> User:
    return catalog.create_user(payload.username, payload.email)


@router.get("/users/{user_id}", response_model=User)
async def get_user(user_id: str, catalog: CatalogDep) -> User:
    user = catalog.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail=f"User with ID {user_id} not found")
    return user


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


@router.post("/products", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(payload: ProductCreate, catalog: CatalogDep) -> Product:
    return catalog.create_product(payload.name, payload.description)


@router.get("/products/{product_id}", response_model=Product)
async def get_product(product_id: str, catalog: CatalogDep) -> Product:
    product = catalog.find_product(product_id)
    if product is None:
        raise HTTPException(
            status_code=404, detail=f"Product with ID {product_id} not found"
        )
    return product


@router.get("/products/{product_id}/feedback", response_model=list[Feedback])
async def list_feedback(product_id: str, catalog: CatalogDep) -> list[Feedback]:
    return catalog.feedback_for_product(product_id)


@router.get("/products/{product_id}/average-rating", response_model=AverageRatingRead)
async def average_rating(product_id: str, catalog: CatalogDep) -> AverageRatingRead:
    return AverageRatingRead(
        product_id=product_id,
        average_rating=catalog.average_rating(product_id),
    )


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------


@router.post("/feedback", response_model=Feedback, status_code=status.HTTP_201_CREATED)
async def submit_feedback(payload: FeedbackCreate, catalog: CatalogDep) -> Feedback:
    """Record feedback; unknown user or product ids surface as HTTP 404."""
    return catalog.submit_feedback(
        user_id=payload.user_id,
        product_id=payload.product_id,
        rating=payload.rating,
        comment=payload.comment,
    )
