"""In-memory catalog of users, canonical products and first-party feedback.

The scrape orchestrator only needs :meth:`Catalog.find_product`; the rest of
the catalog backs the user/product/feedback endpoints of the API.  Nothing
is persisted across restarts.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from product_pulse.core.exceptions import InvalidReferenceError
from product_pulse.core.schemas.records import Feedback, Product, User

logger = logging.getLogger(__name__)


class Catalog:
    """Thread-safe registry of canonical entities."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[str, User] = {}
        self._products: dict[str, Product] = {}
        self._feedback: list[Feedback] = []

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def create_user(self, username: str, email: str) -> User:
        user = User(username=username, email=email)
        with self._lock:
            self._users[user.id] = user
        logger.info("catalog: created user %s", user.id)
        return user

    def get_user(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def create_product(self, name: str, description: str) -> Product:
        product = Product(name=name, description=description)
        with self._lock:
            self._products[product.id] = product
        logger.info("catalog: created product %s", product.id)
        return product

    def find_product(self, product_id: str) -> Optional[Product]:
        """Return the canonical product with ``product_id``, or ``None``."""
        with self._lock:
            return self._products.get(product_id)

    # ------------------------------------------------------------------
    # Feedback
    # ------------------------------------------------------------------

    def submit_feedback(
        self,
        user_id: str,
        product_id: str,
        rating: int,
        comment: str,
    ) -> Feedback:
        """Record feedback from an existing user on an existing product.

        Raises:
            InvalidReferenceError: If the user or the product is unknown.
        """
        with self._lock:
            if user_id not in self._users:
                raise InvalidReferenceError("user", user_id)
            if product_id not in self._products:
                raise InvalidReferenceError("product", product_id)
            feedback = Feedback(
                user_id=user_id,
                product_id=product_id,
                rating=rating,
                comment=comment,
            )
            self._feedback.append(feedback)
        return feedback

    def feedback_for_product(self, product_id: str) -> list[Feedback]:
        with self._lock:
            return [f for f in self._feedback if f.product_id == product_id]

    def average_rating(self, product_id: str) -> float:
        """Mean feedback rating for a product; ``0.0`` when it has none."""
        ratings = [f.rating for f in self.feedback_for_product(product_id)]
        if not ratings:
            return 0.0
        return sum(ratings) / len(ratings)
