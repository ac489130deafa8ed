"""Application-wide exception hierarchy for Product Pulse.

All custom exceptions subclass ``ProductPulseError``, enabling
consistent error handling and structured logging across the application.

Hierarchy::

    ProductPulseError
    ├── NavigationFailedError    (url, cause, primary_cause)
    ├── RecordValidationError
    └── InvalidReferenceError    (kind, ref_id)

An extraction that matches nothing is not an error: the extractor returns
an empty list.
"""

from __future__ import annotations


class ProductPulseError(Exception):
    """Base class for all Product Pulse exceptions.

    All application-specific exceptions inherit from this class so that
    callers can catch the entire hierarchy with a single ``except`` clause
    when needed.
    """


# ---------------------------------------------------------------------------
# Fetch exceptions
# ---------------------------------------------------------------------------


class NavigationFailedError(ProductPulseError):
    """Raised when a page could not be loaded into a usable snapshot.

    Raised after the primary and the fallback navigation attempts have both
    failed, or when the browser itself could not be started.

    Args:
        url: The URL that was being fetched.
        cause: The exception that ended the fetch.
        primary_cause: The exception raised by the primary attempt, when a
            fallback attempt was made after it.
    """

    def __init__(
        self,
        url: str,
        cause: BaseException | str,
        primary_cause: BaseException | None = None,
    ) -> None:
        super().__init__(f"Navigation failed for {url}: {cause}")
        self.url = url
        self.cause = cause
        self.primary_cause = primary_cause


# ---------------------------------------------------------------------------
# Record exceptions
# ---------------------------------------------------------------------------


class RecordValidationError(ProductPulseError):
    """Raised when an incomplete or foreign record is handed to a store."""


class InvalidReferenceError(ProductPulseError):
    """Raised when an operation references a user or product that does not exist.

    Args:
        kind: Entity kind, ``"user"`` or ``"product"``.
        ref_id: The identifier that could not be resolved.
    """

    def __init__(self, kind: str, ref_id: str) -> None:
        super().__init__(f"{kind.capitalize()} with ID {ref_id} not found")
        self.kind = kind
        self.ref_id = ref_id
