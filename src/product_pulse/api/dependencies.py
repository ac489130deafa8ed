"""FastAPI dependency injection providers.

Route handlers receive the process-wide catalog, extraction store and
orchestrator through these providers, never by importing module state.
Tests replace them with ``app.dependency_overrides``.
"""

from __future__ import annotations

from product_pulse.core.catalog import Catalog
from product_pulse.core.extraction_store import ExtractionStore
from product_pulse.core.runtime import get_catalog, get_extraction_store, get_orchestrator
from product_pulse.scraper.orchestrator import ScrapeOrchestrator


def catalog_dep() -> Catalog:
    return get_catalog()


def store_dep() -> ExtractionStore:
    return get_extraction_store()


def orchestrator_dep() -> ScrapeOrchestrator:
    return get_orchestrator()
