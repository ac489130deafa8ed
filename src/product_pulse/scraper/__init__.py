"""Web content extraction pipeline.

Sub-modules:
- ``config``             — extraction markers, sentinels and default timeouts
- ``snapshot``           — immutable rendered-markup snapshot
- ``page_fetcher``       — headless Chromium fetcher with primary/fallback navigation
- ``site_rules``         — registry of source-specific product fallback rules
- ``content_extractor``  — review and tiered product heuristics
- ``orchestrator``       — fetch, extract, store; failures collapse to empty results
- ``tasks``              — Celery tasks (scheduled and on-demand product scrapes)
"""
