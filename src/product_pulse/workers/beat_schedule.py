"""Celery Beat periodic task schedule for Product Pulse.

Schedule overview:

+---------------------------+---------------------------+----------------------------+
| Task name                 | Schedule                  | Purpose                    |
+===========================+===========================+============================+
| daily_product_scrape      | scheduled_scrape_hour:    | Product-mode extraction of |
|                           | scheduled_scrape_minute   | ``scheduled_scrape_url``.  |
|                           | (default 00:00)           |                            |
+---------------------------+---------------------------+----------------------------+
"""

from __future__ import annotations

from typing import Any

from celery.schedules import crontab

from product_pulse.config.settings import Settings

SCHEDULED_SCRAPE_TASK = "product_pulse.scraper.tasks.scheduled_product_scrape_task"


def build_beat_schedule(settings: Settings) -> dict[str, dict[str, Any]]:
    """Return the Beat schedule dict for ``celery_app.conf.beat_schedule``."""
    return {
        "daily_product_scrape": {
            "task": SCHEDULED_SCRAPE_TASK,
            "schedule": crontab(
                hour=settings.scheduled_scrape_hour,
                minute=settings.scheduled_scrape_minute,
            ),
            "options": {
                "queue": "scraping",
                "expires": 3_600,  # discard if not started within 1 hour
            },
        },
    }
