"""Celery application factory for Product Pulse.

Configures the broker, result backend, serialization, task routing and the
Beat schedule.  All configuration values are sourced from ``Settings``.

Usage (starting a worker with the embedded Beat scheduler)::

    celery -A product_pulse.workers.celery_app worker --beat --loglevel=info

The extraction store is held in memory by the API process, so the tasks
trigger runs through the API (``api_base_url``) instead of scraping in the
worker.
"""

from __future__ import annotations

from celery import Celery
from celery.signals import setup_logging
from dotenv import load_dotenv

load_dotenv()

from product_pulse.config.settings import get_settings  # noqa: E402
from product_pulse.workers.beat_schedule import build_beat_schedule  # noqa: E402

settings = get_settings()

#: The global Celery application instance.
celery_app = Celery(
    "product_pulse",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=[
        "product_pulse.scraper.tasks",
    ],
)

celery_app.conf.update(
    # JSON keeps task payloads inspectable; every argument is a string.
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone=settings.scheduler_timezone,
    enable_utc=True,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    result_expires=86_400,
    # A run is bounded by the two navigation timeouts; these are safety nets.
    task_soft_time_limit=300,
    task_time_limit=600,
    task_routes={
        "product_pulse.scraper.tasks.*": {"queue": "scraping"},
    },
    beat_schedule_filename="celerybeat-schedule",
)

celery_app.conf.beat_schedule = build_beat_schedule(settings)


@setup_logging.connect
def _configure_worker_logging(**kwargs: object) -> None:  # noqa: ARG001
    """Replace Celery's logging setup with the structlog configuration."""
    from product_pulse.core.logging_config import configure_logging  # noqa: PLC0415

    configure_logging(get_settings().log_level)
