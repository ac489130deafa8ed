"""Celery application, Beat schedule and worker wiring."""
