"""Configuration package for Product Pulse.

Re-exports the settings entry points so that callers can write::

    from product_pulse.config import get_settings
"""

from __future__ import annotations

from product_pulse.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
