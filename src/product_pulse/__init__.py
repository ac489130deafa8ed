"""Product Pulse: third-party product and review extraction merged with first-party feedback."""

__version__ = "0.1.0"
