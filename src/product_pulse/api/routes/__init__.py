"""Route modules mounted by ``product_pulse.api.main``."""
