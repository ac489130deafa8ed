"""HTTP API: catalog, scraping and health routes."""
