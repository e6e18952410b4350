"""Menu catalog service: an in-memory restaurant menu engine with an admin API."""
