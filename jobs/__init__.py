"""Background jobs (dramatiq)."""
