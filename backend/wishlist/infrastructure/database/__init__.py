"""Document store adapters and connection helpers."""
