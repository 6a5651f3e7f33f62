"""HTTP layer: routers, dependencies and error translation."""
