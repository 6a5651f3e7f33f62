"""Wishlist bounded context: aggregate, engine, and store contract."""
