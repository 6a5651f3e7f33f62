"""Core configuration and observability for the wishlist service."""
