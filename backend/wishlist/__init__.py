"""
Wishlist Service

Customer wishlist API backed by a document store, with optimistic
concurrency on every persisted mutation.
"""

__version__ = "1.0.0"
