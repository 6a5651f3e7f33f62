"""
Repository Implementations

Concrete implementations of the WishlistRepository contract. Both adapters
perform the conditional write atomically against the stored version.
"""

from .in_memory_wishlist_repository import InMemoryWishlistRepository
from .mongo_wishlist_repository import MongoWishlistRepository

__all__ = ["InMemoryWishlistRepository", "MongoWishlistRepository"]
