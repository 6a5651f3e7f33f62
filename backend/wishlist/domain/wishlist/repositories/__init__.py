from .wishlist_repository import WishlistRepository

__all__ = ["WishlistRepository"]
