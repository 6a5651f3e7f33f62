from .wishlist import MAX_QUANTITY, Wishlist, WishlistItem, wishlist_id_for

__all__ = ["MAX_QUANTITY", "Wishlist", "WishlistItem", "wishlist_id_for"]
