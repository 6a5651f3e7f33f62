from .wishlist_mappers import WishlistDTOMapper

__all__ = ["WishlistDTOMapper"]
