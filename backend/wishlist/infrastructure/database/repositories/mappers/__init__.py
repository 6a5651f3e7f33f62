"""
Mappers for converting between domain aggregates and stored documents.
"""

from .wishlist_mapper import WishlistDocumentMapper

__all__ = ["WishlistDocumentMapper"]
