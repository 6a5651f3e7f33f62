from .wishlist_dtos import (
    AddItemRequest,
    AddItemResponse,
    ApiErrorResponse,
    ItemExistsResponse,
    ItemResponse,
    ReorderRequest,
    SetQuantityRequest,
    WishlistResponse,
)

__all__ = [
    "AddItemRequest",
    "AddItemResponse",
    "ApiErrorResponse",
    "ItemExistsResponse",
    "ItemResponse",
    "ReorderRequest",
    "SetQuantityRequest",
    "WishlistResponse",
]
