"""Conversion from Wishlist aggregates to API response DTOs."""

from wishlist.domain.wishlist.entities import Wishlist, WishlistItem

from ..dtos.wishlist_dtos import (
    AddItemResponse,
    ItemExistsResponse,
    ItemResponse,
    WishlistResponse,
)


class WishlistDTOMapper:
    """Maps aggregate snapshots onto response models."""

    def __init__(self, max_items: int):
        self._max_items = max_items

    def item_to_response(self, item: WishlistItem) -> ItemResponse:
        return ItemResponse(
            product_id=item.product_id,
            quantity=item.quantity,
            note=item.note,
            added_at=item.added_at,
        )

    def wishlist_to_response(self, wishlist: Wishlist) -> WishlistResponse:
        # Unpersisted wishlists are a read-only empty view without timestamps
        persisted = wishlist.is_persisted
        return WishlistResponse(
            customer_id=wishlist.owner_id,
            wishlist_id=wishlist.id,
            items=[self.item_to_response(item) for item in wishlist.items],
            total_items=wishlist.item_count,
            max_items=self._max_items,
            version=wishlist.version,
            created_at=wishlist.created_at if persisted else None,
            updated_at=wishlist.updated_at if persisted else None,
        )

    def add_item_response(
        self, wishlist: Wishlist, product_id: str, created: bool
    ) -> AddItemResponse:
        item = wishlist.find_item(product_id)
        return AddItemResponse(
            message=(
                "Product added to wishlist successfully"
                if created
                else "Product already in wishlist"
            ),
            customer_id=wishlist.owner_id,
            product_id=product_id,
            added_at=item.added_at,
            created=created,
            version=wishlist.version,
        )

    def item_exists_response(
        self, wishlist: Wishlist, item: WishlistItem
    ) -> ItemExistsResponse:
        return ItemExistsResponse(
            customer_id=wishlist.owner_id,
            product_id=item.product_id,
            exists=True,
            added_at=item.added_at,
        )
