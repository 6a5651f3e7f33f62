"""
Mapper for converting between Wishlist aggregates and store documents.

Document shape::

    {
        "_id": str,
        "owner_id": str,
        "items": [{"product_id", "quantity", "note", "added_at"}],
        "version": int,
        "created_at": datetime,
        "updated_at": datetime,
    }
"""

from datetime import datetime, timezone
from typing import Any

from wishlist.domain.wishlist.entities import Wishlist, WishlistItem


class WishlistDocumentMapper:
    """Translate Wishlist snapshots to and from plain documents."""

    @staticmethod
    def to_document(wishlist: Wishlist, version: int) -> dict[str, Any]:
        """
        Convert a wishlist into the document stored at ``version``.

        Args:
            wishlist: Aggregate snapshot
            version: Version the document will carry once written

        Returns:
            Document dictionary
        """
        return {
            "_id": wishlist.id,
            "owner_id": wishlist.owner_id,
            "items": [
                {
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "note": item.note,
                    "added_at": item.added_at,
                }
                for item in wishlist.items
            ],
            "version": version,
            "created_at": wishlist.created_at,
            "updated_at": wishlist.updated_at,
        }

    @staticmethod
    def from_document(document: dict[str, Any]) -> Wishlist:
        """Convert a stored document into a clean (not dirty) snapshot."""
        return Wishlist(
            id=document["_id"],
            owner_id=document["owner_id"],
            items=tuple(
                WishlistItem(
                    product_id=raw["product_id"],
                    quantity=raw.get("quantity", 1),
                    note=raw.get("note"),
                    added_at=WishlistDocumentMapper._as_utc(raw["added_at"]),
                )
                for raw in document.get("items", [])
            ),
            version=int(document["version"]),
            created_at=WishlistDocumentMapper._as_utc(document["created_at"]),
            updated_at=WishlistDocumentMapper._as_utc(document["updated_at"]),
        )

    @staticmethod
    def _as_utc(value: datetime) -> datetime:
        # BSON dates come back naive unless the client is tz-aware
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
