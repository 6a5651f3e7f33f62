"""
Wishlist aggregate.

A wishlist is owned by one customer and holds an ordered sequence of items,
at most one per product. Items have no identity outside their wishlist.
"""

from datetime import datetime
from uuid import NAMESPACE_URL, uuid5

from pydantic import Field

from wishlist.domain.shared.base import AggregateRoot, ValueObject, utcnow

_WISHLIST_NAMESPACE = uuid5(NAMESPACE_URL, "urn:wishlist-service:wishlist")

# Stored as a 32-bit BSON int
MAX_QUANTITY = 2**31 - 1


def wishlist_id_for(owner_id: str) -> str:
    """Deterministic wishlist id for an owner, so every instance targets one document."""
    return str(uuid5(_WISHLIST_NAMESPACE, owner_id))


class WishlistItem(ValueObject):
    """A product entry in a wishlist."""

    product_id: str
    quantity: int = 1
    note: str | None = None
    added_at: datetime = Field(default_factory=utcnow)


class Wishlist(AggregateRoot):
    """Aggregate root for a customer's wishlist."""

    id: str
    owner_id: str
    items: tuple[WishlistItem, ...] = ()

    @classmethod
    def create(cls, owner_id: str) -> "Wishlist":
        """Create an empty, not yet persisted wishlist for an owner."""
        now = utcnow()
        return cls(
            id=wishlist_id_for(owner_id),
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )

    @property
    def identity(self) -> str:
        return self.id

    @property
    def product_ids(self) -> list[str]:
        return [item.product_id for item in self.items]

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def is_persisted(self) -> bool:
        return self.version > 0

    def find_item(self, product_id: str) -> WishlistItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def has_item(self, product_id: str) -> bool:
        return self.find_item(product_id) is not None

    def is_valid(self) -> bool:
        product_ids = self.product_ids
        return (
            len(product_ids) == len(set(product_ids))
            and all(item.quantity > 0 for item in self.items)
            and self.version >= 0
        )
