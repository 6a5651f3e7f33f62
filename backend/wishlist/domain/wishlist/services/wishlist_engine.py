from collections import Counter
from collections.abc import Sequence
from datetime import datetime

from wishlist.domain.shared.base import truncate_to_millis, utcnow
from wishlist.domain.shared.exceptions import (
    DuplicateItemError,
    InvalidOrderError,
    InvalidQuantityError,
    ItemNotFoundError,
    WishlistLimitExceededError,
)
from wishlist.domain.wishlist.entities import MAX_QUANTITY, Wishlist, WishlistItem


def ensure_valid_quantity(quantity: object) -> int:
    """Quantities are positive integers up to MAX_QUANTITY; bools are rejected."""
    if (
        isinstance(quantity, bool)
        or not isinstance(quantity, int)
        or not 0 < quantity <= MAX_QUANTITY
    ):
        raise InvalidQuantityError(quantity)
    return quantity


def add_item(
    wishlist: Wishlist,
    product_id: str,
    quantity: int = 1,
    note: str | None = None,
    *,
    max_items: int | None = None,
    now: datetime | None = None,
) -> Wishlist:
    """
    Append a product to the end of the wishlist.

    Raises:
        DuplicateItemError: product already present
        InvalidQuantityError: quantity is not a positive integer
        WishlistLimitExceededError: wishlist already holds ``max_items`` items
    """
    if wishlist.has_item(product_id):
        raise DuplicateItemError(product_id)
    ensure_valid_quantity(quantity)
    if max_items is not None and wishlist.item_count >= max_items:
        raise WishlistLimitExceededError(max_items)

    timestamp = truncate_to_millis(now) if now is not None else utcnow()
    item = WishlistItem(
        product_id=product_id, quantity=quantity, note=note, added_at=timestamp
    )
    return wishlist._touch(items=(*wishlist.items, item), updated_at=timestamp)


def remove_item(wishlist: Wishlist, product_id: str) -> Wishlist:
    """Remove a product, keeping the relative order of the remaining items."""
    if not wishlist.has_item(product_id):
        raise ItemNotFoundError(product_id)

    remaining = tuple(item for item in wishlist.items if item.product_id != product_id)
    return wishlist._touch(items=remaining)


def reorder(wishlist: Wishlist, new_order: Sequence[str]) -> Wishlist:
    """Replace the display order; ``new_order`` must be a permutation of current products."""
    current = wishlist.product_ids
    requested = list(new_order)

    if Counter(requested) != Counter(current):
        counts = Counter(requested)
        raise InvalidOrderError(
            missing=[p for p in current if p not in counts],
            unexpected=sorted({p for p in requested if p not in set(current)}),
            duplicated=sorted(p for p, n in counts.items() if n > 1),
        )

    by_product = {item.product_id: item for item in wishlist.items}
    return wishlist._touch(items=tuple(by_product[p] for p in requested))


def set_quantity(wishlist: Wishlist, product_id: str, quantity: int) -> Wishlist:
    """Change the quantity of an existing item in place."""
    item = wishlist.find_item(product_id)
    if item is None:
        raise ItemNotFoundError(product_id)
    ensure_valid_quantity(quantity)

    updated = item.model_copy(update={"quantity": quantity})
    return wishlist._touch(
        items=tuple(updated if i.product_id == product_id else i for i in wishlist.items)
    )


def clear(wishlist: Wishlist) -> Wishlist:
    """Empty the wishlist. The aggregate itself is kept."""
    return wishlist._touch(items=())
