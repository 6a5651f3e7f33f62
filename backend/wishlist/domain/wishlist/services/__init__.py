"""
Wishlist aggregate engine.

Pure operations over Wishlist snapshots. Each returns a new snapshot with
``pending_changes`` incremented and leaves the input untouched, or raises a
validation error without producing any state.
"""

from .wishlist_engine import (
    add_item,
    clear,
    ensure_valid_quantity,
    remove_item,
    reorder,
    set_quantity,
)

__all__ = [
    "add_item",
    "clear",
    "ensure_valid_quantity",
    "remove_item",
    "reorder",
    "set_quantity",
]
