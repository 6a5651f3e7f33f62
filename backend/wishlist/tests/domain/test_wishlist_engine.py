"""
Unit tests for the wishlist aggregate engine.

Covers item-level mutations, their failure modes, and the guarantee that a
failed operation leaves the input snapshot untouched.
"""

from datetime import datetime, timezone

import pytest

from wishlist.domain.shared.exceptions import (
    DuplicateItemError,
    InvalidOrderError,
    InvalidQuantityError,
    ItemNotFoundError,
    WishlistLimitExceededError,
)
from wishlist.domain.wishlist import services as engine
from wishlist.domain.wishlist.entities import Wishlist, wishlist_id_for


def make_wishlist(*product_ids: str) -> Wishlist:
    wishlist = Wishlist.create("customer-1")
    for product_id in product_ids:
        wishlist = engine.add_item(wishlist, product_id)
    return wishlist


class TestWishlistCreation:
    def test_create_empty_wishlist(self):
        wishlist = Wishlist.create("customer-1")

        assert wishlist.owner_id == "customer-1"
        assert wishlist.id == wishlist_id_for("customer-1")
        assert wishlist.items == ()
        assert wishlist.version == 0
        assert not wishlist.is_dirty
        assert not wishlist.is_persisted
        assert wishlist.is_valid()

    def test_wishlist_id_is_stable_per_owner(self):
        assert wishlist_id_for("alice") == wishlist_id_for("alice")
        assert wishlist_id_for("alice") != wishlist_id_for("bob")


class TestAddItem:
    def test_appends_to_end(self):
        wishlist = make_wishlist("p1", "p2")

        updated = engine.add_item(wishlist, "p3", quantity=2, note="gift")

        assert updated.product_ids == ["p1", "p2", "p3"]
        item = updated.find_item("p3")
        assert item.quantity == 2
        assert item.note == "gift"

    def test_uses_given_timestamp(self):
        now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

        updated = engine.add_item(Wishlist.create("c"), "p1", now=now)

        assert updated.find_item("p1").added_at == now
        assert updated.updated_at == now

    def test_timestamp_is_truncated_to_milliseconds(self):
        now = datetime(2024, 5, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)

        updated = engine.add_item(Wishlist.create("c"), "p1", now=now)

        assert updated.find_item("p1").added_at.microsecond == 123000
        assert updated.updated_at.microsecond == 123000

    def test_marks_dirty_without_touching_version(self):
        wishlist = Wishlist.create("c")

        once = engine.add_item(wishlist, "p1")
        twice = engine.add_item(once, "p2")

        assert once.pending_changes == 1
        assert twice.pending_changes == 2
        assert twice.version == 0

    def test_duplicate_fails(self):
        wishlist = make_wishlist("p1")

        with pytest.raises(DuplicateItemError) as exc_info:
            engine.add_item(wishlist, "p1")

        assert exc_info.value.code == "DUPLICATE_ITEM"
        assert wishlist.product_ids == ["p1"]

    @pytest.mark.parametrize("quantity", [0, -1, True, 1.5, "2", 2**31, 2**63])
    def test_invalid_quantity_fails(self, quantity):
        with pytest.raises(InvalidQuantityError):
            engine.add_item(Wishlist.create("c"), "p1", quantity=quantity)

    def test_capacity_limit(self):
        wishlist = make_wishlist("p1", "p2")

        with pytest.raises(WishlistLimitExceededError) as exc_info:
            engine.add_item(wishlist, "p3", max_items=2)

        assert exc_info.value.max_items == 2

    def test_input_snapshot_is_not_modified(self):
        wishlist = make_wishlist("p1")

        engine.add_item(wishlist, "p2")

        assert wishlist.product_ids == ["p1"]
        assert wishlist.pending_changes == 1


class TestRemoveItem:
    def test_preserves_relative_order(self):
        wishlist = make_wishlist("p1", "p2", "p3", "p4")

        updated = engine.remove_item(wishlist, "p2")

        assert updated.product_ids == ["p1", "p3", "p4"]

    def test_missing_item_fails(self):
        with pytest.raises(ItemNotFoundError) as exc_info:
            engine.remove_item(make_wishlist("p1"), "p9")

        assert exc_info.value.product_id == "p9"

    def test_remove_last_item_leaves_empty_wishlist(self):
        updated = engine.remove_item(make_wishlist("p1"), "p1")

        assert updated.items == ()
        assert updated.is_dirty


class TestReorder:
    def test_replaces_order(self):
        wishlist = make_wishlist("p1", "p2", "p3")

        updated = engine.reorder(wishlist, ["p3", "p1", "p2"])

        assert updated.product_ids == ["p3", "p1", "p2"]
        assert updated.find_item("p1") == wishlist.find_item("p1")

    def test_empty_wishlist_accepts_empty_order(self):
        updated = engine.reorder(Wishlist.create("c"), [])

        assert updated.items == ()

    @pytest.mark.parametrize(
        "new_order",
        [
            ["p1", "p2"],
            ["p1", "p2", "p3", "p4"],
            ["p1", "p1", "p2"],
            ["p1", "p2", "p9"],
            [],
        ],
    )
    def test_non_permutation_fails_and_leaves_state(self, new_order):
        wishlist = make_wishlist("p1", "p2", "p3")

        with pytest.raises(InvalidOrderError):
            engine.reorder(wishlist, new_order)

        assert wishlist.product_ids == ["p1", "p2", "p3"]

    def test_error_details_describe_mismatch(self):
        wishlist = make_wishlist("p1", "p2")

        with pytest.raises(InvalidOrderError) as exc_info:
            engine.reorder(wishlist, ["p1", "p1", "p9"])

        details = exc_info.value.details
        assert details["missing"] == ["p2"]
        assert details["unexpected"] == ["p9"]
        assert details["duplicated"] == ["p1"]


class TestSetQuantity:
    def test_updates_only_target_item(self):
        wishlist = make_wishlist("p1", "p2")

        updated = engine.set_quantity(wishlist, "p2", 5)

        assert updated.find_item("p2").quantity == 5
        assert updated.find_item("p1").quantity == 1
        assert updated.product_ids == ["p1", "p2"]

    def test_missing_item_fails(self):
        with pytest.raises(ItemNotFoundError):
            engine.set_quantity(make_wishlist("p1"), "p2", 3)

    def test_invalid_quantity_fails(self):
        with pytest.raises(InvalidQuantityError):
            engine.set_quantity(make_wishlist("p1"), "p1", 0)


class TestClear:
    def test_clear_empties_items(self):
        wishlist = make_wishlist("p1", "p2")

        updated = engine.clear(wishlist)

        assert updated.items == ()
        assert updated.id == wishlist.id
        assert updated.pending_changes == wishlist.pending_changes + 1
