"""
In-memory wishlist repository.

Keeps mapped documents in a dict. The compare-and-set in ``save`` runs
without awaiting, so it is atomic with respect to other tasks on the loop.
"""

import copy
from typing import Any

from wishlist.core.observability import get_logger
from wishlist.domain.shared.exceptions import (
    VersionConflictError,
    WishlistNotFoundError,
)
from wishlist.domain.wishlist.entities import Wishlist
from wishlist.domain.wishlist.repositories import WishlistRepository

from .mappers import WishlistDocumentMapper

logger = get_logger(__name__)


class InMemoryWishlistRepository(WishlistRepository):
    """Process-local store used by the ``memory`` backend and the test suite."""

    def __init__(self) -> None:
        self._documents: dict[str, dict[str, Any]] = {}
        self.save_calls = 0

    async def load(self, wishlist_id: str) -> Wishlist:
        document = self._documents.get(wishlist_id)
        if document is None:
            raise WishlistNotFoundError(wishlist_id)
        return WishlistDocumentMapper.from_document(copy.deepcopy(document))

    async def save(self, wishlist: Wishlist, expected_version: int) -> int:
        self.save_calls += 1
        current = self._documents.get(wishlist.id)
        current_version = current["version"] if current is not None else 0

        if current_version != expected_version:
            logger.debug(
                "Conditional write rejected",
                wishlist_id=wishlist.id,
                expected_version=expected_version,
                stored_version=current_version,
            )
            raise VersionConflictError(wishlist.id, expected_version)

        new_version = expected_version + 1
        self._documents[wishlist.id] = WishlistDocumentMapper.to_document(
            wishlist, new_version
        )
        return new_version

    async def ping(self) -> bool:
        return True

    def document(self, wishlist_id: str) -> dict[str, Any] | None:
        """Stored document for inspection, or None."""
        document = self._documents.get(wishlist_id)
        return copy.deepcopy(document) if document is not None else None
