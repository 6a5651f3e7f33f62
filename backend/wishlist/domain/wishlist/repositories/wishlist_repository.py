"""
Wishlist Repository Interface

Defines the contract for the document store adapter. Adapters translate
between Wishlist snapshots and stored documents and own no business rules.
"""

from abc import ABC, abstractmethod

from ..entities.wishlist import Wishlist


class WishlistRepository(ABC):
    """
    Abstract store adapter for Wishlist aggregates.

    Exactly one document is kept per wishlist id. Writes are conditional on
    the stored version so concurrent writers can never silently overwrite
    each other.
    """

    @abstractmethod
    async def load(self, wishlist_id: str) -> Wishlist:
        """
        Load the current snapshot of a wishlist.

        Args:
            wishlist_id: Wishlist identifier

        Returns:
            Wishlist with ``version`` set to the stored version

        Raises:
            WishlistNotFoundError: If no document exists for the id
            StorageFailureError: If the store cannot be reached
        """

    @abstractmethod
    async def save(self, wishlist: Wishlist, expected_version: int) -> int:
        """
        Persist a wishlist if the stored version still equals ``expected_version``.

        An ``expected_version`` of 0 means the document must not exist yet.
        The write is atomic: on mismatch nothing is modified.

        Args:
            wishlist: Snapshot to persist
            expected_version: Version the snapshot was loaded at

        Returns:
            The new stored version (``expected_version + 1``)

        Raises:
            VersionConflictError: If the stored version differs
            StorageFailureError: If the store cannot be reached
        """

    @abstractmethod
    async def ping(self) -> bool:
        """Return True if the store is reachable."""
