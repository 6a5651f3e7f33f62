"""
MongoDB wishlist repository.

Implements the WishlistRepository contract with a single collection keyed
by wishlist id. Conditional writes rely on the integer ``version`` field:
creation is an insert that collides on ``_id``, updates are a
``replace_one`` filtered on the expected version.
"""

from bson.errors import InvalidDocument
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from wishlist.core.observability import get_logger
from wishlist.domain.shared.exceptions import (
    StorageFailureError,
    VersionConflictError,
    WishlistNotFoundError,
)
from wishlist.domain.wishlist.entities import Wishlist
from wishlist.domain.wishlist.repositories import WishlistRepository

from .mappers import WishlistDocumentMapper

logger = get_logger(__name__)


class MongoWishlistRepository(WishlistRepository):
    """
    Repository implementation for Wishlist aggregates on MongoDB.

    Translates driver errors into StorageFailureError; owns no business rules.
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        """
        Initialize the repository.

        Args:
            collection: Motor collection holding one document per wishlist
        """
        self._collection = collection

    async def ensure_indexes(self) -> None:
        """Create the unique owner index."""
        try:
            await self._collection.create_index(
                [("owner_id", ASCENDING)], unique=True, name="owner_id_unique"
            )
        except PyMongoError as e:
            raise StorageFailureError(
                f"Error creating wishlist indexes: {str(e)}", operation="ensure_indexes"
            ) from e

    async def load(self, wishlist_id: str) -> Wishlist:
        try:
            document = await self._collection.find_one({"_id": wishlist_id})
        except PyMongoError as e:
            raise StorageFailureError(
                f"Error loading wishlist {wishlist_id}: {str(e)}", operation="load"
            ) from e

        if document is None:
            raise WishlistNotFoundError(wishlist_id)
        return WishlistDocumentMapper.from_document(document)

    async def save(self, wishlist: Wishlist, expected_version: int) -> int:
        new_version = expected_version + 1
        document = WishlistDocumentMapper.to_document(wishlist, new_version)

        try:
            if expected_version == 0:
                await self._collection.insert_one(document)
            else:
                result = await self._collection.replace_one(
                    {"_id": wishlist.id, "version": expected_version}, document
                )
                if result.matched_count == 0:
                    raise VersionConflictError(wishlist.id, expected_version)
        except DuplicateKeyError as e:
            raise VersionConflictError(wishlist.id, expected_version) from e
        except PyMongoError as e:
            raise StorageFailureError(
                f"Error saving wishlist {wishlist.id}: {str(e)}", operation="save"
            ) from e
        except (InvalidDocument, OverflowError) as e:
            # Raised by BSON encoding, outside the PyMongoError hierarchy
            raise StorageFailureError(
                f"Wishlist {wishlist.id} cannot be encoded: {str(e)}", operation="save"
            ) from e

        logger.debug(
            "Wishlist document written",
            wishlist_id=wishlist.id,
            version=new_version,
            item_count=wishlist.item_count,
        )
        return new_version

    async def ping(self) -> bool:
        try:
            await self._collection.database.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("MongoDB ping failed", error=str(e))
            return False
