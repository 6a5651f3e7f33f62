"""
MongoDB connection helpers.

The client is created once by the application factory and closed in the
lifespan shutdown; nothing here is a process-wide singleton.
"""

from typing import TYPE_CHECKING

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

if TYPE_CHECKING:
    from wishlist.core.config import Settings


def create_mongo_client(settings: "Settings") -> AsyncIOMotorClient:
    """Create a tz-aware motor client whose server selection honours the store timeout."""
    timeout_ms = int(settings.STORE_TIMEOUT_SECONDS * 1000)
    return AsyncIOMotorClient(
        settings.MONGODB_URI,
        tz_aware=True,
        serverSelectionTimeoutMS=timeout_ms,
        connectTimeoutMS=timeout_ms,
        appname=settings.PROJECT_NAME,
    )


def get_wishlist_collection(
    client: AsyncIOMotorClient, settings: "Settings"
) -> AsyncIOMotorCollection:
    return client[settings.MONGODB_DATABASE][settings.MONGODB_COLLECTION]
