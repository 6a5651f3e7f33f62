"""Store adapters with injected behaviour for orchestration tests."""

import asyncio

from wishlist.domain.shared.exceptions import StorageFailureError
from wishlist.domain.wishlist import services as engine
from wishlist.domain.wishlist.entities import Wishlist
from wishlist.infrastructure.database.repositories import InMemoryWishlistRepository


class InterferingRepository(InMemoryWishlistRepository):
    """Lets a competing writer commit right before each of the next N saves."""

    def __init__(self, interferences: int):
        super().__init__()
        self.interferences = interferences
        self.competing_writes = 0

    async def save(self, wishlist: Wishlist, expected_version: int) -> int:
        if self.interferences > 0:
            self.interferences -= 1
            self.competing_writes += 1
            if expected_version == 0:
                rival = engine.add_item(
                    Wishlist.create(wishlist.owner_id), f"rival-{self.competing_writes}"
                )
                await super().save(rival, 0)
            else:
                stored = await self.load(wishlist.id)
                rival = engine.add_item(stored, f"rival-{self.competing_writes}")
                await super().save(rival, stored.version)
        return await super().save(wishlist, expected_version)


class YieldingRepository(InMemoryWishlistRepository):
    """Yields to the event loop after every read so concurrent commands interleave."""

    async def load(self, wishlist_id: str) -> Wishlist:
        wishlist = await super().load(wishlist_id)
        await asyncio.sleep(0)
        return wishlist


class SlowRepository(InMemoryWishlistRepository):
    def __init__(self, delay: float):
        super().__init__()
        self.delay = delay

    async def load(self, wishlist_id: str) -> Wishlist:
        await asyncio.sleep(self.delay)
        return await super().load(wishlist_id)


class BrokenRepository(InMemoryWishlistRepository):
    """Every save fails as if the connection dropped."""

    async def save(self, wishlist: Wishlist, expected_version: int) -> int:
        self.save_calls += 1
        raise StorageFailureError("connection reset", operation="save")

    async def ping(self) -> bool:
        return False


class SleepRecorder:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
