from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from wishlist.application.policy import RetryPolicy, WishlistPolicy
from wishlist.application.services import WishlistApplicationService
from wishlist.core.config import Settings
from wishlist.infrastructure.database.repositories import InMemoryWishlistRepository
from wishlist.main import create_app


async def no_sleep(_: float) -> None:
    return None


@pytest.fixture
def policy() -> WishlistPolicy:
    return WishlistPolicy(
        max_items=20,
        note_max_length=500,
        store_timeout_seconds=1.0,
        retry=RetryPolicy(max_retries=3, base_delay_seconds=0.0, jitter=False),
    )


@pytest.fixture
def repository() -> InMemoryWishlistRepository:
    return InMemoryWishlistRepository()


@pytest.fixture
def service(
    repository: InMemoryWishlistRepository, policy: WishlistPolicy
) -> WishlistApplicationService:
    return WishlistApplicationService(repository, policy, sleep=no_sleep)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        ENVIRONMENT="test",
        LOG_FORMAT="console",
        LOG_LEVEL="WARNING",
        STORE_BACKEND="memory",
        RETRY_BASE_DELAY_SECONDS=0.0,
    )


@pytest.fixture
def client(
    test_settings: Settings, repository: InMemoryWishlistRepository
) -> Generator[TestClient, None, None]:
    app = create_app(settings=test_settings, repository=repository)
    with TestClient(app) as c:
        yield c
