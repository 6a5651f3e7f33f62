"""
Optimistic concurrency controller.

Drives one save attempt cycle per command::

    LOADED(version=v) -> mutate -> ATTEMPTING(expected=v) -> COMMITTED(v+1)
                                                          \\-> CONFLICTED -> reload

Conflicts are retried with backoff up to the policy bound, then surfaced as
ConcurrencyExhaustedError. Storage failures and validation errors are never
retried. Every store call carries a timeout.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from wishlist.application.policy import RetryPolicy
from wishlist.core.observability import get_logger
from wishlist.domain.shared.exceptions import (
    ConcurrencyExhaustedError,
    StorageFailureError,
    VersionConflictError,
    WishlistNotFoundError,
)
from wishlist.domain.wishlist.entities import Wishlist
from wishlist.domain.wishlist.repositories import WishlistRepository

logger = get_logger(__name__)

T = TypeVar("T")

Mutation = Callable[[Wishlist], Wishlist]
ConflictHook = Callable[[VersionConflictError, int], bool]


class SaveState(str, Enum):
    """Terminal states of a save attempt, as logged and reported."""

    COMMITTED = "committed"
    CONFLICTED = "conflicted"
    NOOP = "noop"


@dataclass
class CommitResult:
    """Outcome of a controlled mutation."""

    wishlist: Wishlist
    state: SaveState
    attempts: int

    @property
    def committed(self) -> bool:
        return self.state == SaveState.COMMITTED


class OptimisticConcurrencyController:
    """Load, mutate and conditionally save a wishlist with bounded retries."""

    def __init__(
        self,
        repository: WishlistRepository,
        retry_policy: RetryPolicy,
        timeout_seconds: float,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize the controller.

        Args:
            repository: Store adapter
            retry_policy: Bound and backoff for version conflicts
            timeout_seconds: Timeout applied to every store call
            sleep: Awaitable used for backoff delays
        """
        self._repository = repository
        self._retry_policy = retry_policy
        self._timeout_seconds = timeout_seconds
        self._sleep = sleep

    async def load(self, wishlist_id: str) -> Wishlist:
        """Load the stored snapshot, raising WishlistNotFoundError if absent."""
        return await self._call(self._repository.load(wishlist_id), "load")

    async def ping(self) -> bool:
        try:
            return await self._call(self._repository.ping(), "ping")
        except StorageFailureError:
            return False

    async def execute(
        self,
        wishlist_id: str,
        mutate: Mutation,
        *,
        create: Callable[[], Wishlist] | None = None,
        on_conflict: ConflictHook | None = None,
    ) -> CommitResult:
        """
        Apply ``mutate`` to the latest stored state and save it conditionally.

        Args:
            wishlist_id: Wishlist to mutate
            mutate: Pure function producing the new snapshot; may raise
                validation errors, which abort before any write
            create: Factory for a fresh wishlist when none is stored; without
                it a missing wishlist raises WishlistNotFoundError
            on_conflict: Retry hook called with the conflict and the attempt
                number; returning False surfaces the
                VersionConflictError instead of retrying

        Returns:
            CommitResult with the committed (or unchanged) snapshot

        Raises:
            VersionConflictError: If the retry hook declines a retry
            ConcurrencyExhaustedError: If conflicts outlast the retry bound
            StorageFailureError: On store timeout or failure
        """
        max_attempts = self._retry_policy.max_attempts

        for attempt in range(1, max_attempts + 1):
            current = await self._load_or_create(wishlist_id, create)
            mutated = mutate(current)
            if not mutated.is_dirty:
                return CommitResult(current, SaveState.NOOP, attempt)

            try:
                new_version = await self._call(
                    self._repository.save(mutated, expected_version=current.version),
                    "save",
                )
            except VersionConflictError as conflict:
                logger.info(
                    "Version conflict on wishlist save",
                    wishlist_id=wishlist_id,
                    expected_version=current.version,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    state=SaveState.CONFLICTED.value,
                )
                if on_conflict is not None and not on_conflict(conflict, attempt):
                    raise
                if attempt >= max_attempts:
                    raise ConcurrencyExhaustedError(wishlist_id, attempt) from conflict
                await self._sleep(self._retry_policy.calculate_delay(attempt))
                continue

            committed = mutated.model_copy(
                update={"version": new_version, "pending_changes": 0}
            )
            return CommitResult(committed, SaveState.COMMITTED, attempt)

        # unreachable
        raise ConcurrencyExhaustedError(wishlist_id, max_attempts)

    async def _load_or_create(
        self, wishlist_id: str, create: Callable[[], Wishlist] | None
    ) -> Wishlist:
        try:
            return await self.load(wishlist_id)
        except WishlistNotFoundError:
            if create is None:
                raise
            return create()

    async def _call(self, awaitable: Awaitable[T], operation: str) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout_seconds)
        except asyncio.TimeoutError as e:
            raise StorageFailureError(
                f"Store {operation} timed out after {self._timeout_seconds}s",
                operation=operation,
            ) from e
