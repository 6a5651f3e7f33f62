"""
Wishlist application service (request orchestrator).

Maps each inbound command onto load -> mutate -> save-with-retry. Input
validation runs first so invalid commands never reach the store, and
aggregate validation failures abort before a write is attempted.
"""

import asyncio
import time
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from contextlib import asynccontextmanager
from typing import Any

from wishlist.application.policy import WishlistPolicy
from wishlist.core.observability import CONCURRENCY_CONFLICTS, record_command
from wishlist.domain.shared.exceptions import (
    DomainError,
    InvalidIdentifierError,
    InvalidNoteError,
    InvalidQuantityError,
    ItemNotFoundError,
    VersionConflictError,
    WishlistNotFoundError,
)
from wishlist.domain.wishlist import services as engine
from wishlist.domain.wishlist.entities import Wishlist, wishlist_id_for
from wishlist.domain.wishlist.repositories import WishlistRepository

from ..dtos.wishlist_dtos import (
    AddItemResponse,
    ItemExistsResponse,
    WishlistResponse,
)
from ..mappers.wishlist_mappers import WishlistDTOMapper
from ..validation import (
    validate_customer_id,
    validate_note,
    validate_product_id,
    validate_product_order,
    validate_quantity,
)
from .concurrency_controller import (
    CommitResult,
    ConflictHook,
    OptimisticConcurrencyController,
)


class WishlistApplicationService:
    """
    Application service for wishlist commands and queries.

    Receives its store adapter and policy explicitly; holds no per-request
    state, so one instance serves any number of concurrent requests.
    """

    def __init__(
        self,
        repository: WishlistRepository,
        policy: WishlistPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize the wishlist application service.

        Args:
            repository: Document store adapter
            policy: Capacity, timeout and retry policy values
            sleep: Awaitable used for conflict backoff
        """
        self._policy = policy or WishlistPolicy()
        self._controller = OptimisticConcurrencyController(
            repository,
            self._policy.retry,
            self._policy.store_timeout_seconds,
            sleep=sleep,
        )
        self._dto_mapper = WishlistDTOMapper(self._policy.max_items)

    @property
    def policy(self) -> WishlistPolicy:
        return self._policy

    async def ping_store(self) -> bool:
        return await self._controller.ping()

    # Queries

    async def get_wishlist(self, customer_id: str) -> WishlistResponse:
        """
        Get a customer's wishlist.

        A customer without a stored wishlist gets an empty view; nothing is
        persisted by reading.
        """
        async with self._command("get_wishlist", customer_id) as event:
            self._require_customer_id(customer_id)
            try:
                wishlist = await self._controller.load(wishlist_id_for(customer_id))
            except WishlistNotFoundError:
                wishlist = Wishlist.create(customer_id)
            event["version"] = wishlist.version
            return self._dto_mapper.wishlist_to_response(wishlist)

    async def check_item(self, customer_id: str, product_id: str) -> ItemExistsResponse:
        """
        Check whether a product is in the customer's wishlist.

        Raises:
            ItemNotFoundError: If the product (or the whole wishlist) is absent
        """
        async with self._command("check_item", customer_id, product_id=product_id):
            self._require_customer_id(customer_id)
            self._require_product_id(product_id)
            try:
                wishlist = await self._controller.load(wishlist_id_for(customer_id))
            except WishlistNotFoundError:
                raise ItemNotFoundError(product_id) from None
            item = wishlist.find_item(product_id)
            if item is None:
                raise ItemNotFoundError(product_id)
            return self._dto_mapper.item_exists_response(wishlist, item)

    # Commands

    async def add_item(
        self,
        customer_id: str,
        product_id: str,
        quantity: int = 1,
        note: str | None = None,
        idempotent: bool = False,
    ) -> AddItemResponse:
        """
        Add a product to the end of the customer's wishlist.

        The wishlist is created on the first add for a customer. With
        ``idempotent=True`` re-adding a present product succeeds without a
        write and reports ``created=False``.

        Raises:
            InvalidIdentifierError, InvalidQuantityError, InvalidNoteError:
                If the command is malformed
            DuplicateItemError: If the product is present and not idempotent
            WishlistLimitExceededError: If the wishlist is full
            ConcurrencyExhaustedError: If conflicts outlast the retry bound
            StorageFailureError: On store timeout or failure
        """
        async with self._command(
            "add_item", customer_id, product_id=product_id, idempotent=idempotent
        ) as event:
            self._require_customer_id(customer_id)
            self._require_product_id(product_id)
            self._require_quantity(quantity)
            self._require_note(note)

            def mutate(wishlist: Wishlist) -> Wishlist:
                if idempotent and wishlist.has_item(product_id):
                    return wishlist
                return engine.add_item(
                    wishlist,
                    product_id,
                    quantity,
                    note,
                    max_items=self._policy.max_items,
                )

            result = await self._controller.execute(
                wishlist_id_for(customer_id),
                mutate,
                create=lambda: Wishlist.create(customer_id),
                on_conflict=self._conflict_hook("add_item"),
            )
            self._annotate(event, result)
            return self._dto_mapper.add_item_response(
                result.wishlist, product_id, created=result.committed
            )

    async def remove_item(self, customer_id: str, product_id: str) -> WishlistResponse:
        """
        Remove a product, keeping the order of the remaining items.

        Raises:
            WishlistNotFoundError: If the customer has no wishlist
            ItemNotFoundError: If the product is not in the wishlist
        """
        async with self._command(
            "remove_item", customer_id, product_id=product_id
        ) as event:
            self._require_customer_id(customer_id)
            self._require_product_id(product_id)
            result = await self._mutate_existing(
                "remove_item",
                customer_id,
                lambda wishlist: engine.remove_item(wishlist, product_id),
            )
            self._annotate(event, result)
            return self._dto_mapper.wishlist_to_response(result.wishlist)

    async def set_quantity(
        self, customer_id: str, product_id: str, quantity: int
    ) -> WishlistResponse:
        """Change the quantity of an existing item."""
        async with self._command(
            "set_quantity", customer_id, product_id=product_id
        ) as event:
            self._require_customer_id(customer_id)
            self._require_product_id(product_id)
            self._require_quantity(quantity)
            result = await self._mutate_existing(
                "set_quantity",
                customer_id,
                lambda wishlist: engine.set_quantity(wishlist, product_id, quantity),
            )
            self._annotate(event, result)
            return self._dto_mapper.wishlist_to_response(result.wishlist)

    async def reorder(
        self, customer_id: str, product_ids: Sequence[str]
    ) -> WishlistResponse:
        """
        Replace the display order of the wishlist.

        Raises:
            InvalidOrderError: If ``product_ids`` is not a permutation of the
                current products
        """
        async with self._command("reorder", customer_id) as event:
            self._require_customer_id(customer_id)
            order_result = validate_product_order(product_ids)
            if not order_result:
                raise InvalidIdentifierError("product_id", order_result.errors)
            new_order = list(product_ids)
            result = await self._mutate_existing(
                "reorder",
                customer_id,
                lambda wishlist: engine.reorder(wishlist, new_order),
            )
            self._annotate(event, result)
            return self._dto_mapper.wishlist_to_response(result.wishlist)

    async def clear(self, customer_id: str) -> WishlistResponse:
        """
        Remove every item. The wishlist document is kept.

        Clearing an already empty wishlist succeeds without a write.

        Raises:
            WishlistNotFoundError: If the customer has no wishlist
        """
        async with self._command("clear", customer_id) as event:
            self._require_customer_id(customer_id)
            result = await self._mutate_existing(
                "clear",
                customer_id,
                lambda wishlist: engine.clear(wishlist) if wishlist.items else wishlist,
            )
            self._annotate(event, result)
            return self._dto_mapper.wishlist_to_response(result.wishlist)

    # Internals

    async def _mutate_existing(
        self,
        command: str,
        customer_id: str,
        mutate: Callable[[Wishlist], Wishlist],
    ) -> CommitResult:
        wishlist_id = wishlist_id_for(customer_id)
        try:
            return await self._controller.execute(
                wishlist_id, mutate, on_conflict=self._conflict_hook(command)
            )
        except WishlistNotFoundError as e:
            raise WishlistNotFoundError(wishlist_id, customer_id) from e

    def _conflict_hook(self, command: str) -> ConflictHook:
        def on_conflict(conflict: VersionConflictError, attempt: int) -> bool:
            CONCURRENCY_CONFLICTS.labels(command=command).inc()
            return True

        return on_conflict

    @staticmethod
    def _annotate(event: dict[str, Any], result: CommitResult) -> None:
        event["attempts"] = result.attempts
        event["version"] = result.wishlist.version
        if not result.committed:
            event["outcome"] = "noop"

    @asynccontextmanager
    async def _command(
        self, command: str, customer_id: str, **context: Any
    ) -> AsyncIterator[dict[str, Any]]:
        event: dict[str, Any] = {"customer_id": customer_id, **context}
        outcome = "ok"
        start = time.perf_counter()
        try:
            yield event
            outcome = event.pop("outcome", "ok")
        except DomainError as e:
            outcome = e.code
            raise
        except asyncio.CancelledError:
            outcome = "cancelled"
            raise
        except Exception as e:
            outcome = "error"
            event["error"] = str(e)
            raise
        finally:
            record_command(command, outcome, time.perf_counter() - start, **event)

    @staticmethod
    def _require_customer_id(customer_id: str) -> None:
        result = validate_customer_id(customer_id)
        if not result:
            raise InvalidIdentifierError("customer_id", result.errors)

    @staticmethod
    def _require_product_id(product_id: str) -> None:
        result = validate_product_id(product_id)
        if not result:
            raise InvalidIdentifierError("product_id", result.errors)

    @staticmethod
    def _require_quantity(quantity: int) -> None:
        if not validate_quantity(quantity):
            raise InvalidQuantityError(quantity)

    def _require_note(self, note: str | None) -> None:
        result = validate_note(note, self._policy.note_max_length)
        if not result:
            raise InvalidNoteError(result.errors)
