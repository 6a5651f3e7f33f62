"""
Domain Exceptions

Typed error taxonomy for the wishlist service. Every failure the
orchestrator can observe is one of these, discriminated by ``error_type``
so callers can decide between surfacing, retrying, or reporting the
service as unavailable.
"""

from enum import Enum
from typing import Any


class ErrorType(str, Enum):
    """Error type enumeration for discriminated handling."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONCURRENCY = "concurrency"
    STORAGE = "storage"


Details = dict[str, Any]


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    code = "DOMAIN_ERROR"

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: Details | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation errors: locally recoverable, never retried
class WishlistValidationError(DomainError):
    """Raised when a command violates a wishlist rule."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: Details | None = None) -> None:
        super().__init__(message, ErrorType.VALIDATION, details)


class DuplicateItemError(WishlistValidationError):
    """Raised when a product is already present in the wishlist."""

    code = "DUPLICATE_ITEM"

    def __init__(self, product_id: str) -> None:
        super().__init__(
            f"Product {product_id} already exists in wishlist",
            {"product_id": product_id},
        )
        self.product_id = product_id


class InvalidQuantityError(WishlistValidationError):
    """Raised when a quantity is not a positive integer."""

    code = "INVALID_QUANTITY"

    def __init__(self, quantity: Any) -> None:
        super().__init__(
            f"Quantity must be a positive integer, got {quantity!r}",
            {"quantity": quantity if isinstance(quantity, int) else str(quantity)},
        )
        self.quantity = quantity


class InvalidOrderError(WishlistValidationError):
    """Raised when a reorder request is not a permutation of current items."""

    code = "INVALID_ORDER"

    def __init__(
        self,
        missing: list[str] | None = None,
        unexpected: list[str] | None = None,
        duplicated: list[str] | None = None,
    ) -> None:
        details = {
            "missing": missing or [],
            "unexpected": unexpected or [],
            "duplicated": duplicated or [],
        }
        super().__init__(
            "New order must be a permutation of the wishlist's products", details
        )


class ItemNotFoundError(WishlistValidationError):
    """Raised when a product is not present in the wishlist."""

    code = "ITEM_NOT_FOUND"

    def __init__(self, product_id: str) -> None:
        super().__init__(
            f"Product {product_id} not found in wishlist",
            {"product_id": product_id},
        )
        self.product_id = product_id


class WishlistLimitExceededError(WishlistValidationError):
    """Raised when adding an item would exceed the wishlist capacity."""

    code = "WISHLIST_LIMIT_EXCEEDED"

    def __init__(self, max_items: int) -> None:
        super().__init__(
            f"Wishlist cannot exceed {max_items} products", {"max_items": max_items}
        )
        self.max_items = max_items


class InvalidIdentifierError(WishlistValidationError):
    """Raised when a customer or product identifier is malformed."""

    def __init__(self, field_name: str, errors: list[str]) -> None:
        super().__init__("; ".join(errors), {"field": field_name, "errors": errors})
        self.field_name = field_name
        self.code = f"INVALID_{field_name.upper()}"


class InvalidNoteError(WishlistValidationError):
    """Raised when an item note is too long."""

    code = "INVALID_NOTE"

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors), {"errors": errors})


# Not found
class WishlistNotFoundError(DomainError):
    """Raised when no wishlist exists for the given id."""

    code = "WISHLIST_NOT_FOUND"

    def __init__(self, wishlist_id: str, customer_id: str | None = None) -> None:
        details = {"wishlist_id": wishlist_id}
        if customer_id is not None:
            details["customer_id"] = customer_id
        super().__init__(
            f"Wishlist not found: {customer_id or wishlist_id}",
            ErrorType.NOT_FOUND,
            details,
        )
        self.wishlist_id = wishlist_id


# Concurrency errors: retried internally up to the bound
class ConcurrencyError(DomainError):
    """Base class for optimistic concurrency failures."""

    code = "CONCURRENCY_ERROR"

    def __init__(self, message: str, details: Details | None = None) -> None:
        super().__init__(message, ErrorType.CONCURRENCY, details)


class VersionConflictError(ConcurrencyError):
    """Raised when the stored version no longer matches the expected one."""

    code = "VERSION_CONFLICT"

    def __init__(self, wishlist_id: str, expected_version: int) -> None:
        super().__init__(
            f"Wishlist {wishlist_id} was modified concurrently "
            f"(expected version {expected_version})",
            {"wishlist_id": wishlist_id, "expected_version": expected_version},
        )
        self.wishlist_id = wishlist_id
        self.expected_version = expected_version


class ConcurrencyExhaustedError(ConcurrencyError):
    """Raised when the retry bound is exceeded under repeated conflicts."""

    code = "CONCURRENCY_EXHAUSTED"

    def __init__(self, wishlist_id: str, attempts: int) -> None:
        super().__init__(
            f"Gave up updating wishlist {wishlist_id} after {attempts} conflicting attempts",
            {"wishlist_id": wishlist_id, "attempts": attempts},
        )
        self.wishlist_id = wishlist_id
        self.attempts = attempts


# Storage errors: surfaced as service unavailable
class StorageFailureError(DomainError):
    """Raised on store timeouts and connection or driver failures."""

    code = "STORAGE_FAILURE"

    def __init__(self, message: str, operation: str | None = None) -> None:
        details = {"operation": operation} if operation else {}
        super().__init__(message, ErrorType.STORAGE, details)
        self.operation = operation
