"""
Application layer validators for wishlist commands.

Each function checks one input and returns a ValidationResult; none of them
raise. Identifier formats match the public API contract.
"""

import re
from typing import Any

from wishlist.domain.wishlist.entities import MAX_QUANTITY

CUSTOMER_ID_PATTERN = re.compile(r"^[a-zA-Z0-9\-_]{1,50}$")
PRODUCT_ID_PATTERN = re.compile(r"^[a-zA-Z0-9\-_]{1,100}$")


class ValidationResult:
    """Result of a validation operation."""

    def __init__(self, is_valid: bool = True, errors: list[str] | None = None):
        """
        Initialize validation result.

        Args:
            is_valid: Whether validation passed
            errors: List of validation error messages
        """
        self.is_valid = is_valid
        self.errors = errors or []

    def __bool__(self) -> bool:
        return self.is_valid

    def __repr__(self) -> str:
        return f"ValidationResult(is_valid={self.is_valid}, errors={self.errors!r})"

    def add_error(self, error_message: str) -> None:
        """Add an error message and mark as invalid."""
        self.errors.append(error_message)
        self.is_valid = False


def _validate_identifier(
    value: Any, field_name: str, pattern: re.Pattern[str], max_length: int
) -> ValidationResult:
    result = ValidationResult()
    if value is None or (isinstance(value, str) and not value.strip()):
        result.add_error(f"{field_name} cannot be null or empty")
    elif not isinstance(value, str) or not pattern.match(value):
        result.add_error(
            f"Invalid {field_name} format: expected 1-{max_length} letters, "
            "digits, '-' or '_'"
        )
    return result


def validate_customer_id(customer_id: Any) -> ValidationResult:
    return _validate_identifier(customer_id, "customer ID", CUSTOMER_ID_PATTERN, 50)


def validate_product_id(product_id: Any) -> ValidationResult:
    return _validate_identifier(product_id, "product ID", PRODUCT_ID_PATTERN, 100)


def validate_quantity(quantity: Any) -> ValidationResult:
    """Quantity must be a positive integer (bools are not quantities)."""
    result = ValidationResult()
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        result.add_error(f"quantity must be an integer, got {quantity!r}")
    elif quantity <= 0:
        result.add_error(f"quantity must be at least 1, got {quantity}")
    elif quantity > MAX_QUANTITY:
        result.add_error(f"quantity must not exceed {MAX_QUANTITY}, got {quantity}")
    return result


def validate_note(note: str | None, max_length: int) -> ValidationResult:
    result = ValidationResult()
    if note is not None and len(note) > max_length:
        result.add_error(f"note must not exceed {max_length} characters")
    return result


def validate_product_order(product_ids: Any) -> ValidationResult:
    """Validate the shape of a reorder request; permutation checks belong to the aggregate."""
    result = ValidationResult()
    if not isinstance(product_ids, list | tuple):
        result.add_error("product_ids must be a list")
        return result
    for index, product_id in enumerate(product_ids):
        item_result = validate_product_id(product_id)
        if not item_result:
            result.add_error(f"product_ids[{index}]: {item_result.errors[0]}")
    return result
