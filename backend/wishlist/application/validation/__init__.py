"""
Explicit request validation.

Validators return ValidationResult instead of raising, so the orchestrator
decides how each failure is surfaced before any store I/O happens.
"""

from .validators import (
    CUSTOMER_ID_PATTERN,
    PRODUCT_ID_PATTERN,
    ValidationResult,
    validate_customer_id,
    validate_note,
    validate_product_id,
    validate_product_order,
    validate_quantity,
)

__all__ = [
    "CUSTOMER_ID_PATTERN",
    "PRODUCT_ID_PATTERN",
    "ValidationResult",
    "validate_customer_id",
    "validate_note",
    "validate_product_id",
    "validate_product_order",
    "validate_quantity",
]
