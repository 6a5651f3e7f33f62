"""
Request and response models for the wishlist API.

Request models carry plain types only; rule checking is done by the
explicit validators in ``wishlist.application.validation``.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class AddItemRequest(BaseModel):
    """Optional body of an add-item command."""

    quantity: int = 1
    note: str | None = None
    idempotent: bool = Field(
        default=False,
        description="Treat re-adding an existing product as a successful no-op",
    )


class SetQuantityRequest(BaseModel):
    quantity: int


class ReorderRequest(BaseModel):
    product_ids: list[str]


class ItemResponse(BaseModel):
    product_id: str
    quantity: int
    note: str | None = None
    added_at: datetime


class WishlistResponse(BaseModel):
    customer_id: str
    wishlist_id: str
    items: list[ItemResponse]
    total_items: int
    max_items: int
    version: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AddItemResponse(BaseModel):
    message: str
    customer_id: str
    product_id: str
    added_at: datetime
    created: bool
    version: int


class ItemExistsResponse(BaseModel):
    customer_id: str
    product_id: str
    exists: bool
    added_at: datetime | None = None


class ApiErrorResponse(BaseModel):
    code: str
    message: str
    timestamp: datetime
    path: str
    details: dict[str, Any] = Field(default_factory=dict)
