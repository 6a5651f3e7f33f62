"""
Application services for coordinating wishlist use cases.

The orchestrator validates commands, runs them through the optimistic
concurrency controller, and emits one structured event per command.
"""

from .concurrency_controller import (
    CommitResult,
    OptimisticConcurrencyController,
    SaveState,
)
from .wishlist_service import WishlistApplicationService

__all__ = [
    "CommitResult",
    "OptimisticConcurrencyController",
    "SaveState",
    "WishlistApplicationService",
]
