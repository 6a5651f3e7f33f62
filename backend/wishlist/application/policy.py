"""
Orchestration policy values.

Retry delays follow exponential backoff with optional full jitter so that
competing writers on a hot wishlist spread out instead of colliding again.
"""

import random
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry configuration for version conflicts."""

    max_retries: int = 3
    base_delay_seconds: float = 0.01
    max_delay_seconds: float = 0.25
    multiplier: float = 2.0
    jitter: bool = True

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must not be negative")
        if self.base_delay_seconds < 0 or self.max_delay_seconds < 0:
            raise ValueError("retry delays must not be negative")

    @property
    def max_attempts(self) -> int:
        """Total attempts including the first one."""
        return self.max_retries + 1

    def calculate_delay(self, retry_number: int) -> float:
        """Calculate the delay before the given retry (1-based)."""
        base_delay = self.base_delay_seconds * (self.multiplier ** (retry_number - 1))
        capped = min(base_delay, self.max_delay_seconds)
        if self.jitter:
            return random.uniform(0, capped)
        return capped


@dataclass(frozen=True)
class WishlistPolicy:
    """Rules handed to the application service at construction time."""

    max_items: int = 20
    note_max_length: int = 500
    store_timeout_seconds: float = 2.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
