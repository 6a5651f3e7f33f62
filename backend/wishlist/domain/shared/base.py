"""Base classes for domain entities and value objects."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision, which BSON dates cannot hold."""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def utcnow() -> datetime:
    return truncate_to_millis(datetime.now(timezone.utc))


class ValueObject(BaseModel):
    """Base class for value objects (immutable, defined by their values)."""

    model_config = ConfigDict(frozen=True)

    def __eq__(self, other: Any) -> bool:
        """Value objects are equal if all their attributes are equal."""
        if not isinstance(other, self.__class__):
            return False
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.model_dump().items())))


class Entity(BaseModel, ABC):
    """Base class for entities (have identity, can change over time)."""

    model_config = ConfigDict(frozen=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    @abstractmethod
    def identity(self) -> Any:
        """Stable identifier of the entity."""

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same identity and type."""
        if not isinstance(other, self.__class__):
            return False
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)

    @abstractmethod
    def is_valid(self) -> bool:
        """Validate business rules for this entity."""


class AggregateRoot(Entity, ABC):
    """
    Base class for aggregate roots (entities that control consistency boundaries).

    Aggregates are immutable snapshots: every mutation produces a new instance
    with ``pending_changes`` incremented. ``version`` is the persisted version
    the snapshot was derived from and is only advanced by the store.
    """

    version: int = 0
    pending_changes: int = 0

    @property
    def is_dirty(self) -> bool:
        return self.pending_changes > 0

    def _touch(self, **changes: Any) -> "AggregateRoot":
        changes.setdefault("updated_at", utcnow())
        changes["pending_changes"] = self.pending_changes + 1
        return self.model_copy(update=changes)
