"""Generic repository interfaces (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class for aggregate
repositories, and ``IReferenceRepository[T]``, the read-only contract
for entities other aggregates point at.  Service-layer code depends on
these abstractions, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Generic, Iterable, List, Optional, TypeVar
from uuid import UUID

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the entity managed by the
    repository (e.g. ``Shipment``).
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    def list(self) -> List[T]:
        """List all entities in the repository's default ordering."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Remove an entity by ID.  Returns ``False`` if it did not exist."""


class IReferenceRepository(ABC, Generic[T]):
    """Read-only repository for entities other aggregates point at.

    ``get_many`` backs the read-side join: callers collect the referenced
    ids of a page of records and resolve them in one round-trip.
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve an entity by its primary key; ``None`` if unknown."""

    @abstractmethod
    def get_many(self, ids: Iterable[UUID]) -> Dict[UUID, T]:
        """Return the entities found for ``ids``, keyed by primary key."""
