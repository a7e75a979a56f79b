"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.

A repository instance is an explicitly owned store handle: whoever
creates it is responsible for ``connect()`` / ``sync()`` at boot and
``disconnect()`` at shutdown.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ContextManager, Generic, List, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Product``).
    """

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @abstractmethod
    def connect(self) -> None:
        """Open (and authenticate) the underlying connection."""

    @abstractmethod
    def sync(self) -> None:
        """Bring the store schema up to date."""

    @abstractmethod
    def disconnect(self) -> None:
        """Release the underlying connection."""

    @abstractmethod
    def ping(self) -> bool:
        """Return ``True`` when the store answers a trivial query."""

    @abstractmethod
    def atomic(self) -> ContextManager[None]:
        """Run the enclosed operations as one store transaction."""

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    def list(self) -> List[T]:
        """List all entities."""

    @abstractmethod
    def create(self, entity: T) -> T:
        """Insert a new entity; the store assigns its key."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist changes to an existing entity."""

    @abstractmethod
    def delete(self, entity: T) -> None:
        """Permanently remove an entity."""
