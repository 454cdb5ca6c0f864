"""Generic repository interface.

``IRepository[T]`` is the base contract every module repository extends.
Services depend on these abstractions and never on the ORM directly, which
keeps them testable with ``MagicMock`` repositories.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Look-ups return ``None`` on a miss; the service layer decides which
    domain exception a missing entity becomes.
    """

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Retrieve a live entity by its primary key."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity."""

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Soft-delete an entity by ID."""
