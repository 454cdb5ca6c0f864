"""Payment repository interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from modules.payments.models import Payment


class IPaymentRepository(ABC):
    """Append-only store of purchase receipts.

    There is deliberately no ``save`` for existing rows and no ``delete``.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Payment:
        """Insert one receipt row and return it."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Payment]:
        """Return the receipt, or ``None`` for a missing or malformed ID."""

    @abstractmethod
    def set_lock_timeout(self, milliseconds: int) -> None:
        """Bound row-lock waits for the rest of the current transaction."""
