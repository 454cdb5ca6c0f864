"""Account repository interfaces.

``IBankAccountRepository`` serves both bank-account management and the
purchase path's read-only resolution of a bank account to its owner.
``IUserDirectory`` is the read-only lookup of user identity.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.contrib.auth.models import AbstractBaseUser

    from modules.accounts.models import BankAccount


class IBankAccountRepository(IRepository["BankAccount"]):
    """Repository contract for bank accounts."""

    @abstractmethod
    def list_by_owner(self, owner_id: int) -> List[BankAccount]:
        """Live bank accounts of one user, oldest first."""


class IUserDirectory(ABC):
    """Read-only user look-ups."""

    @abstractmethod
    def get_by_id(self, user_id: int) -> Optional[AbstractBaseUser]:
        """Return the active user with this ID, or ``None``."""
