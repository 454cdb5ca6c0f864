"""Django ORM implementations of the account repositories.

Look-ups follow the Null Object pattern: a miss (or a malformed ID) returns
``None`` and the Service Layer decides what that means.
"""

from __future__ import annotations

from typing import List, Optional

import structlog
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AbstractBaseUser
from django.db import transaction

from modules.accounts.models import BankAccount
from modules.accounts.repositories.interfaces import (
    IBankAccountRepository,
    IUserDirectory,
)

logger = structlog.get_logger(__name__)


class BankAccountDjangoRepository(IBankAccountRepository):
    """Concrete bank account repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[BankAccount]:
        try:
            return (
                BankAccount.objects.alive()
                .select_related("owner")
                .filter(id=id)
                .first()
            )
        except (TypeError, ValueError):
            return None

    def list_by_owner(self, owner_id: int) -> List[BankAccount]:
        return list(BankAccount.objects.alive().filter(owner_id=owner_id))

    @transaction.atomic
    def save(self, entity: BankAccount) -> BankAccount:
        entity.save()
        logger.info(
            "bank_account.saved",
            bank_account_id=entity.id,
            owner_id=entity.owner_id,
        )
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        account = self.get_by_id(id)
        if not account:
            return False
        account.delete()
        logger.info("bank_account.soft_deleted", bank_account_id=id)
        return True


class UserDjangoDirectory(IUserDirectory):
    """User look-ups against ``AUTH_USER_MODEL``."""

    def get_by_id(self, user_id: int) -> Optional[AbstractBaseUser]:
        User = get_user_model()
        try:
            return User.objects.filter(pk=user_id, is_active=True).first()
        except (TypeError, ValueError):
            return None
