"""Account service layer (Use Cases).

Bank-account management for sellers, plus the seller profile shown on a
product page.  Mutations are restricted to the account owner.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import transaction

from modules.accounts.dtos import (
    BankAccountOutputDTO,
    SellerProfileDTO,
    UserIdentityDTO,
)
from modules.accounts.exceptions import (
    BankAccountNotFound,
    BankAccountOwnershipError,
    UserNotFound,
)
from modules.accounts.models import BankAccount

if TYPE_CHECKING:
    from modules.accounts.dtos import BankAccountDTO, UpdateBankAccountDTO
    from modules.accounts.repositories.interfaces import (
        IBankAccountRepository,
        IUserDirectory,
    )

logger = structlog.get_logger(__name__)


class BankAccountService:
    """Application service for bank-account use-cases."""

    def __init__(
        self,
        repository: IBankAccountRepository,
        user_directory: IUserDirectory,
    ) -> None:
        self._repo = repository
        self._users = user_directory

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_bank_account(self, owner_id: int, dto: BankAccountDTO) -> BankAccount:
        account = BankAccount(
            owner_id=owner_id,
            bank_name=dto.bank_name,
            bank_account_name=dto.bank_account_name,
            bank_account_number=dto.bank_account_number,
        )
        account = self._repo.save(account)
        logger.info(
            "bank_account.created", bank_account_id=account.id, owner_id=owner_id
        )
        return account

    @transaction.atomic
    def update_bank_account(
        self, id: int, owner_id: int, dto: UpdateBankAccountDTO
    ) -> BankAccount:
        """Update the supplied fields of an owned bank account.

        Raises:
            BankAccountNotFound: the account does not exist.
            BankAccountOwnershipError: the account belongs to someone else.
        """
        account = self._get_owned(id, owner_id)
        for field in ("bank_name", "bank_account_name", "bank_account_number"):
            value = getattr(dto, field)
            if value is not None:
                setattr(account, field, value)
        account = self._repo.save(account)
        logger.info("bank_account.updated", bank_account_id=id)
        return account

    @transaction.atomic
    def delete_bank_account(self, id: int, owner_id: int) -> None:
        self._get_owned(id, owner_id)
        self._repo.delete(id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_bank_accounts(self, owner_id: int) -> List[BankAccount]:
        return self._repo.list_by_owner(owner_id)

    def get_identity(self, user_id: int) -> UserIdentityDTO:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFound(f"User {user_id} not found.")
        return UserIdentityDTO.from_user(user)

    def get_seller_profile(
        self, seller_id: int, product_sold_total: int
    ) -> SellerProfileDTO:
        """Seller name, units sold across all their products and bank accounts.

        Raises:
            UserNotFound: the seller account no longer exists.
        """
        identity = self.get_identity(seller_id)
        accounts = [
            BankAccountOutputDTO.from_entity(account)
            for account in self._repo.list_by_owner(seller_id)
        ]
        return SellerProfileDTO(
            name=identity.name,
            product_sold_total=product_sold_total,
            bank_accounts=accounts,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_owned(self, id: int, owner_id: int) -> BankAccount:
        account = self._repo.get_by_id(id)
        if not account:
            raise BankAccountNotFound(f"Bank account {id} not found.")
        if account.owner_id != owner_id:
            logger.warning(
                "bank_account.ownership_denied",
                bank_account_id=id,
                caller_id=owner_id,
            )
            raise BankAccountOwnershipError(
                f"Bank account {id} belongs to another user."
            )
        return account
