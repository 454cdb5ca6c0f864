"""Purchase Engine (Use Case).

``PurchaseService.buy`` runs the check-decrement-record sequence:

1. Resolve the bank account to its owner and transfer details.
2. Resolve the seller (and buyer) identity.
3. Open a transaction.
4. Lock the product row (``SELECT ... FOR UPDATE``).
5. Compare the locked stock against the requested quantity.
6. Decrement stock and bump ``purchase_count`` in one ``UPDATE``.
7. Insert the receipt with its snapshots.
8. Commit; any exception inside the block rolls everything back.

The row lock serializes concurrent buyers of one product; purchases of
different products never touch each other's rows.  Stock is always read
under the lock and never cached.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
from django.db import DatabaseError, transaction

from modules.accounts.dtos import UserIdentityDTO
from modules.payments.exceptions import (
    BankAccountNotFound,
    InsufficientQuantity,
    ProductNotFound,
    PurchaseFailed,
    SellerNotFound,
)

if TYPE_CHECKING:
    from modules.accounts.models import BankAccount
    from modules.accounts.repositories.interfaces import (
        IBankAccountRepository,
        IUserDirectory,
    )
    from modules.payments.dtos import PurchaseDTO
    from modules.payments.models import Payment
    from modules.payments.repositories.interfaces import IPaymentRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class PurchaseService:
    """Application service for the purchase use-case.

    Receives repositories via constructor injection.  ``lock_timeout_ms``
    bounds how long a buyer waits behind a competing purchase; ``None``
    leaves the database default in place.
    """

    def __init__(
        self,
        product_repository: IProductRepository,
        bank_account_repository: IBankAccountRepository,
        user_directory: IUserDirectory,
        payment_repository: IPaymentRepository,
        lock_timeout_ms: Optional[int] = None,
    ) -> None:
        self._product_repo = product_repository
        self._bank_account_repo = bank_account_repository
        self._users = user_directory
        self._payment_repo = payment_repository
        self._lock_timeout_ms = lock_timeout_ms

    def buy(self, dto: PurchaseDTO, buyer_id: Optional[int] = None) -> Payment:
        """Buy ``dto.quantity`` units of a product against a bank account.

        Raises:
            BankAccountNotFound: the bank account does not exist.
            SellerNotFound: the bank account owner is gone or inactive.
            ProductNotFound: the product does not exist.
            InsufficientQuantity: locked stock is below the request.
            PurchaseFailed: a database error aborted the transaction.
        """
        log = logger.bind(
            product_id=dto.product_id,
            bank_account_id=dto.bank_account_id,
            quantity=dto.quantity,
            buyer_id=buyer_id,
        )
        log.info("purchase.started")

        # 1. Bank account
        account = self._bank_account_repo.get_by_id(dto.bank_account_id)
        if not account:
            log.warning("purchase.bank_account_not_found")
            raise BankAccountNotFound(
                f"Bank account {dto.bank_account_id} not found."
            )

        # 2. Identities (read-only, no locks)
        seller = self._users.get_by_id(account.owner_id)
        if not seller:
            log.warning("purchase.seller_not_found", seller_id=account.owner_id)
            raise SellerNotFound(f"Seller {account.owner_id} not found.")
        seller_identity = UserIdentityDTO.from_user(seller)

        buyer_identity = None
        if buyer_id is not None:
            buyer = self._users.get_by_id(buyer_id)
            if buyer:
                buyer_identity = UserIdentityDTO.from_user(buyer)

        # 3-8. Locked section
        try:
            payment = self._purchase_locked(
                dto, account, seller_identity, buyer_identity, log
            )
        except DatabaseError as exc:
            log.error("purchase.failed", error=str(exc), exc_info=True)
            raise PurchaseFailed("The purchase could not be completed.") from exc

        log.info("purchase.completed", payment_id=str(payment.id))
        return payment

    def _purchase_locked(
        self,
        dto: PurchaseDTO,
        account: BankAccount,
        seller: UserIdentityDTO,
        buyer: Optional[UserIdentityDTO],
        log,
    ) -> Payment:
        with transaction.atomic():
            if self._lock_timeout_ms:
                self._payment_repo.set_lock_timeout(self._lock_timeout_ms)

            product = self._product_repo.get_for_update(dto.product_id)
            if not product:
                log.warning("purchase.product_not_found")
                raise ProductNotFound(f"Product {dto.product_id} not found.")

            if product.stock_quantity < dto.quantity:
                log.warning(
                    "purchase.insufficient_quantity",
                    available=product.stock_quantity,
                )
                raise InsufficientQuantity(dto.quantity, product.stock_quantity)

            if not self._product_repo.record_sale(product.id, dto.quantity):
                # Guarded UPDATE matched nothing: the lock was not honoured.
                log.error(
                    "purchase.stock_guard_rejected",
                    available=product.stock_quantity,
                )
                raise InsufficientQuantity(dto.quantity, product.stock_quantity)

            return self._payment_repo.create(
                {
                    "product_id": product.id,
                    "bank_account_id": account.id,
                    "buyer_id": buyer.id if buyer else None,
                    "quantity": dto.quantity,
                    "payment_proof_image_url": dto.payment_proof_image_url,
                    "product_name": product.name,
                    "product_image_url": product.image_url,
                    "product_price": product.price,
                    "seller_id": seller.id,
                    "seller_username": seller.username,
                    "seller_name": seller.name,
                    "buyer_username": buyer.username if buyer else "",
                    "buyer_name": buyer.name if buyer else "",
                    "bank_name": account.bank_name,
                    "bank_account_name": account.bank_account_name,
                    "bank_account_number": account.bank_account_number,
                }
            )

    def get_receipt(self, payment_id: str, caller_id: int) -> Optional[Payment]:
        """Return the receipt if *caller_id* is its buyer or seller."""
        payment = self._payment_repo.get_by_id(payment_id)
        if not payment:
            return None
        if caller_id not in (payment.buyer_id, payment.seller_id):
            logger.warning(
                "payment.access_denied", payment_id=payment_id, caller_id=caller_id
            )
            return None
        return payment
