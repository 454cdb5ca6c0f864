"""Payment domain exceptions.

Raised by the Purchase Engine.  ``PurchaseTargetNotFound`` and
``InsufficientQuantity`` are expected outcomes the API reports verbatim;
``PurchaseFailed`` wraps storage faults and carries no internal detail.
"""

from __future__ import annotations


class PurchaseTargetNotFound(Exception):
    """A product, bank account or seller referenced by a purchase is missing."""


class ProductNotFound(PurchaseTargetNotFound):
    pass


class BankAccountNotFound(PurchaseTargetNotFound):
    pass


class SellerNotFound(PurchaseTargetNotFound):
    pass


class InsufficientQuantity(Exception):
    """Stock observed under the row lock is below the requested quantity."""

    def __init__(self, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient quantity: requested {requested}, available {available}."
        )


class PurchaseFailed(Exception):
    """The purchase could not be completed because of a storage fault."""


class ImmutablePaymentError(Exception):
    """Payments are receipts: they are never updated or deleted."""
