"""Payment model: the immutable purchase receipt.

Rules implemented:
- Created only by the purchase engine, in the same transaction that
  decrements stock.
- Product, bank account and identity data are copied onto the row at
  purchase time, so later catalog edits never re-price a receipt.
- Any attempt to update or delete a stored payment raises
  ``ImmutablePaymentError``, through the instance or through a queryset.
- ``product`` and ``bank_account`` use PROTECT to keep financial history.
"""

from __future__ import annotations

import uuid6
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.payments.exceptions import ImmutablePaymentError


class PaymentQuerySet(models.QuerySet):
    def update(self, **kwargs):
        raise ImmutablePaymentError("Payments cannot be updated.")

    def delete(self):
        raise ImmutablePaymentError("Payments cannot be deleted.")


class Payment(BaseModel):
    """Point-in-time receipt of a purchase claim.

    The UUIDv7 ``id`` is time-ordered, so receipts sort by creation.
    ``buyer`` is empty for purchases made without an authenticated caller.
    """

    id = models.UUIDField(primary_key=True, default=uuid6.uuid7, editable=False)
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="payments",
    )
    bank_account = models.ForeignKey(
        "accounts.BankAccount",
        on_delete=models.PROTECT,
        related_name="payments",
    )
    buyer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="purchases",
        null=True,
        blank=True,
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    payment_proof_image_url = models.URLField(max_length=2048)

    # Product snapshot
    product_name = models.CharField(max_length=60)
    product_image_url = models.URLField(max_length=2048)
    product_price = models.PositiveIntegerField()

    # Seller snapshot
    seller_id = models.PositiveBigIntegerField()
    seller_username = models.CharField(max_length=150)
    # Full names join first_name (150), a space and last_name (150).
    seller_name = models.CharField(max_length=301)

    # Buyer snapshot
    buyer_username = models.CharField(max_length=150, blank=True, default="")
    buyer_name = models.CharField(max_length=301, blank=True, default="")

    # Bank snapshot
    bank_name = models.CharField(max_length=15)
    bank_account_name = models.CharField(max_length=15)
    bank_account_number = models.CharField(max_length=15)

    objects = PaymentQuerySet.as_manager()

    class Meta:
        db_table = "payments"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["seller_id", "created_at"], name="payments_seller_idx"),
            models.Index(fields=["buyer", "created_at"], name="payments_buyer_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="payments_quantity_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"Payment {self.id} ({self.quantity} x {self.product_name})"

    @property
    def total_price(self) -> int:
        return self.product_price * self.quantity

    def save(self, *args, **kwargs) -> None:
        if not self._state.adding:
            raise ImmutablePaymentError(f"Payment {self.id} cannot be updated.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutablePaymentError(f"Payment {self.id} cannot be deleted.")
