"""Bank account model.

A bank account is where a seller receives off-platform transfers.  Buyers
pick one of the seller's accounts when purchasing; the purchase copies the
account details into the receipt, so later edits never alter history.

Rules:
- Ownership never transfers (``owner`` is not editable).
- ``bank_name``, ``bank_account_name`` and ``bank_account_number`` are
  5–15 characters long.
- Soft delete via ``deleted_at``.  Receipts keep a PROTECTed reference.
"""

from __future__ import annotations

import structlog
from django.conf import settings
from django.core.validators import MaxLengthValidator, MinLengthValidator
from django.db import models

from modules.core.models import SoftDeleteModel

logger = structlog.get_logger(__name__)

FIELD_MIN_LENGTH = 5
FIELD_MAX_LENGTH = 15

_length_validators = [
    MinLengthValidator(FIELD_MIN_LENGTH),
    MaxLengthValidator(FIELD_MAX_LENGTH),
]


class BankAccount(SoftDeleteModel):
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="bank_accounts",
        editable=False,
    )
    bank_name = models.CharField(
        max_length=FIELD_MAX_LENGTH, validators=_length_validators
    )
    bank_account_name = models.CharField(
        max_length=FIELD_MAX_LENGTH, validators=_length_validators
    )
    bank_account_number = models.CharField(
        max_length=FIELD_MAX_LENGTH, validators=_length_validators
    )

    class Meta:
        db_table = "bank_accounts"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["owner"], name="bank_accounts_owner_idx"),
        ]

    def __str__(self) -> str:
        suffix = self.bank_account_number[-4:] if self.bank_account_number else ""
        return f"{self.bank_name} ***{suffix}"
