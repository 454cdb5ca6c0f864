"""Django ORM implementation of the Payment repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import connection

from modules.payments.models import Payment
from modules.payments.repositories.interfaces import IPaymentRepository

logger = structlog.get_logger(__name__)


class PaymentDjangoRepository(IPaymentRepository):
    """Concrete Payment repository backed by Django ORM."""

    def create(self, data: Dict[str, Any]) -> Payment:
        payment = Payment.objects.create(**data)
        logger.info(
            "payment.recorded",
            payment_id=str(payment.id),
            product_id=payment.product_id,
            quantity=payment.quantity,
        )
        return payment

    def get_by_id(self, id: str) -> Optional[Payment]:
        try:
            return Payment.objects.filter(id=id).first()
        except (TypeError, ValueError, ValidationError):
            return None

    def set_lock_timeout(self, milliseconds: int) -> None:
        """PostgreSQL only; other backends keep their own lock-wait policy."""
        if connection.vendor != "postgresql":
            return
        with connection.cursor() as cursor:
            cursor.execute(
                "SELECT set_config('lock_timeout', %s, true)", [f"{milliseconds}ms"]
            )
