"""Payment API views.

The purchase endpoint maps the engine's outcomes onto three distinct
responses: 404 for a missing target, 409 for insufficient stock, and a
generic 500 for storage faults.
"""

from __future__ import annotations

from django.conf import settings
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import GenericViewSet

from modules.accounts.repositories.django_repository import (
    BankAccountDjangoRepository,
    UserDjangoDirectory,
)
from modules.payments.dtos import PurchaseDTO
from modules.payments.exceptions import (
    InsufficientQuantity,
    PurchaseFailed,
    PurchaseTargetNotFound,
)
from modules.payments.repositories.django_repository import PaymentDjangoRepository
from modules.payments.serializers import PaymentSerializer, PurchaseRequestSerializer
from modules.payments.services import PurchaseService
from modules.products.repositories.django_repository import ProductDjangoRepository


def _build_service() -> PurchaseService:
    return PurchaseService(
        product_repository=ProductDjangoRepository(),
        bank_account_repository=BankAccountDjangoRepository(),
        user_directory=UserDjangoDirectory(),
        payment_repository=PaymentDjangoRepository(),
        lock_timeout_ms=settings.PURCHASE_LOCK_TIMEOUT_MS,
    )


class PurchaseView(APIView):
    """POST /api/v1/products/{pk}/buy/"""

    throttle_scope = "purchase"

    def post(self, request: Request, pk: int) -> Response:
        payload = PurchaseRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        try:
            dto = PurchaseDTO(product_id=pk, **payload.validated_data)
        except (PydanticValidationError, ValueError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            payment = _build_service().buy(dto, buyer_id=request.user.pk)
        except PurchaseTargetNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientQuantity as exc:
            return Response(
                {
                    "detail": str(exc),
                    "requested": exc.requested,
                    "available": exc.available,
                },
                status=status.HTTP_409_CONFLICT,
            )
        except PurchaseFailed:
            return Response(
                {"detail": "The purchase could not be completed. Please retry."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)


class PaymentViewSet(GenericViewSet):
    """Receipts, visible to their buyer or seller only."""

    serializer_class = PaymentSerializer

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/payments/{pk}/"""
        payment = _build_service().get_receipt(pk, request.user.pk)
        if not payment:
            return Response(
                {"detail": "Payment not found."}, status=status.HTTP_404_NOT_FOUND
            )
        return Response(PaymentSerializer(payment).data)
