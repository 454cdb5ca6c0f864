"""Account API views.

Domain exceptions are caught here and translated into HTTP status codes.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import GenericViewSet

from modules.accounts.dtos import BankAccountDTO, UpdateBankAccountDTO
from modules.accounts.exceptions import (
    BankAccountNotFound,
    BankAccountOwnershipError,
    UserNotFound,
)
from modules.accounts.repositories.django_repository import (
    BankAccountDjangoRepository,
    UserDjangoDirectory,
)
from modules.accounts.serializers import BankAccountSerializer, UserIdentitySerializer
from modules.accounts.services import BankAccountService

_NOT_FOUND = {"detail": "Bank account not found."}


def _build_service() -> BankAccountService:
    return BankAccountService(
        repository=BankAccountDjangoRepository(),
        user_directory=UserDjangoDirectory(),
    )


class BankAccountViewSet(GenericViewSet):
    """Bank accounts of the authenticated user.

    Every route requires authentication (project default).  Accounts owned
    by other users answer 403 on mutation.
    """

    serializer_class = BankAccountSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _build_service()

    def list(self, request: Request) -> Response:
        """GET /api/v1/bank-accounts/"""
        accounts = self._service.list_bank_accounts(request.user.pk)
        return Response(BankAccountSerializer(accounts, many=True).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/bank-accounts/"""
        data = request.data
        try:
            dto = BankAccountDTO(
                bank_name=data.get("bank_name", ""),
                bank_account_name=data.get("bank_account_name", ""),
                bank_account_number=data.get("bank_account_number", ""),
            )
        except (PydanticValidationError, ValueError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        account = self._service.create_bank_account(request.user.pk, dto)
        return Response(
            BankAccountSerializer(account).data, status=status.HTTP_201_CREATED
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/bank-accounts/{pk}/"""
        data = request.data
        try:
            dto = UpdateBankAccountDTO(
                bank_name=data.get("bank_name"),
                bank_account_name=data.get("bank_account_name"),
                bank_account_number=data.get("bank_account_number"),
            )
        except (PydanticValidationError, ValueError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            account = self._service.update_bank_account(pk, request.user.pk, dto)
        except BankAccountNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except BankAccountOwnershipError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)

        return Response(BankAccountSerializer(account).data)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/bank-accounts/{pk}/"""
        return self.partial_update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/bank-accounts/{pk}/"""
        try:
            self._service.delete_bank_account(pk, request.user.pk)
        except BankAccountNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except BankAccountOwnershipError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MeView(APIView):
    """GET /api/v1/me: identity of the authenticated caller."""

    def get(self, request: Request) -> Response:
        try:
            identity = _build_service().get_identity(request.user.pk)
        except UserNotFound:
            return Response(
                {"detail": "User not found."}, status=status.HTTP_404_NOT_FOUND
            )
        return Response(UserIdentitySerializer(identity.model_dump()).data)
