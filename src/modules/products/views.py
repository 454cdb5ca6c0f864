"""Product API views.

Exposes ``ProductService`` over HTTP.  Domain exceptions are caught and
translated into status codes; the view never swallows generic exceptions.
"""

from __future__ import annotations

from django.conf import settings
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.accounts.exceptions import UserNotFound
from modules.accounts.repositories.django_repository import (
    BankAccountDjangoRepository,
    UserDjangoDirectory,
)
from modules.accounts.services import BankAccountService
from modules.core.pagination import limit_offset_response
from modules.products.dtos import CreateProductDTO, ProductFilterDTO, UpdateProductDTO
from modules.products.exceptions import (
    ProductAlreadyExists,
    ProductNotFound,
    ProductOwnershipError,
)
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import (
    ProductListQuerySerializer,
    ProductSerializer,
    StockUpdateSerializer,
)
from modules.products.services import ProductService

_NOT_FOUND = {"detail": "Product not found."}

_PUBLIC_ACTIONS = {"list", "retrieve"}


class ProductViewSet(GenericViewSet):
    """Catalog endpoints.

    Listing and detail are public; an authenticated caller may additionally
    restrict the listing to their own products with ``user_only``.  Every
    mutation requires authentication and ownership.
    """

    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(
            repository=ProductDjangoRepository(),
            account_service=BankAccountService(
                repository=BankAccountDjangoRepository(),
                user_directory=UserDjangoDirectory(),
            ),
        )

    def get_permissions(self):
        if self.action in _PUBLIC_ACTIONS:
            return [AllowAny()]
        return [IsAuthenticated()]

    def get_throttles(self) -> list[BaseThrottle]:
        self.throttle_scope = "listing" if self.action in _PUBLIC_ACTIONS else None
        return super().get_throttles()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/"""
        query = ProductListQuerySerializer.from_query_params(request.query_params)
        query.is_valid(raise_exception=True)
        params = dict(query.validated_data)
        if params.get("limit") is None:
            params["limit"] = settings.DEFAULT_PAGE_LIMIT

        spec = ProductFilterDTO(**params)
        caller_id = request.user.pk if request.user.is_authenticated else None
        products, total = self._service.list_products(spec, caller_id)

        return limit_offset_response(
            ProductSerializer(products, many=True).data,
            total=total,
            limit=spec.limit,
            offset=spec.offset,
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/ (product plus seller profile)."""
        try:
            product, seller = self._service.get_product_detail(pk)
        except ProductNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except UserNotFound:
            return Response(
                {"detail": "Seller not found."}, status=status.HTTP_404_NOT_FOUND
            )

        return Response(
            {
                "product": ProductSerializer(product).data,
                "seller": seller.model_dump(),
            }
        )

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        data = request.data
        try:
            dto = CreateProductDTO(
                name=data.get("name", ""),
                price=data.get("price"),
                image_url=data.get("image_url", ""),
                stock_quantity=data.get("stock_quantity", 0),
                condition=data.get("condition"),
                tags=data.get("tags", []),
                is_purchaseable=data.get("is_purchaseable", True),
            )
        except (PydanticValidationError, ValueError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            product = self._service.create_product(request.user.pk, dto)
        except ProductAlreadyExists as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        return Response(
            ProductSerializer(product).data, status=status.HTTP_201_CREATED
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        data = request.data
        try:
            dto = UpdateProductDTO(
                name=data.get("name"),
                price=data.get("price"),
                image_url=data.get("image_url"),
                stock_quantity=data.get("stock_quantity"),
                condition=data.get("condition"),
                tags=data.get("tags"),
                is_purchaseable=data.get("is_purchaseable"),
            )
        except (PydanticValidationError, ValueError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            product = self._service.update_product(pk, request.user.pk, dto)
        except ProductNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except ProductOwnershipError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        except ProductAlreadyExists as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        return Response(ProductSerializer(product).data)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}/"""
        return self.partial_update(request, pk)

    @action(detail=True, methods=["post", "patch"], url_path="stock")
    def update_stock(self, request: Request, pk: str | None = None) -> Response:
        """POST|PATCH /api/v1/products/{pk}/stock/ with ``{"stock_quantity": N}``."""
        payload = StockUpdateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        try:
            product = self._service.update_stock(
                pk, request.user.pk, payload.validated_data["stock_quantity"]
            )
        except ProductNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except ProductOwnershipError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)

        return Response(ProductSerializer(product).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        try:
            self._service.delete_product(pk, request.user.pk)
        except ProductNotFound:
            return Response(_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except ProductOwnershipError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        return Response(status=status.HTTP_204_NO_CONTENT)
