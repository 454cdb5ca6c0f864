"""Product service layer (Use Cases).

Orchestrates the catalog use-cases, delegating persistence to the injected
``IProductRepository``.

Rules enforced here:
- Product names are unique among live products.
- Only the owner may edit, restock or delete a product.
- Listings return a page and the total from the same compiled predicate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Tuple

import structlog
from django.db import IntegrityError, transaction

from modules.products.exceptions import (
    ProductAlreadyExists,
    ProductNotFound,
    ProductOwnershipError,
)
from modules.products.filters import compile_listing
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import (
        CreateProductDTO,
        ProductFilterDTO,
        UpdateProductDTO,
    )
    from modules.accounts.dtos import SellerProfileDTO
    from modules.accounts.services import BankAccountService
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

_EDITABLE_FIELDS = (
    "name",
    "price",
    "image_url",
    "stock_quantity",
    "condition",
    "is_purchaseable",
)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection, and
    optionally the ``BankAccountService`` used to build the seller block
    of a product detail.
    """

    def __init__(
        self,
        repository: IProductRepository,
        account_service: Optional[BankAccountService] = None,
    ) -> None:
        self._repo = repository
        self._accounts = account_service

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, owner_id: int, dto: CreateProductDTO) -> Product:
        """Create a product for *owner_id*.

        Raises:
            ProductAlreadyExists: another live product has the same name.
        """
        log = logger.bind(owner_id=owner_id, name=dto.name)

        if self._repo.get_by_name(dto.name):
            log.warning("product.duplicate_name")
            raise ProductAlreadyExists(f"Product name '{dto.name}' already exists.")

        product = Product(
            owner_id=owner_id,
            name=dto.name,
            price=dto.price,
            image_url=dto.image_url,
            stock_quantity=dto.stock_quantity,
            condition=dto.condition,
            is_purchaseable=dto.is_purchaseable,
        )
        product = self._save(product, dto.tags)
        log.info("product.created", product_id=product.id)
        return product

    @transaction.atomic
    def update_product(
        self, id: int, owner_id: int, dto: UpdateProductDTO
    ) -> Product:
        """Apply the supplied fields to an owned product.

        The row is locked like a purchase locks it, and only the supplied
        columns are written, so concurrent sales are never overwritten.

        Raises:
            ProductNotFound: the product does not exist.
            ProductOwnershipError: the product belongs to another seller.
            ProductAlreadyExists: the new name is taken.
        """
        product = self._get_owned(id, owner_id, lock=True)
        log = logger.bind(product_id=product.id)

        if dto.name is not None and dto.name != product.name:
            if self._repo.get_by_name(dto.name):
                log.warning("product.duplicate_name", name=dto.name)
                raise ProductAlreadyExists(
                    f"Product name '{dto.name}' already exists."
                )

        changed = []
        for field in _EDITABLE_FIELDS:
            value = getattr(dto, field)
            if value is not None:
                setattr(product, field, value)
                changed.append(field)

        product = self._save(
            product, dto.tags, update_fields=changed + ["updated_at"]
        )
        log.info("product.updated", fields=changed)
        return product

    @transaction.atomic
    def update_stock(self, id: int, owner_id: int, stock_quantity: int) -> Product:
        """Set the stock of an owned product to an explicit value.

        Raises:
            ProductNotFound: the product does not exist.
            ProductOwnershipError: the product belongs to another seller.
        """
        if stock_quantity < 0:
            raise ValueError("Stock quantity cannot be negative.")
        product = self._get_owned(id, owner_id, lock=True)
        product.stock_quantity = stock_quantity
        product = self._repo.save(
            product, update_fields=["stock_quantity", "updated_at"]
        )
        logger.info(
            "product.stock_set", product_id=product.id, stock_quantity=stock_quantity
        )
        return product

    @transaction.atomic
    def delete_product(self, id: int, owner_id: int) -> None:
        """Soft-delete an owned product.

        Raises:
            ProductNotFound: the product does not exist.
            ProductOwnershipError: the product belongs to another seller.
        """
        product = self._get_owned(id, owner_id)
        self._repo.delete(product.id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(
        self, spec: ProductFilterDTO, caller_id: Optional[int] = None
    ) -> Tuple[List[Product], int]:
        """Return one page of products and the total number of matches."""
        listing = compile_listing(spec, caller_id)
        products = self._repo.list_page(listing)
        total = self._repo.count(listing)
        logger.info(
            "product.listed",
            caller_id=caller_id,
            returned=len(products),
            total=total,
        )
        return products, total

    def get_product(self, id: int) -> Product:
        """Raises ``ProductNotFound`` if the product does not exist."""
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product

    def get_seller_sold_total(self, owner_id: int) -> int:
        return self._repo.sum_purchase_count_by_owner(owner_id)

    def get_product_detail(self, id: int) -> Tuple[Product, SellerProfileDTO]:
        """Return a product together with its seller block.

        Raises:
            ProductNotFound: the product does not exist.
            UserNotFound: the seller is gone or inactive.
        """
        if self._accounts is None:
            raise RuntimeError("Product details need an account service.")
        product = self.get_product(id)
        seller = self._accounts.get_seller_profile(
            product.owner_id, self.get_seller_sold_total(product.owner_id)
        )
        return product, seller

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_owned(self, id: int, owner_id: int, lock: bool = False) -> Product:
        # Locking reads must run inside the caller's transaction.
        product = self._repo.get_for_update(id) if lock else self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        if product.owner_id != owner_id:
            logger.warning(
                "product.ownership_denied", product_id=product.id, caller_id=owner_id
            )
            raise ProductOwnershipError(f"Product {id} belongs to another seller.")
        return product

    def _save(
        self,
        product: Product,
        tags: Optional[List[str]],
        update_fields: Optional[List[str]] = None,
    ) -> Product:
        # A concurrent insert can still win the unique name index.
        try:
            with transaction.atomic():
                product = self._repo.save(product, update_fields=update_fields)
                if tags is not None:
                    self._repo.replace_tags(product, tags)
        except IntegrityError as exc:
            logger.warning("product.name_conflict", name=product.name)
            raise ProductAlreadyExists(
                f"Product name '{product.name}' already exists."
            ) from exc
        return product
