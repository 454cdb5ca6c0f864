"""Django ORM implementation of the Product repository.

Look-ups follow the Null Object pattern: they return ``None`` instead of
raising, and the Service Layer decides how a missing product surfaces.
Only live (not soft-deleted) products are visible through this class.
"""

from __future__ import annotations

from typing import List, Optional

import structlog
from django.db import transaction
from django.db.models import F, QuerySet, Sum
from django.utils import timezone

from modules.products.filters import CompiledListing
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    @staticmethod
    def _live() -> QuerySet:
        return Product.objects.alive()

    def get_by_id(self, id: int) -> Optional[Product]:
        """Returns ``None`` for missing, soft-deleted or malformed IDs."""
        try:
            return self._live().prefetch_related("tags").filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def get_by_name(self, name: str) -> Optional[Product]:
        return self._live().filter(name=name.strip()).first()

    def list_page(self, listing: CompiledListing) -> List[Product]:
        return list(listing.fetch(self._live().prefetch_related("tags")))

    def count(self, listing: CompiledListing) -> int:
        return listing.filter(self._live()).count()

    def sum_purchase_count_by_owner(self, owner_id: int) -> int:
        total = Product.objects.filter(owner_id=owner_id).aggregate(
            total=Sum("purchase_count")
        )["total"]
        return total or 0

    @transaction.atomic
    def save(
        self, entity: Product, update_fields: Optional[List[str]] = None
    ) -> Product:
        entity.save(update_fields=update_fields)
        logger.info("product.saved", product_id=entity.id, name=entity.name)
        return entity

    def replace_tags(self, product: Product, tags: List[str]) -> None:
        product.set_tags(tags)

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Soft-delete a product; ``False`` if no live product has this ID."""
        product = self.get_by_id(id)
        if not product:
            return False
        product.delete()
        logger.info("product.soft_deleted", product_id=id)
        return True

    # ------------------------------------------------------------------
    # Purchase path
    # ------------------------------------------------------------------

    def get_for_update(self, id: int) -> Optional[Product]:
        try:
            return self._live().select_for_update().filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def record_sale(self, id: int, quantity: int) -> bool:
        updated = (
            Product.objects.filter(id=id, stock_quantity__gte=quantity)
            .update(
                stock_quantity=F("stock_quantity") - quantity,
                purchase_count=F("purchase_count") + quantity,
                updated_at=timezone.now(),
            )
        )
        return updated == 1
