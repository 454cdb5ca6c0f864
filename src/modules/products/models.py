"""Product and ProductTag models.

Rules implemented:
- Product name is unique among live (not soft-deleted) products.
- Price and stock quantity cannot be negative (DB check constraints).
- ``condition`` is either ``new`` or ``second``.
- ``purchase_count`` only grows; it is incremented by the purchase engine
  in the same statement that decrements stock.
- Tags live in ``product_tags`` (one row per tag, unique per product) so
  a tag-superset filter is one indexed sub-query per requested tag.
"""

from __future__ import annotations

from typing import List

import structlog
from django.conf import settings
from django.core.validators import MinLengthValidator
from django.db import models

from modules.core.models import SoftDeleteModel

logger = structlog.get_logger(__name__)

NAME_MIN_LENGTH = 5
NAME_MAX_LENGTH = 60


class ProductCondition(models.TextChoices):
    NEW = "new", "New"
    SECOND = "second", "Second"


class Product(SoftDeleteModel):
    """Catalog entry owned by a seller.

    No default ``ordering``: listings without a sort key use the storage
    order, and every other ordering is chosen by the query compiler.
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="products",
        editable=False,
    )
    name = models.CharField(
        max_length=NAME_MAX_LENGTH,
        validators=[MinLengthValidator(NAME_MIN_LENGTH)],
    )
    price = models.PositiveIntegerField()
    image_url = models.URLField(max_length=2048)
    stock_quantity = models.PositiveIntegerField(default=0)
    condition = models.CharField(
        max_length=10,
        choices=ProductCondition.choices,
    )
    is_purchaseable = models.BooleanField(default=True)
    purchase_count = models.PositiveIntegerField(default=0, editable=False)

    class Meta:
        db_table = "products"
        indexes = [
            models.Index(fields=["owner"], name="products_owner_idx"),
            models.Index(fields=["price"], name="products_price_idx"),
            models.Index(fields=["created_at"], name="products_created_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["name"],
                condition=models.Q(deleted_at__isnull=True),
                name="products_live_name_unique",
            ),
            models.CheckConstraint(
                condition=models.Q(stock_quantity__gte=0),
                name="products_stock_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
        ]

    @property
    def tag_names(self) -> List[str]:
        """Tag names in insertion order (uses the prefetch cache if present)."""
        return [tag.name for tag in self.tags.all()]

    def set_tags(self, names: List[str]) -> None:
        """Replace the product's tag set.  The product must be saved."""
        wanted = list(dict.fromkeys(names))
        self.tags.exclude(name__in=wanted).delete()
        existing = set(self.tags.values_list("name", flat=True))
        ProductTag.objects.bulk_create(
            ProductTag(product=self, name=name)
            for name in wanted
            if name not in existing
        )
        # Drop a stale prefetch cache so ``tag_names`` re-reads the rows.
        getattr(self, "_prefetched_objects_cache", {}).pop("tags", None)

    def __str__(self) -> str:
        return self.name


class ProductTag(models.Model):
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="tags",
    )
    name = models.CharField(max_length=50)

    class Meta:
        db_table = "product_tags"
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "name"],
                name="product_tags_product_name_unique",
            ),
        ]
        indexes = [
            models.Index(fields=["name", "product"], name="product_tags_name_idx"),
        ]

    def __str__(self) -> str:
        return self.name
