"""Product repository interface.

Extends ``IRepository[Product]`` with the catalog look-ups used by the
services: name uniqueness, compiled listings (page + count from one
predicate), the seller's sold-units rollup and the purchase row lock.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.filters import CompiledListing
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Product]:
        """Retrieve a live product by exact name."""

    @abstractmethod
    def list_page(self, listing: CompiledListing) -> List[Product]:
        """Rows of one listing page, tags prefetched."""

    @abstractmethod
    def count(self, listing: CompiledListing) -> int:
        """Rows matching the listing predicate, ignoring ordering and paging."""

    @abstractmethod
    def sum_purchase_count_by_owner(self, owner_id: int) -> int:
        """Total units sold across all of a seller's products."""

    @abstractmethod
    def save(
        self, entity: Product, update_fields: Optional[List[str]] = None
    ) -> Product:
        """Persist a product; an existing row only writes *update_fields*."""

    @abstractmethod
    def replace_tags(self, product: Product, tags: List[str]) -> None:
        """Replace the tag set of a saved product."""

    @abstractmethod
    def get_for_update(self, id: int) -> Optional[Product]:
        """Retrieve a live product with a row-level lock (SELECT FOR UPDATE).

        Must be called inside a transaction.  Returns ``None`` if the
        product does not exist.
        """

    @abstractmethod
    def record_sale(self, id: int, quantity: int) -> bool:
        """Decrement stock and increment ``purchase_count`` by *quantity*.

        The update is guarded by ``stock_quantity >= quantity``; returns
        ``False`` when no row satisfied the guard.
        """
