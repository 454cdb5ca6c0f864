"""Product listing query compiler.

Turns a ``ProductFilterDTO`` plus the caller's identity into a
``CompiledListing``: one predicate, one ordering and the page bounds.

The predicate is built once by ``ProductQueryBuilder`` from named ``Q``
conditions, all parameter-bound by the ORM.  Both the page fetch and the
total count start from ``CompiledListing.filter()``, so the total reported
next to a page always describes exactly the rows that page was cut from.

Composition rules (all conjunctive):

============== ===========================================================
owner          ``user_only`` and an authenticated caller: caller's products
tag:<name>     one per requested tag: product carries that tag (superset)
condition      exact match on ``new`` / ``second``
in_stock       unless ``show_empty_stock``: ``stock_quantity > 0``
min_price      ``price >= min_price`` (inclusive)
max_price      ``price <= max_price`` (inclusive)
search         case-insensitive substring of the name
============== ===========================================================

Sorting by ``price`` or ``date`` (creation time) adds ``id`` as a stable
tiebreaker.  Without a sort key no ``ORDER BY`` is emitted at all and rows
come back in storage order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional, Tuple

from django.db.models import Q, QuerySet

from modules.products.models import ProductTag

if TYPE_CHECKING:
    from modules.products.dtos import ProductFilterDTO

SORT_FIELDS: Dict[str, str] = {
    "price": "price",
    "date": "created_at",
}


@dataclass(frozen=True)
class CompiledListing:
    """Predicate, ordering and page bounds for one listing request.

    ``limit`` is ``None`` when unbounded; ``offset`` is never negative.
    """

    predicate: Q
    ordering: Tuple[str, ...]
    limit: Optional[int]
    offset: int

    def filter(self, queryset: QuerySet) -> QuerySet:
        """Apply the predicate only.  Shared by count and fetch."""
        return queryset.filter(self.predicate)

    def fetch(self, queryset: QuerySet) -> QuerySet:
        """Apply predicate, ordering and the page slice."""
        queryset = self.filter(queryset)
        if self.ordering:
            queryset = queryset.order_by(*self.ordering)
        else:
            queryset = queryset.order_by()
        if self.limit is None:
            return queryset[self.offset :] if self.offset else queryset
        return queryset[self.offset : self.offset + self.limit]


class ProductQueryBuilder:
    """Accumulates named listing conditions, then renders them once."""

    def __init__(self) -> None:
        self._conditions: Dict[str, Q] = {}
        self._ordering: Tuple[str, ...] = ()
        self._limit: Optional[int] = None
        self._offset = 0

    @property
    def condition_names(self) -> Tuple[str, ...]:
        return tuple(self._conditions)

    def where(self, name: str, condition: Q) -> ProductQueryBuilder:
        self._conditions[name] = condition
        return self

    def owned_by(self, owner_id: int) -> ProductQueryBuilder:
        return self.where("owner", Q(owner_id=owner_id))

    def tagged(self, tag: str) -> ProductQueryBuilder:
        tagged_ids = ProductTag.objects.filter(name=tag).values("product_id")
        return self.where(f"tag:{tag}", Q(pk__in=tagged_ids))

    def in_condition(self, condition: str) -> ProductQueryBuilder:
        return self.where("condition", Q(condition=condition))

    def in_stock(self) -> ProductQueryBuilder:
        return self.where("in_stock", Q(stock_quantity__gt=0))

    def price_at_least(self, amount: int) -> ProductQueryBuilder:
        return self.where("min_price", Q(price__gte=amount))

    def price_at_most(self, amount: int) -> ProductQueryBuilder:
        return self.where("max_price", Q(price__lte=amount))

    def name_contains(self, text: str) -> ProductQueryBuilder:
        return self.where("search", Q(name__icontains=text))

    def sort(self, key: str, direction: str) -> ProductQueryBuilder:
        field = SORT_FIELDS[key]
        prefix = "-" if direction == "desc" else ""
        self._ordering = (f"{prefix}{field}", f"{prefix}id")
        return self

    def page(self, limit: int, offset: int) -> ProductQueryBuilder:
        self._limit = limit if limit > 0 else None
        self._offset = offset if offset > 0 else 0
        return self

    def build(self) -> CompiledListing:
        predicate = Q()
        for condition in self._conditions.values():
            predicate &= condition
        return CompiledListing(
            predicate=predicate,
            ordering=self._ordering,
            limit=self._limit,
            offset=self._offset,
        )


def compile_listing(
    spec: ProductFilterDTO, caller_id: Optional[int] = None
) -> CompiledListing:
    """Compile a listing request for the caller (``None`` when anonymous)."""
    builder = ProductQueryBuilder()

    if spec.user_only and caller_id is not None:
        builder.owned_by(caller_id)
    for tag in spec.tags:
        builder.tagged(tag)
    if spec.condition:
        builder.in_condition(spec.condition)
    if not spec.show_empty_stock:
        builder.in_stock()
    if spec.min_price is not None:
        builder.price_at_least(spec.min_price)
    if spec.max_price is not None:
        builder.price_at_most(spec.max_price)
    if spec.search:
        builder.name_contains(spec.search)
    if spec.sort_by:
        builder.sort(spec.sort_by, spec.order_by)

    return builder.page(spec.limit, spec.offset).build()
