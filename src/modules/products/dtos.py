"""Product DTOs for the Service Layer.

Pydantic v2 data transfer objects, immutable (``frozen=True``).  They are
the contract between the API layer and the services, and they re-check
every rule the HTTP layer already checked, so services can be called
directly (management commands, tests) without weakening the invariants.

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
- ``ProductFilterDTO``: listing intent (filters, sort, pagination).
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
)

from modules.products.models import NAME_MAX_LENGTH, NAME_MIN_LENGTH

ConditionValue = Literal["new", "second"]
SortKey = Literal["price", "date"]
SortDirection = Literal["asc", "desc"]

_http_url = TypeAdapter(AnyHttpUrl)

TAG_MAX_LENGTH = 50


def validate_http_url(value: str) -> str:
    """Check that *value* is an absolute http(s) URL; return it unchanged."""
    value = value.strip()
    _http_url.validate_python(value)
    return value


def _normalise_tags(tags: List[str]) -> List[str]:
    cleaned = []
    for tag in tags:
        tag = tag.strip()
        if not tag:
            raise ValueError("Tags must not be blank.")
        if len(tag) > TAG_MAX_LENGTH:
            raise ValueError(f"Tags must be at most {TAG_MAX_LENGTH} characters.")
        cleaned.append(tag)
    return list(dict.fromkeys(cleaned))


def _check_name(value: str) -> str:
    value = value.strip()
    if not NAME_MIN_LENGTH <= len(value) <= NAME_MAX_LENGTH:
        raise ValueError(
            f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters."
        )
    return value


# ---------------------------------------------------------------------------
# Catalog mutations
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    price: int = Field(ge=0)
    image_url: str
    stock_quantity: int = Field(default=0, ge=0)
    condition: ConditionValue
    tags: List[str] = []
    is_purchaseable: bool = True

    @field_validator("name")
    @classmethod
    def name_within_bounds(cls, v: str) -> str:
        return _check_name(v)

    @field_validator("image_url")
    @classmethod
    def image_url_must_be_http(cls, v: str) -> str:
        return validate_http_url(v)

    @field_validator("tags")
    @classmethod
    def tags_are_clean(cls, v: List[str]) -> List[str]:
        return _normalise_tags(v)


class UpdateProductDTO(BaseModel):
    """All fields optional; only supplied fields are written."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    price: Optional[int] = Field(default=None, ge=0)
    image_url: Optional[str] = None
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    condition: Optional[ConditionValue] = None
    tags: Optional[List[str]] = None
    is_purchaseable: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def name_within_bounds(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _check_name(v)

    @field_validator("image_url")
    @classmethod
    def image_url_must_be_http(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else validate_http_url(v)

    @field_validator("tags")
    @classmethod
    def tags_are_clean(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return None if v is None else _normalise_tags(v)


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


class ProductFilterDTO(BaseModel):
    """Request-scoped listing intent.  Never persisted.

    ``limit`` and ``offset`` of zero mean "unbounded" and "from the start".
    ``order_by`` accepts ``dsc`` as an alias of ``desc``.
    """

    model_config = ConfigDict(frozen=True)

    user_only: bool = False
    tags: List[str] = []
    condition: Optional[ConditionValue] = None
    show_empty_stock: bool = False
    min_price: Optional[int] = Field(default=None, ge=0)
    max_price: Optional[int] = Field(default=None, ge=0)
    search: Optional[str] = None
    sort_by: Optional[SortKey] = None
    order_by: SortDirection = "asc"
    limit: int = Field(default=0, ge=0)
    offset: int = Field(default=0, ge=0)

    @field_validator("order_by", mode="before")
    @classmethod
    def accept_dsc_alias(cls, v):
        if isinstance(v, str) and v.lower() == "dsc":
            return "desc"
        return v

    @field_validator("search")
    @classmethod
    def blank_search_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("tags")
    @classmethod
    def tags_are_clean(cls, v: List[str]) -> List[str]:
        return list(dict.fromkeys(tag.strip() for tag in v if tag.strip()))
