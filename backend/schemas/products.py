"""Pydantic schemas for the product catalog and its query parameters."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

import config

# Fields the search projection exposes (image4/image5 are detail-only).
PROJECTED_FIELDS = (
    "id",
    "name",
    "description",
    "detailed_description",
    "price",
    "size",
    "color",
    "material",
    "category",
    "available",
    "new",
    "image1",
    "image2",
    "image3",
    "collection",
    "created_at",
)


class CatalogBaseModel(BaseModel):
    """Read-only catalog document; accepts both wire (camelCase) and attribute names."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


def _naive_as_utc(v: datetime) -> datetime:
    # Stored timestamps without an offset are UTC.
    return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v


class CollectionRef(CatalogBaseModel):
    id: int
    title: str = ""
    description: str | None = None


class Product(CatalogBaseModel):
    id: int
    name: str = ""
    description: str = ""
    detailed_description: str = Field(default="", alias="detailedDescription")
    price: Decimal = Decimal("0")
    size: list[str] | None = None
    color: str | None = None
    material: str = ""
    category: str = ""
    available: bool = True
    new: bool = False
    image1: str | None = None
    image2: str | None = None
    image3: str | None = None
    image4: str | None = None
    image5: str | None = None
    collection: CollectionRef | None = None
    created_at: datetime = Field(alias="createdAt")

    @field_validator("name", "description", "detailed_description", "material", "category", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("color", mode="before")
    @classmethod
    def blank_color_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v: datetime) -> datetime:
        return _naive_as_utc(v)

    def to_dict(self) -> dict:
        """JSON-ready projection used in search and listing responses."""
        return self.model_dump(mode="json", by_alias=True, include=set(PROJECTED_FIELDS))


class ReviewUser(CatalogBaseModel):
    id: int
    name: str = ""
    username: str = ""


class Review(CatalogBaseModel):
    id: int
    product_id: int = Field(alias="productId")
    comment: str = Field(default="", alias="comentario")
    stars: int = Field(alias="estrelas", ge=0, le=5)
    published_at: datetime = Field(alias="dataDePublicacao")
    user: ReviewUser | None = None

    @field_validator("published_at")
    @classmethod
    def published_at_utc(cls, v: datetime) -> datetime:
        return _naive_as_utc(v)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude={"product_id"})


# -----------------------------------------------------------------------------
# Query parameters

POSITIVE_PAGINATION_MSG = "page and limit must be positive integers"


class PaginationQuery(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    page: int = Field(default=1, validate_default=True)
    limit: int = Field(default_factory=lambda: config.settings.search.default_limit, validate_default=True)

    @field_validator("page", "limit", mode="before")
    @classmethod
    def parse_positive_int(cls, v):
        if isinstance(v, str):
            v = v.strip()
        try:
            value = int(v)
        except (TypeError, ValueError):
            raise ValueError(POSITIVE_PAGINATION_MSG) from None
        if value < 1:
            raise ValueError(POSITIVE_PAGINATION_MSG)
        return value

    @field_validator("limit")
    @classmethod
    def check_limit_ceiling(cls, v: int) -> int:
        max_limit = config.settings.search.max_limit
        if v > max_limit:
            raise ValueError(f"limit cannot exceed {max_limit}")
        return v


class SearchQuery(PaginationQuery):
    # Raw text is kept as sent so the response can echo it.
    q: str | None = Field(default=None, validate_default=True)

    @field_validator("q")
    @classmethod
    def require_text(cls, v: str | None) -> str:
        if v is None or not v.strip():
            raise ValueError('query parameter "q" is required')
        return v


def _split_csv(v):
    if v is None:
        return []
    if isinstance(v, str):
        return [part.strip() for part in v.split(",") if part.strip()]
    return list(v)


class ProductListQuery(PaginationQuery):
    category: str | None = Field(default=None, alias="categoria")
    collection: str | None = Field(default=None, alias="colecao")
    price_band: str | None = Field(default=None, alias="preco")
    material: str | None = None
    sizes: list[str] = Field(default_factory=list, alias="tamanhos")
    colors: list[str] = Field(default_factory=list, alias="cores")

    @field_validator("page", "limit", mode="before")
    @classmethod
    def parse_positive_int(cls, v, info: ValidationInfo):
        # Listing falls back to the default for a zero or non-numeric page or limit.
        default = 1 if info.field_name == "page" else config.settings.search.default_limit
        if isinstance(v, str):
            v = v.strip()
        try:
            value = int(v)
        except (TypeError, ValueError):
            return default
        if value == 0:
            return default
        if value < 0:
            raise ValueError(POSITIVE_PAGINATION_MSG)
        return value

    @field_validator("sizes", "colors", mode="before")
    @classmethod
    def split_csv(cls, v):
        return _split_csv(v)

    @field_validator("category", "collection", "price_band", "material", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v
