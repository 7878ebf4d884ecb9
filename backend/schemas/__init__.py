"""Pydantic schemas."""

from .products import (
    CollectionRef,
    PaginationQuery,
    Product,
    ProductListQuery,
    Review,
    ReviewUser,
    SearchQuery,
)

__all__ = [
    "CollectionRef",
    "PaginationQuery",
    "Product",
    "ProductListQuery",
    "Review",
    "ReviewUser",
    "SearchQuery",
]
