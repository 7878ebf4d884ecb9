"""Catalog store implementations consumed by the search and catalog services.

Services depend on the `CatalogStore` protocol only; the Flask app injects
`SqliteCatalogStore` by default and tests inject `InMemoryCatalogStore`.
"""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from shoplite.repositories import CollectionRepository, ProductRepository, ReviewRepository

from ..schemas.products import CollectionRef, Product, Review


@runtime_checkable
class CatalogStore(Protocol):
    def fetch_all_projected(self) -> list[Product]:
        """Full catalog snapshot in a stable order (by product id)."""
        ...

    def get_product(self, product_id: int) -> Product | None: ...

    def list_collections(self) -> list[CollectionRef]: ...

    def get_reviews(self, product_id: int) -> list[Review]: ...


class SqliteCatalogStore:
    """Reads the catalog tables through the repository layer.

    A fresh read-only connection is opened per call, so each request sees the
    catalog as committed at that moment.
    """

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path

    def fetch_all_projected(self) -> list[Product]:
        return [Product.model_validate(doc) for doc in ProductRepository.iter_all(db_path=self.db_path)]

    def get_product(self, product_id: int) -> Product | None:
        doc = ProductRepository.get_by_id(product_id, db_path=self.db_path)
        return Product.model_validate(doc) if doc is not None else None

    def list_collections(self) -> list[CollectionRef]:
        return [CollectionRef.model_validate(doc) for doc in CollectionRepository.get_all(db_path=self.db_path)]

    def get_reviews(self, product_id: int) -> list[Review]:
        return [Review.model_validate(doc) for doc in ReviewRepository.get_for_product(product_id, db_path=self.db_path)]


class InMemoryCatalogStore:
    """Fixture store over already-built models; keeps the given product order."""

    def __init__(
        self,
        products: Iterable[Product] = (),
        collections: Iterable[CollectionRef] = (),
        reviews: Iterable[Review] = (),
    ):
        self._products = tuple(products)
        self._collections = tuple(collections)
        self._reviews = tuple(reviews)

    def fetch_all_projected(self) -> list[Product]:
        return list(self._products)

    def get_product(self, product_id: int) -> Product | None:
        return next((p for p in self._products if p.id == product_id), None)

    def list_collections(self) -> list[CollectionRef]:
        return list(self._collections)

    def get_reviews(self, product_id: int) -> list[Review]:
        return [r for r in self._reviews if r.product_id == product_id]
