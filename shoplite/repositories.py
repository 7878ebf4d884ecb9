"""
Repository Layer - High-level catalog database operations.

Each repository corresponds to one table of the catalog database and uses
static methods over the accessors in `shoplite.db`. Documents are plain
dicts with the wire field names (camelCase), e.g.:

    from shoplite.repositories import ProductRepository

    product = ProductRepository.get_by_id(12)
    for product in ProductRepository.iter_all():
        ...

Every method accepts an optional `db_path` so tools and tests can point at a
database other than the configured one.
"""

import time
from typing import Dict, Iterable, List, Optional

from loguru import logger

from shoplite.db import (
    get_collections_db,
    get_products_db,
    get_reviews_db,
    review_key,
    review_prefix,
)

# -----------------------------------------------------------------------------
# Product Repository
# -----------------------------------------------------------------------------


class ProductRepository:
    """Repository for product documents."""

    @staticmethod
    def get_by_id(product_id: int, db_path: Optional[str] = None) -> Optional[dict]:
        """
        Get a single product by id.

        Returns:
            Product document or None if not found
        """
        with get_products_db(db_path=db_path) as pdb:
            return pdb.get(str(product_id))

    @staticmethod
    def iter_all(db_path: Optional[str] = None):
        """Stream all product documents ordered by id."""
        t_start = time.time()
        with get_products_db(db_path=db_path) as pdb:
            products = list(pdb.values())
        products.sort(key=lambda p: int(p["id"]))
        logger.trace(f"ProductRepository.iter_all: loaded {len(products)} products in {time.time() - t_start:.3f}s")
        yield from products

    @staticmethod
    def save_many(products: Iterable[dict], db_path: Optional[str] = None) -> int:
        """Save products in one transaction. Returns the number written."""
        mapping = {str(p["id"]): p for p in products}
        with get_products_db(flag="c", db_path=db_path) as pdb:
            pdb.set_many(mapping)
        return len(mapping)


# -----------------------------------------------------------------------------
# Collection Repository
# -----------------------------------------------------------------------------


class CollectionRepository:
    """Repository for product collections."""

    @staticmethod
    def get_all(db_path: Optional[str] = None) -> List[dict]:
        """All collections ordered by id."""
        with get_collections_db(db_path=db_path) as cdb:
            collections = list(cdb.values())
        collections.sort(key=lambda c: int(c["id"]))
        return collections

    @staticmethod
    def save_many(collections: Iterable[dict], db_path: Optional[str] = None) -> int:
        mapping = {str(c["id"]): c for c in collections}
        with get_collections_db(flag="c", db_path=db_path) as cdb:
            cdb.set_many(mapping)
        return len(mapping)


# -----------------------------------------------------------------------------
# Review Repository
# -----------------------------------------------------------------------------


class ReviewRepository:
    """Repository for product reviews (read side only; writes come from seeding)."""

    @staticmethod
    def get_for_product(product_id: int, db_path: Optional[str] = None) -> List[dict]:
        """All reviews of a product, in storage order."""
        with get_reviews_db(db_path=db_path) as rdb:
            return [review for _, review in rdb.items_with_prefix(review_prefix(product_id))]

    @staticmethod
    def save_many(reviews: Iterable[dict], db_path: Optional[str] = None) -> int:
        mapping: Dict[str, dict] = {review_key(r["productId"], r["id"]): r for r in reviews}
        with get_reviews_db(flag="c", db_path=db_path) as rdb:
            rdb.set_many(mapping)
        return len(mapping)
