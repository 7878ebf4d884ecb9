"""Load catalog fixtures (collections, products, reviews) from JSON files.

Usage:
    python -m tools seed_catalog --products products.json \
        [--collections collections.json] [--reviews reviews.json] [--db path/to/catalog.db]

Each file holds a JSON array. Documents without an `id` are numbered in file
order starting at 1; `createdAt` / `dataDePublicacao` default to the time of
seeding. Products reference collections through `collectionId`, which is
resolved into an embedded `collection` object. Image fields are stored as
given (paths or URLs).
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from backend.schemas.products import CollectionRef, Product, Review
from shoplite.repositories import CollectionRepository, ProductRepository, ReviewRepository


def _load_json_array(path: str) -> list[dict]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array")
    return data


def _with_ids(docs: list[dict]) -> list[dict]:
    out = []
    for i, doc in enumerate(docs, start=1):
        doc = dict(doc)
        doc.setdefault("id", i)
        out.append(doc)
    return out


def build_collections(raw: list[dict]) -> list[dict]:
    docs = []
    for doc in _with_ids(raw):
        ref = CollectionRef.model_validate(doc)
        docs.append(ref.model_dump(mode="json", by_alias=True))
    return docs


def build_products(raw: list[dict], collections: list[dict], now: datetime) -> list[dict]:
    """Validate product documents and embed their collection."""
    by_id = {c["id"]: c for c in collections}
    docs = []
    for doc in _with_ids(raw):
        collection_id = doc.pop("collectionId", None)
        if collection_id is not None:
            collection = by_id.get(int(collection_id))
            if collection is None:
                logger.warning(f"product {doc['id']}: unknown collectionId {collection_id}, left unset")
            doc["collection"] = collection
        if isinstance(doc.get("size"), str) and not doc["size"].strip():
            doc["size"] = None
        doc.setdefault("createdAt", now.isoformat())
        product = Product.model_validate(doc)
        docs.append(product.model_dump(mode="json", by_alias=True))
    return docs


def build_reviews(raw: list[dict], product_ids: set[int], now: datetime) -> list[dict]:
    docs = []
    for doc in _with_ids(raw):
        doc.setdefault("dataDePublicacao", now.isoformat())
        review = Review.model_validate(doc)
        if review.product_id not in product_ids:
            logger.warning(f"review {review.id}: unknown productId {review.product_id}, skipped")
            continue
        docs.append(review.model_dump(mode="json", by_alias=True))
    return docs


def seed(products_path: str, collections_path: str | None = None, reviews_path: str | None = None, db_path: str | None = None) -> dict:
    """Write the fixture files into the catalog database. Returns counts per table."""
    now = datetime.now(timezone.utc)

    collections = build_collections(_load_json_array(collections_path)) if collections_path else []
    products = build_products(_load_json_array(products_path), collections, now)
    reviews = (
        build_reviews(_load_json_array(reviews_path), {p["id"] for p in products}, now) if reviews_path else []
    )

    counts = {"collections": 0, "products": 0, "reviews": 0}
    if collections:
        counts["collections"] = CollectionRepository.save_many(collections, db_path=db_path)
        logger.info(f"Inserted {counts['collections']} collections")
    counts["products"] = ProductRepository.save_many(products, db_path=db_path)
    logger.info(f"Inserted {counts['products']} products")
    if reviews:
        counts["reviews"] = ReviewRepository.save_many(reviews, db_path=db_path)
        logger.info(f"Inserted {counts['reviews']} reviews")
    return counts


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the catalog database from JSON fixtures")
    parser.add_argument("--products", required=True, help="JSON array of products")
    parser.add_argument("--collections", help="JSON array of collections")
    parser.add_argument("--reviews", help="JSON array of reviews")
    parser.add_argument("--db", dest="db_path", help="Catalog database file (default: <data_dir>/catalog.db)")
    args = parser.parse_args(argv)

    logger.remove()
    logger.add(sys.stdout, level="INFO", format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}")

    try:
        seed(args.products, args.collections, args.reviews, args.db_path)
    except (OSError, ValueError, ValidationError) as exc:
        # json.JSONDecodeError is a ValueError
        logger.error(f"Seeding failed: {exc}")
        return 1
    logger.info("Seed finished")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
