"""Catalog browsing: filtered listing, product detail and available colors.

These read from the same catalog store as search and share its error types.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from loguru import logger

from ..schemas.products import Product, ProductListQuery
from ..utils.errors import InternalError, NotFoundError
from ..utils.pagination import Page, paginate
from ..utils.text import normalize_text
from .catalog_store import CatalogStore

# Inclusive (min, max) bounds; None means unbounded.
PRICE_BANDS: dict[str, tuple[Decimal | None, Decimal | None]] = {
    "ate50": (None, Decimal("50")),
    "50a100": (Decimal("50"), Decimal("100")),
    "100a150": (Decimal("100"), Decimal("150")),
    "150a200": (Decimal("150"), Decimal("200")),
    "200mais": (Decimal("200"), None),
}


def _in_price_band(price: Decimal, band: str) -> bool:
    bounds = PRICE_BANDS.get(band)
    if bounds is None:
        # Unknown bands do not filter.
        return True
    low, high = bounds
    return (low is None or price >= low) and (high is None or price <= high)


def _find_collection_id(store: CatalogStore, title: str) -> int:
    wanted = normalize_text(title)
    for collection in store.list_collections():
        if normalize_text(collection.title) == wanted:
            return collection.id
    raise NotFoundError(f'Collection "{title}" not found')


def filter_products(products: list[Product], query: ProductListQuery, collection_id: int | None = None) -> list[Product]:
    """Apply listing filters, then order newest first (stable on ties)."""
    out = []
    for p in products:
        if query.category is not None and p.category != query.category:
            continue
        if collection_id is not None and (p.collection is None or p.collection.id != collection_id):
            continue
        if query.price_band is not None and not _in_price_band(p.price, query.price_band):
            continue
        if query.material is not None and p.material != query.material:
            continue
        if query.sizes and not any(size in (p.size or ()) for size in query.sizes):
            continue
        if query.colors and p.color not in query.colors:
            continue
        out.append(p)
    return sorted(out, key=lambda p: p.created_at, reverse=True)


def list_products(store: CatalogStore, query: ProductListQuery) -> Page:
    """Filtered, newest-first page of the catalog."""
    collection_id = _find_collection_id(store, query.collection) if query.collection is not None else None
    try:
        products = filter_products(store.fetch_all_projected(), query, collection_id)
    except Exception as exc:
        logger.opt(exception=True).error("product listing failed")
        raise InternalError("Failed to list products") from exc
    return paginate(products, query.page, query.limit)


def review_stats(reviews) -> dict:
    total = len(reviews)
    average = Decimal(sum(r.stars for r in reviews)) / Decimal(total) if total else Decimal(0)
    return {
        "total": total,
        "averageStars": float(average.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)),
        "distribution": {str(stars): sum(1 for r in reviews if r.stars == stars) for stars in (5, 4, 3, 2, 1)},
    }


def get_product_detail(store: CatalogStore, product_id: int) -> dict:
    """Product with all images, reviews (newest first) and review statistics."""
    try:
        product = store.get_product(product_id)
        reviews = store.get_reviews(product_id) if product is not None else []
    except Exception as exc:
        logger.opt(exception=True).error(f"failed to load product {product_id}")
        raise InternalError("Failed to load product details") from exc

    if product is None:
        raise NotFoundError("Product not found")

    reviews = sorted(reviews, key=lambda r: r.published_at, reverse=True)
    data = product.model_dump(mode="json", by_alias=True)
    return {
        "id": data["id"],
        "name": data["name"],
        "description": data["description"],
        "detailedDescription": data["detailedDescription"],
        "price": data["price"],
        "size": data["size"],
        "color": data["color"],
        "material": data["material"],
        "category": data["category"],
        "available": data["available"],
        "new": data["new"],
        "images": {f"image{i}": data[f"image{i}"] for i in range(1, 6)},
        "collection": data["collection"],
        "reviews": [r.to_dict() for r in reviews],
        "reviewStats": review_stats(reviews),
        "createdAt": data["createdAt"],
    }


def list_colors(store: CatalogStore) -> list[str]:
    """Distinct product colors in catalog order."""
    try:
        products = store.fetch_all_projected()
    except Exception as exc:
        logger.opt(exception=True).error("failed to load product colors")
        raise InternalError("Failed to load colors") from exc
    seen: dict[str, None] = {}
    for p in products:
        if p.color is not None:
            seen.setdefault(p.color, None)
    return list(seen)
