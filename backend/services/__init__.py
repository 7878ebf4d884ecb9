"""Services package initialization."""

from .catalog_service import get_product_detail, list_colors, list_products
from .catalog_store import CatalogStore, InMemoryCatalogStore, SqliteCatalogStore
from .relevance import ScoredCandidate, explain_score, rank_products, score_product
from .search_service import (
    LoguruSearchTracer,
    NullSearchTracer,
    SearchResult,
    SearchService,
    SearchTracer,
)

__all__ = [
    # Catalog stores
    "CatalogStore",
    "InMemoryCatalogStore",
    "SqliteCatalogStore",
    # Catalog browsing
    "get_product_detail",
    "list_colors",
    "list_products",
    # Ranking
    "ScoredCandidate",
    "explain_score",
    "rank_products",
    "score_product",
    # Search
    "LoguruSearchTracer",
    "NullSearchTracer",
    "SearchResult",
    "SearchService",
    "SearchTracer",
]
