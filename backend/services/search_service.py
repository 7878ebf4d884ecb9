"""Product search: query parsing, ranking over the catalog snapshot, pagination."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Protocol, Sequence

from loguru import logger

import config

from ..schemas.products import SearchQuery
from ..utils.errors import InternalError
from ..utils.pagination import Page, paginate
from ..utils.text import extract_keywords, normalize_text
from .catalog_store import CatalogStore
from .relevance import ScoredCandidate, rank_products


class SearchTracer(Protocol):
    """Diagnostics hooks called at fixed points of a search."""

    def on_start(self, query: SearchQuery, normalized_query: str, keywords: Sequence[str]) -> None: ...

    def on_filtered(self, catalog_size: int, matched: int) -> None: ...

    def on_ranked(self, top: Sequence[ScoredCandidate]) -> None: ...


class NullSearchTracer:
    def on_start(self, query, normalized_query, keywords) -> None:
        pass

    def on_filtered(self, catalog_size, matched) -> None:
        pass

    def on_ranked(self, top) -> None:
        pass


class LoguruSearchTracer:
    """Structured DEBUG logs with the query bound to every record."""

    def __init__(self):
        self._log = logger

    def on_start(self, query, normalized_query, keywords) -> None:
        self._log = logger.bind(query=query.q, page=query.page, limit=query.limit)
        self._log.debug(f"search started: normalized={normalized_query!r} keywords={list(keywords)}")

    def on_filtered(self, catalog_size, matched) -> None:
        self._log.debug(f"search matched {matched} of {catalog_size} products")

    def on_ranked(self, top) -> None:
        for rank, c in enumerate(top, start=1):
            self._log.debug(f"top {rank}: #{c.product.id} {c.product.name!r} score={c.score}")


@dataclass(frozen=True)
class SearchResult:
    query: str
    normalized_query: str
    keywords: list[str]
    page: Page

    @property
    def results_found(self) -> int:
        return self.page.total

    def to_dict(self) -> dict:
        return {
            "data": [p.to_dict() for p in self.page.items],
            "search": {
                "query": self.query,
                "normalizedQuery": self.normalized_query,
                "keywords": list(self.keywords),
                "resultsFound": self.results_found,
            },
            "pagination": self.page.meta(),
        }


def default_tracer() -> SearchTracer:
    if config.settings.search.trace_enabled:
        return LoguruSearchTracer()
    return NullSearchTracer()


class SearchService:
    """Ranks the whole catalog snapshot for every request.

    There is no index: each search scores every product, which is linear in
    catalog size times keyword count.
    """

    def __init__(
        self,
        store: CatalogStore,
        tracer_factory: Callable[[], SearchTracer] | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.store = store
        self.tracer_factory = tracer_factory or default_tracer
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def search(self, query: SearchQuery) -> SearchResult:
        """Run a validated query; store or scoring failures become InternalError."""
        normalized_query = normalize_text(query.q)
        keywords = extract_keywords(query.q)
        tracer = self.tracer_factory()
        tracer.on_start(query, normalized_query, keywords)

        try:
            products = self.store.fetch_all_projected()
            ranked = rank_products(
                products,
                keywords,
                normalized_query,
                now=self.clock(),
                window_days=config.settings.search.new_arrivals_days,
            )
        except Exception as exc:
            logger.opt(exception=True).error(f"search failed for query {query.q!r}")
            raise InternalError("Failed to search products") from exc

        tracer.on_filtered(len(products), len(ranked))
        tracer.on_ranked(ranked[: max(0, config.settings.search.trace_top_n)])

        page = paginate(ranked, query.page, query.limit, project=lambda c: c.product)
        return SearchResult(
            query=query.q,
            normalized_query=normalized_query,
            keywords=keywords,
            page=page,
        )
