"""Relevance scoring of catalog products against a free-text query.

The score of a product is the sum of three independent rule groups:

1. category intent: the query (or one of its keywords) is a category alias
   and the product belongs to that category;
2. new-arrivals intent: the query asks for novelties and the product is
   flagged new, recent, or in a seasonal category;
3. field matching: weighted exact/partial matches of the query, its
   keywords and translated color names against each text field.

Every function here is pure: no I/O, no shared mutable state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable, Sequence

from ..schemas.products import Product
from ..utils.text import normalize_text, singularize
from .aliases import resolve_category, resolve_color

# Category intent
CATEGORY_EXACT_BONUS = 100
CATEGORY_PARTIAL_BONUS = 80

# New-arrivals intent
NEW_ARRIVALS_QUERIES = frozenset({"novidades", "new", "novidade", "new arrivals"})
NEW_ARRIVALS_KEYWORDS = frozenset({"new", "novidades"})
NEW_ARRIVALS_CATEGORIES = frozenset({"vestido", "biquini", "maio", "short", "saia", "camiseta"})
NEW_FLAG_BONUS = 100
RECENT_BONUS = 50
NEW_CATEGORY_BONUS = 25
RECENT_WINDOW_DAYS = 30

# Field matching: per-field weight times a per-rule multiplier
FIELD_WEIGHTS: tuple[tuple[str, int], ...] = (
    ("name", 5),
    ("category", 4),
    ("description", 2),
    ("detailed_description", 1),
    ("material", 3),
    ("color", 2),
)
COLOR_MULTIPLIER = 8
FULL_QUERY_MULTIPLIER = 10
EXACT_TOKEN_MULTIPLIER = 5
PARTIAL_TOKEN_MULTIPLIER = 2


@dataclass(frozen=True)
class ScoredCandidate:
    product: Product
    score: int


@dataclass
class ScoreBreakdown:
    """Per-rule contributions; `total` equals `score_product` for the same inputs."""

    category: int = 0
    new_arrivals: int = 0
    fields: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.category + self.new_arrivals + sum(self.fields.values())


def wanted_category(keywords: Iterable[str], normalized_query: str) -> str | None:
    """First category alias among the full query and the keywords, normalized."""
    for term in (normalized_query, *keywords):
        canonical = resolve_category(term)
        if canonical is not None:
            return normalize_text(canonical)
    return None


def is_new_arrivals_query(keywords: Iterable[str], normalized_query: str) -> bool:
    return normalized_query in NEW_ARRIVALS_QUERIES or not NEW_ARRIVALS_KEYWORDS.isdisjoint(keywords)


def category_score(product: Product, category: str | None) -> int:
    if category is None:
        return 0
    product_category = normalize_text(product.category)
    if product_category == category:
        return CATEGORY_EXACT_BONUS
    # An empty product category is contained in any wanted category.
    if product_category in category or category in product_category:
        return CATEGORY_PARTIAL_BONUS
    return 0


def new_arrivals_score(product: Product, now: datetime, window_days: int = RECENT_WINDOW_DAYS) -> int:
    score = 0
    if product.new:
        score += NEW_FLAG_BONUS
    if _as_utc(product.created_at) > now - timedelta(days=window_days):
        score += RECENT_BONUS
    if (product.category or "").lower() in NEW_ARRIVALS_CATEGORIES:
        score += NEW_CATEGORY_BONUS
    return score


def field_score(value: str | None, weight: int, keywords: Sequence[str], normalized_query: str) -> int:
    """Weighted matches of the query and its keywords against one field value."""
    text = normalize_text(value)
    text_singular = singularize(text)
    forms = (text, text_singular)
    score = 0

    for keyword in keywords:
        color = resolve_color(keyword)
        if color is not None:
            color_norm = normalize_text(color)
            if color_norm in text or color_norm in text_singular:
                score += weight * COLOR_MULTIPLIER

    if normalized_query and normalized_query in forms:
        score += weight * FULL_QUERY_MULTIPLIER

    for keyword in keywords:
        terms = (keyword, singularize(keyword))
        if any(f == t for f in forms for t in terms):
            score += weight * EXACT_TOKEN_MULTIPLIER
        elif any(t in f or (f and f in t) for f in forms for t in terms):
            score += weight * PARTIAL_TOKEN_MULTIPLIER

    return score


def explain_score(
    product: Product,
    keywords: Sequence[str],
    normalized_query: str,
    *,
    now: datetime | None = None,
    window_days: int = RECENT_WINDOW_DAYS,
) -> ScoreBreakdown:
    """Score a product rule by rule."""
    breakdown = ScoreBreakdown()
    breakdown.category = category_score(product, wanted_category(keywords, normalized_query))
    if is_new_arrivals_query(keywords, normalized_query):
        now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
        breakdown.new_arrivals = new_arrivals_score(product, now, window_days)
    for name, weight in FIELD_WEIGHTS:
        breakdown.fields[name] = field_score(getattr(product, name), weight, keywords, normalized_query)
    return breakdown


def score_product(
    product: Product,
    keywords: Sequence[str],
    normalized_query: str,
    *,
    now: datetime | None = None,
    window_days: int = RECENT_WINDOW_DAYS,
) -> int:
    """Non-negative relevance score; 0 means the product does not match."""
    return explain_score(product, keywords, normalized_query, now=now, window_days=window_days).total


def rank_products(
    products: Iterable[Product],
    keywords: Sequence[str],
    normalized_query: str,
    *,
    now: datetime | None = None,
    window_days: int = RECENT_WINDOW_DAYS,
) -> list[ScoredCandidate]:
    """Matching products by descending score; ties keep their input order."""
    now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    candidates = [
        ScoredCandidate(p, score_product(p, keywords, normalized_query, now=now, window_days=window_days))
        for p in products
    ]
    matched = [c for c in candidates if c.score > 0]
    # sorted() is stable, so equal scores stay in catalog order.
    return sorted(matched, key=lambda c: c.score, reverse=True)


def _as_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC so comparisons never mix naive and aware."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt
