"""Page slicing over an already ordered sequence."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence


@dataclass(frozen=True)
class Page:
    items: list[Any]
    page: int
    limit: int
    total: int
    total_pages: int
    has_next_page: bool = field(init=False)
    has_previous_page: bool = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "has_next_page", self.page < self.total_pages)
        object.__setattr__(self, "has_previous_page", self.page > 1)

    def meta(self) -> dict:
        """The `pagination` block of API responses."""
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
            "hasNextPage": self.has_next_page,
            "hasPreviousPage": self.has_previous_page,
        }


def paginate(ordered: Sequence[Any], page: int, limit: int, *, project: Callable[[Any], Any] | None = None) -> Page:
    """Slice `ordered` for a 1-based `page` of `limit` items.

    `project` maps each sliced element to the item returned (e.g. to drop
    a ranking score). Pages past the end come back empty.
    """
    if page < 1 or limit < 1:
        raise ValueError("page and limit must be positive")
    total = len(ordered)
    skip = (page - 1) * limit
    chunk = ordered[skip : skip + limit]
    items = [project(x) for x in chunk] if project is not None else list(chunk)
    return Page(
        items=items,
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit),
    )
