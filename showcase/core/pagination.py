"""Page/limit handling shared by the list endpoints."""

import math
from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def coerce_positive_int(value: Any, default: int) -> int:
    """Parse a query parameter, falling back to ``default`` for non-numeric or non-positive values."""
    if value is None:
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        return default
    return number if number > 0 else default


@dataclass
class PageRequest:
    """A requested page of rows."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_params(cls, page: Optional[str] = None, limit: Optional[str] = None) -> "PageRequest":
        return cls(
            page=coerce_positive_int(page, DEFAULT_PAGE),
            limit=coerce_positive_int(limit, DEFAULT_LIMIT),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class Page(Generic[T]):
    """One page of results plus the totals needed by the response envelope."""

    request: PageRequest
    total: int
    items: List[T] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.request.limit)
