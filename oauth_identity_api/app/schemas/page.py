"""
Paging primitives shared by the list endpoints.

``PageRequest`` describes which slice of a collection to fetch and how
to order it; ``Page`` carries one slice back together with the total
number of matching records.  Pages are numbered from 0.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar

from pydantic import BaseModel, computed_field

from ..core.config import settings


T = TypeVar("T")


@dataclass
class PageRequest:
    """Requested slice of a collection.

    ``size`` defaults to ``settings.default_page_size`` and is clamped to
    ``[1, settings.max_page_size]``.  Negative pages are treated as 0 and
    any direction other than ``desc`` sorts ascending.
    """

    page: int = 0
    size: Optional[int] = None
    sort: str = "id"
    direction: str = "asc"

    def __post_init__(self) -> None:
        if self.size is None:
            self.size = settings.default_page_size
        self.page = max(self.page, 0)
        self.size = min(max(self.size, 1), settings.max_page_size)
        self.direction = "desc" if str(self.direction).lower() == "desc" else "asc"

    @property
    def offset(self) -> int:
        return self.page * self.size

    def order_by(self, allowed: Iterable[str]) -> str:
        """Build an ``ORDER BY`` clause, falling back to ``id`` for unknown columns."""
        column = self.sort if self.sort in set(allowed) else "id"
        if column == "id":
            return f"id {self.direction.upper()}"
        # id as tie-breaker keeps paging stable
        return f"{column} {self.direction.upper()}, id ASC"


class Page(BaseModel, Generic[T]):
    """One page of results plus total-count metadata."""

    items: List[T]
    total: int
    page: int
    size: int

    @computed_field
    @property
    def pages(self) -> int:
        if self.size <= 0:
            return 0
        return (self.total + self.size - 1) // self.size

    def map(self, fn: Callable[[Any], Any]) -> "Page[Any]":
        """Return a new page whose items are ``fn`` applied to each item."""
        return Page[Any](
            items=[fn(item) for item in self.items],
            total=self.total,
            page=self.page,
            size=self.size,
        )
