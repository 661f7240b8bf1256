"""
Pagination schemas shared by every listing, search and lookup operation.
"""

import math
from typing import Callable, Generic, List, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")
U = TypeVar("U")


class Page(BaseModel, Generic[T]):
    """A slice of an ordered result set plus the metadata to page through it."""

    model_config = ConfigDict(from_attributes=True, arbitrary_types_allowed=True)

    items: List[T] = Field(default_factory=list, description="Records on this page")
    page: int = Field(..., description="Zero-based page index", ge=0)
    size: int = Field(..., description="Requested page size", gt=0)
    total_elements: int = Field(..., description="Total matching records", ge=0)

    @property
    def total_pages(self) -> int:
        """Number of pages needed to hold every matching record."""
        return math.ceil(self.total_elements / self.size) if self.total_elements else 0

    @property
    def first(self) -> bool:
        """Whether this is the first page."""
        return self.page == 0

    @property
    def last(self) -> bool:
        """Whether no page follows this one."""
        return self.page + 1 >= self.total_pages

    @property
    def is_empty(self) -> bool:
        return not self.items

    @classmethod
    def of(
        cls, items: Sequence[T], page: int, size: int, total_elements: int
    ) -> "Page[T]":
        """Build a page from an already-sliced sequence."""
        return cls(
            items=list(items), page=page, size=size, total_elements=total_elements
        )

    def map(self, mapper: Callable[[T], U]) -> "Page[U]":
        """Return a page with the same metadata and each item converted."""
        return Page[U](
            items=[mapper(item) for item in self.items],
            page=self.page,
            size=self.size,
            total_elements=self.total_elements,
        )
