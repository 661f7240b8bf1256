"""
Pagination request helpers.
"""

from dataclasses import dataclass

from ..exceptions import InvalidArgumentException

DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class PageRequest:
    """
    A zero-based page number and a page size.

    Invalid values are rejected on construction, so a request that reaches a
    repository is always usable.
    """

    page: int = 0
    size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 0:
            raise InvalidArgumentException(
                "Page index must not be negative", field="page", value=self.page
            )
        if self.size <= 0:
            raise InvalidArgumentException(
                "Page size must be greater than zero", field="size", value=self.size
            )

    @classmethod
    def of(cls, page: int = 0, size: int = DEFAULT_PAGE_SIZE) -> "PageRequest":
        return cls(page=page, size=size)

    @property
    def offset(self) -> int:
        """Number of records to skip."""
        return self.page * self.size

    @property
    def limit(self) -> int:
        return self.size
