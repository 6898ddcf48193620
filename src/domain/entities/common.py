"""Shared domain value objects."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of a paginated listing."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20

    @property
    def total_pages(self) -> int:
        """Number of pages needed to show every item."""
        return (self.total + self.limit - 1) // self.limit if self.limit else 0
