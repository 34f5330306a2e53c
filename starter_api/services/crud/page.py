"""
Page of query results.
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """
    One zero-based page of results plus the totals needed to navigate.

    Attributes:
        content: Items of this page (may be empty)
        number: Zero-based page index that was requested
        size: Requested page size
        total_elements: Total number of matching rows
    """

    content: list[T] = field(default_factory=list)
    number: int = 0
    size: int = 0
    total_elements: int = 0

    @property
    def total_pages(self) -> int:
        """Number of pages available, 0 when there are no rows."""
        if self.size <= 0:
            return 1 if self.total_elements else 0
        return (self.total_elements + self.size - 1) // self.size
