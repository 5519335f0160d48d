"""Offset pagination arithmetic for list views."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Largest page whose offset still fits a signed 64-bit integer.
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE

# Upper bound for the unpaginated list view. Rows beyond it are dropped.
SIMPLE_LIST_LIMIT = 10_000


@dataclass(frozen=True)
class PageRequest:
    """A clamped page request.

    Use :meth:`clamp` rather than the constructor so the bounds hold.
    """

    page: int
    page_size: int

    @classmethod
    def clamp(cls, page: int | None, page_size: int | None) -> PageRequest:
        """Clamp *page* to ``[1, MAX_PAGE]`` and *page_size* to ``[1, MAX_PAGE_SIZE]``.

        Unset or non-positive page sizes fall back to ``DEFAULT_PAGE_SIZE``.

        Examples:
            >>> PageRequest.clamp(0, 500)
            PageRequest(page=1, page_size=100)
            >>> PageRequest.clamp(3, None)
            PageRequest(page=3, page_size=10)
        """
        if page is None or page < 1:
            page = DEFAULT_PAGE
        if page > MAX_PAGE:
            page = MAX_PAGE
        if page_size is None or page_size < 1:
            page_size = DEFAULT_PAGE_SIZE
        if page_size > MAX_PAGE_SIZE:
            page_size = MAX_PAGE_SIZE
        return cls(page=page, page_size=page_size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def total_pages(total: int, page_size: int) -> int:
    """Ceiling of ``total / page_size`` in integer arithmetic."""
    pages, remainder = divmod(total, page_size)
    if remainder > 0:
        pages += 1
    return pages
