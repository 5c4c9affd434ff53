"""In-memory page store adapter.

Implements the PageStore protocol with a dictionary from page index to an
owned Page. Slots that were never touched hold no entry, so an empty table
costs no page memory. Data is not persisted across restarts.

Usage:
    store = InMemoryPageStore(max_pages=100)
    page = store.get_or_allocate(PageIndex(3))
    store.allocated_count  # 1
    store.release_all()
"""

from __future__ import annotations

from typing import Iterator

from row_store.domain.entities import Page
from row_store.domain.value_objects import PAGE_SIZE, TABLE_MAX_PAGES, PageIndex
from row_store.infrastructure.logging import get_logger
from row_store.ports.inbound.execution_engine import InvalidRowIndexError

logger = get_logger(__name__)


class InMemoryPageStore:
    """Capacity-bounded, lazily allocated page storage.

    Attributes:
        max_pages: Number of page slots.
        page_size: Size of each page in bytes.
    """

    def __init__(self, max_pages: int = TABLE_MAX_PAGES, page_size: int = PAGE_SIZE) -> None:
        """Initialize an empty page store.

        Args:
            max_pages: Number of page slots.
            page_size: Size of each page in bytes.

        Raises:
            ValueError: If max_pages < 1.
        """
        if max_pages < 1:
            raise ValueError(f"max_pages must be >= 1, got {max_pages}")

        self._max_pages = max_pages
        self._page_size = page_size
        self._pages: dict[PageIndex, Page] = {}

    @property
    def page_size(self) -> int:
        """Size of every page in bytes."""
        return self._page_size

    @property
    def max_pages(self) -> int:
        """Number of page slots."""
        return self._max_pages

    @property
    def allocated_count(self) -> int:
        """Number of slots currently holding a page."""
        return len(self._pages)

    def _check_index(self, page_index: PageIndex) -> None:
        if not 0 <= page_index < self._max_pages:
            raise InvalidRowIndexError(page_index, self._max_pages, kind="page")

    def get(self, page_index: PageIndex) -> Page | None:
        """Return the page in a slot, or None if the slot is absent."""
        self._check_index(page_index)
        return self._pages.get(page_index)

    def get_or_allocate(self, page_index: PageIndex) -> Page:
        """Return the page in a slot, allocating a zeroed page if absent."""
        self._check_index(page_index)

        page = self._pages.get(page_index)
        if page is None:
            page = Page(page_index, page_size=self._page_size)
            self._pages[page_index] = page
            logger.debug(
                "page_allocated",
                page_index=page_index,
                allocated=len(self._pages),
                max_pages=self._max_pages,
            )
        return page

    def allocated_indices(self) -> Iterator[PageIndex]:
        """Yield the indices of allocated slots in ascending order."""
        yield from sorted(self._pages)

    def release_all(self) -> int:
        """Release every page and return how many were released."""
        released = len(self._pages)
        for page in self._pages.values():
            page.release()
        self._pages.clear()
        return released

    def __contains__(self, page_index: object) -> bool:
        return page_index in self._pages

    def __repr__(self) -> str:
        return (
            f"InMemoryPageStore(allocated={len(self._pages)}, "
            f"max_pages={self._max_pages}, page_size={self._page_size})"
        )
