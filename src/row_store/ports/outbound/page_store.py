"""Page Store port for owning a table's memory blocks.

The page store holds a fixed number of page slots. Each slot is either
absent or holds one owned, fixed-size page. Pages are allocated on first
use and live until the store is released.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Protocol, runtime_checkable

if TYPE_CHECKING:
    from row_store.domain.entities import Page
    from row_store.domain.value_objects import PageIndex


@runtime_checkable
class PageStore(Protocol):
    """Protocol for capacity-bounded, lazily allocated page storage.

    Thread Safety:
        Not required. A page store is owned by exactly one table and
        accessed by a single caller.
    """

    @property
    def page_size(self) -> int:
        """Size of every page in bytes."""
        ...

    @property
    def max_pages(self) -> int:
        """Number of page slots."""
        ...

    @property
    def allocated_count(self) -> int:
        """Number of slots currently holding a page."""
        ...

    def get(self, page_index: PageIndex) -> Page | None:
        """Return the page in a slot, or None if the slot is absent.

        Raises:
            InvalidRowIndexError: If page_index is outside [0, max_pages).
        """
        ...

    def get_or_allocate(self, page_index: PageIndex) -> Page:
        """Return the page in a slot, allocating a zeroed page if absent.

        Raises:
            InvalidRowIndexError: If page_index is outside [0, max_pages).
        """
        ...

    def allocated_indices(self) -> Iterator[PageIndex]:
        """Yield the indices of allocated slots in ascending order."""
        ...

    def release_all(self) -> int:
        """Release every page and return how many were released."""
        ...
