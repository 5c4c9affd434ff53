"""Fixed-size page holding packed rows.

Page Layout:
    ┌───────────┬───────────┬─────┬───────────┬────────┐
    │  Row 0    │  Row 1    │ ... │  Row n-1  │ unused │
    └───────────┴───────────┴─────┴───────────┴────────┘
    0       ROW_SIZE   2*ROW_SIZE          n*ROW_SIZE  page_size

There is no header and no slot array: the position of a row is fully
determined by its row number (see TableLayout.address).
"""

from __future__ import annotations

from row_store.domain.value_objects import PAGE_SIZE, ROW_SIZE, PageIndex


class Page:
    """A zero-initialised, fixed-size block of row storage.

    Thread Safety:
        This class is NOT thread-safe. Pages are owned by a single table.

    Example:
        >>> page = Page(PageIndex(0))
        >>> view = page.view(0)
        >>> len(view)
        291
    """

    def __init__(self, index: PageIndex, *, page_size: int = PAGE_SIZE) -> None:
        """Initialize a page.

        Args:
            index: Slot index of this page within its table
            page_size: Size of page in bytes (default 4KB)
        """
        if page_size < ROW_SIZE:
            raise ValueError(f"Page must hold at least one row, got {page_size} bytes")

        self._index = index
        self._page_size = page_size
        self._data: bytearray | None = bytearray(page_size)

    @property
    def index(self) -> PageIndex:
        """Get the slot index."""
        return self._index

    @property
    def page_size(self) -> int:
        """Get the page size in bytes."""
        return self._page_size

    @property
    def is_released(self) -> bool:
        """True once the page memory has been given back."""
        return self._data is None

    def view(self, offset: int, length: int = ROW_SIZE) -> memoryview:
        """Return a writable view of ``length`` bytes starting at ``offset``.

        Raises:
            ValueError: If the range does not lie within the page
            RuntimeError: If the page has been released
        """
        if self._data is None:
            raise RuntimeError(f"Page {self._index} has been released")
        if offset < 0 or length < 0 or offset + length > self._page_size:
            raise ValueError(
                f"Range [{offset}, {offset + length}) outside page of {self._page_size} bytes"
            )
        return memoryview(self._data)[offset : offset + length]

    def release(self) -> None:
        """Drop the page memory. Further views raise RuntimeError."""
        self._data = None

    def __len__(self) -> int:
        return self._page_size

    def __repr__(self) -> str:
        state = "released" if self.is_released else "live"
        return f"Page(index={self._index}, size={self._page_size}, {state})"
