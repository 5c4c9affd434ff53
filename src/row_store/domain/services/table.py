"""Page-addressed table of fixed-width rows.

The table owns a page store and a row counter. Row ``r`` lives in page
``r // rows_per_page`` at byte offset ``(r % rows_per_page) * ROW_SIZE``.
Pages are allocated the first time a row inside them is addressed, so after
writing rows ``0..k`` exactly ``ceil(k / rows_per_page)`` pages exist.

The table only grows: rows are appended, never updated in place or removed.
Its pages live exactly as long as the table; ``close()`` (or leaving a
``with`` block) releases them on every exit path.

Example:
    >>> with Table(InMemoryPageStore()) as table:
    ...     slot = table.locate(table.num_rows)
    ...     serialize_row(Row(1, "alice", "alice@example.com"), slot)
    ...     table.increment_rows()
"""

from __future__ import annotations

from types import TracebackType

from row_store.domain.value_objects import PageIndex, RowNum, TableLayout, TableState
from row_store.infrastructure.logging import get_logger
from row_store.ports.inbound.execution_engine import CapacityExceededError, InvalidRowIndexError
from row_store.ports.outbound.page_store import PageStore

logger = get_logger(__name__)


class Table:
    """An append-only, capacity-bounded collection of rows.

    Thread Safety:
        This class is NOT thread-safe. A table has one owner, which is both
        its only writer and its only reader.
    """

    def __init__(self, page_store: PageStore) -> None:
        """Initialize an empty table.

        Args:
            page_store: Storage for the table's pages. The table takes
                ownership and releases it on close().
        """
        self._page_store = page_store
        self._layout = TableLayout(page_size=page_store.page_size, max_pages=page_store.max_pages)
        self._num_rows = 0
        self._closed = False

    @property
    def layout(self) -> TableLayout:
        """Page geometry of this table."""
        return self._layout

    @property
    def num_rows(self) -> int:
        """Number of rows appended so far."""
        return self._num_rows

    @property
    def max_rows(self) -> int:
        """Hard row capacity."""
        return self._layout.max_rows

    @property
    def allocated_pages(self) -> int:
        """Number of pages allocated so far."""
        return self._page_store.allocated_count

    @property
    def state(self) -> TableState:
        """Current fill state."""
        return TableState.for_rows(self._num_rows, self._layout.max_rows)

    @property
    def is_full(self) -> bool:
        return self._num_rows >= self._layout.max_rows

    @property
    def is_closed(self) -> bool:
        return self._closed

    def address(self, row_num: RowNum) -> tuple[PageIndex, int]:
        """Return the ``(page_index, byte_offset)`` of a row.

        Raises:
            InvalidRowIndexError: If row_num is outside [0, max_rows).
        """
        if not 0 <= row_num < self._layout.max_rows:
            raise InvalidRowIndexError(row_num, self._layout.max_rows)
        return self._layout.address(row_num)

    def locate(self, row_num: RowNum) -> memoryview:
        """Return the writable ROW_SIZE-byte range that stores a row.

        Allocates the containing page if its slot is still absent. Calling
        this repeatedly for the same row addresses the same bytes.

        Args:
            row_num: Logical row number.

        Returns:
            A memoryview over the row's bytes inside its page.

        Raises:
            InvalidRowIndexError: If row_num is outside [0, max_rows) or the
                table has been closed.
        """
        if self._closed:
            raise InvalidRowIndexError(row_num, 0)

        page_index, offset = self.address(row_num)
        page = self._page_store.get_or_allocate(page_index)
        return page.view(offset)

    def check_capacity(self) -> None:
        """Raise CapacityExceededError if no further row fits."""
        if self.is_full:
            raise CapacityExceededError(self._layout.max_rows)

    def increment_rows(self) -> RowNum:
        """Record that the next row has been written and return its number.

        Raises:
            CapacityExceededError: If the table is already full.
        """
        self.check_capacity()
        row_num = RowNum(self._num_rows)
        self._num_rows += 1
        return row_num

    def close(self) -> None:
        """Release every page. Safe to call more than once."""
        if self._closed:
            return

        released = self._page_store.release_all()
        self._closed = True
        logger.info("table_closed", num_rows=self._num_rows, pages_released=released)

    def __enter__(self) -> Table:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __len__(self) -> int:
        return self._num_rows

    def __repr__(self) -> str:
        return (
            f"Table(rows={self._num_rows}/{self._layout.max_rows}, "
            f"pages={self.allocated_pages}/{self._layout.max_pages}, "
            f"state={self.state.value})"
        )
