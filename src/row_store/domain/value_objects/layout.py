"""Fixed byte layout of rows, pages and tables.

Row Layout (host-native byte order, no padding):
    ┌──────────┬──────────────────┬───────────────────────────┐
    │  id (4B) │ username (32B)   │ email (255B)              │
    │  uint32  │ zero-filled text │ zero-filled text          │
    └──────────┴──────────────────┴───────────────────────────┘
    0          4                  36                          291

Page Layout:
    Rows are packed back-to-back from offset 0. With 4096-byte pages and
    291-byte rows a page holds 14 rows; the trailing 22 bytes are unused.

Every offset below is derived from the column widths, so the layout is
defined in exactly one place. Any future on-disk format must reuse it.
"""

from __future__ import annotations

from dataclasses import dataclass

from row_store.domain.value_objects.identifiers import PageIndex, RowNum


# Column widths in bytes
ID_SIZE = 4
USERNAME_SIZE = 32
EMAIL_SIZE = 255

# Column offsets within a row
ID_OFFSET = 0
USERNAME_OFFSET = ID_OFFSET + ID_SIZE
EMAIL_OFFSET = USERNAME_OFFSET + USERNAME_SIZE
ROW_SIZE = ID_SIZE + USERNAME_SIZE + EMAIL_SIZE

# 4KB; the same size as a virtual memory page on most architectures
PAGE_SIZE = 4096
TABLE_MAX_PAGES = 100
ROWS_PER_PAGE = PAGE_SIZE // ROW_SIZE
TABLE_MAX_ROWS = ROWS_PER_PAGE * TABLE_MAX_PAGES


@dataclass(frozen=True, slots=True)
class TableLayout:
    """Page geometry of a single table.

    Maps a logical row number to the page holding it and the byte offset of
    the row inside that page:

        page_index = row_num // rows_per_page
        offset     = (row_num % rows_per_page) * ROW_SIZE

    Attributes:
        page_size: Size of each page in bytes
        max_pages: Number of page slots in the table

    Example:
        >>> layout = TableLayout()
        >>> layout.rows_per_page, layout.max_rows
        (14, 1400)
        >>> layout.address(RowNum(15))
        (1, 291)
    """

    page_size: int = PAGE_SIZE
    max_pages: int = TABLE_MAX_PAGES

    def __post_init__(self) -> None:
        """Validate the geometry."""
        if self.page_size < ROW_SIZE:
            raise ValueError(
                f"page_size must hold at least one {ROW_SIZE}-byte row, got {self.page_size}"
            )
        if self.max_pages < 1:
            raise ValueError(f"max_pages must be >= 1, got {self.max_pages}")

    @property
    def rows_per_page(self) -> int:
        """Number of whole rows that fit in one page."""
        return self.page_size // ROW_SIZE

    @property
    def max_rows(self) -> int:
        """Hard row capacity of the table."""
        return self.rows_per_page * self.max_pages

    def address(self, row_num: RowNum) -> tuple[PageIndex, int]:
        """Return ``(page_index, byte_offset)`` for a row number.

        The caller is responsible for checking ``row_num`` against
        ``max_rows``; this is pure arithmetic.
        """
        page_index, slot = divmod(row_num, self.rows_per_page)
        return PageIndex(page_index), slot * ROW_SIZE

    def pages_for(self, num_rows: int) -> int:
        """Number of pages needed to hold ``num_rows`` rows."""
        return -(-num_rows // self.rows_per_page)


DEFAULT_LAYOUT = TableLayout()
