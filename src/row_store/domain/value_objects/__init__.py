"""Value objects for the row store domain.

Value objects are immutable types that represent domain concepts.
They have no identity - two value objects with the same attributes are equal.

Exports:
    Identifiers:
        - PageIndex: Type-safe page slot index
        - RowNum: Type-safe logical row number
        - MAX_ROW_ID: Upper bound of the uint32 id column

    Layout:
        - Column widths/offsets (ID_SIZE, USERNAME_OFFSET, ...)
        - ROW_SIZE, PAGE_SIZE, ROWS_PER_PAGE, TABLE_MAX_PAGES, TABLE_MAX_ROWS
        - TableLayout: Page geometry and row addressing for one table

    States:
        - TableState: EMPTY, PARTIAL, FULL
"""

from row_store.domain.value_objects.identifiers import (
    MAX_ROW_ID,
    PageIndex,
    RowNum,
)
from row_store.domain.value_objects.layout import (
    DEFAULT_LAYOUT,
    EMAIL_OFFSET,
    EMAIL_SIZE,
    ID_OFFSET,
    ID_SIZE,
    PAGE_SIZE,
    ROW_SIZE,
    ROWS_PER_PAGE,
    TABLE_MAX_PAGES,
    TABLE_MAX_ROWS,
    USERNAME_OFFSET,
    USERNAME_SIZE,
    TableLayout,
)
from row_store.domain.value_objects.table_state import TableState

__all__ = [
    # Identifiers
    "PageIndex",
    "RowNum",
    "MAX_ROW_ID",
    # Layout
    "ID_SIZE",
    "USERNAME_SIZE",
    "EMAIL_SIZE",
    "ID_OFFSET",
    "USERNAME_OFFSET",
    "EMAIL_OFFSET",
    "ROW_SIZE",
    "PAGE_SIZE",
    "ROWS_PER_PAGE",
    "TABLE_MAX_PAGES",
    "TABLE_MAX_ROWS",
    "TableLayout",
    "DEFAULT_LAYOUT",
    # States
    "TableState",
]
