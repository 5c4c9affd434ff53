"""Domain entities for the row store.

Exports:
    Row:
        - Row: Fixed-schema record (id, username, email)
        - serialize_row, deserialize_row: Fixed-width row codec

    Page:
        - Page: Fixed-size block of packed rows
"""

from row_store.domain.entities.page import Page
from row_store.domain.entities.row import Row, deserialize_row, serialize_row

__all__ = [
    "Row",
    "serialize_row",
    "deserialize_row",
    "Page",
]
