"""Core identifiers and type-safe primitives for the row store.

These value objects keep page indices and row numbers apart so that the
address arithmetic in the table cannot silently mix them up.
"""

from __future__ import annotations

from typing import NewType


# Type-safe identifiers using NewType for zero-cost runtime abstraction

PageIndex = NewType("PageIndex", int)
"""Position of a page slot within a table. Ranges over [0, max_pages)."""

RowNum = NewType("RowNum", int)
"""Logical row number within a table, in insertion order. Starts at 0."""

MAX_ROW_ID = 0xFFFFFFFF
"""Largest value the unsigned 32-bit ``id`` column can hold."""
