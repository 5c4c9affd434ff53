"""Table lifecycle states."""

from __future__ import annotations

from enum import Enum


class TableState(Enum):
    """Fill state of a table.

    State machine:

        EMPTY ──insert()──> PARTIAL ──insert()──> FULL
                              │  ^
                              └──┘ insert()

    There is no transition back: rows are never deleted. A table whose
    capacity is a single row goes straight from EMPTY to FULL.
    """

    EMPTY = "empty"
    """No rows and no allocated pages."""

    PARTIAL = "partial"
    """At least one row, below capacity."""

    FULL = "full"
    """num_rows == max_rows; every further insert is rejected."""

    @classmethod
    def for_rows(cls, num_rows: int, max_rows: int) -> TableState:
        """Derive the state from a row count."""
        if num_rows == 0:
            return cls.EMPTY
        if num_rows >= max_rows:
            return cls.FULL
        return cls.PARTIAL

    def accepts_inserts(self) -> bool:
        """Check whether another row can be appended."""
        return self is not TableState.FULL
