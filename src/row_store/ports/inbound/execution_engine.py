"""Execution Engine port for appending and scanning rows.

This inbound port defines the contract offered to front ends (REPL, REST
API): insert a row at the end of a table, and scan all rows in insertion
order. It also defines the error types of the storage core and the typed
result every statement produces.

Key concepts:
- Failures are returned as an ExecutionResult status, never raised
- A failed insert leaves the table byte-for-byte unchanged
- A select is a fresh, restartable scan over stored bytes
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterator, Protocol

if TYPE_CHECKING:
    from row_store.domain.entities import Row
    from row_store.domain.services import Table


class ExecuteStatus(Enum):
    """Outcome of executing a statement."""

    SUCCESS = "success"
    TABLE_FULL = "table_full"
    FIELD_TOO_LONG = "field_too_long"
    INVALID_FIELD_VALUE = "invalid_field_value"
    INVALID_ROW_INDEX = "invalid_row_index"
    SYNTAX_ERROR = "syntax_error"
    UNRECOGNIZED_STATEMENT = "unrecognized_statement"


@dataclass
class ExecutionResult:
    """Result of statement execution."""

    status: ExecuteStatus = ExecuteStatus.SUCCESS
    rows: list[Row] = field(default_factory=list)
    affected_rows: int = 0
    message: str = ""

    @property
    def success(self) -> bool:
        return self.status is ExecuteStatus.SUCCESS


class ExecutionEngine(Protocol):
    """Protocol for statement execution against a table.

    Example:
        result = engine.insert(table, Row(1, "alice", "alice@example.com"))
        if result.success:
            for row in engine.select(table):
                print(row)
    """

    @abstractmethod
    def insert(self, table: Table, row: Row) -> ExecutionResult:
        """Append a row at the end of the table.

        Args:
            table: The target table.
            row: The row to append.

        Returns:
            SUCCESS, TABLE_FULL, FIELD_TOO_LONG or INVALID_FIELD_VALUE.
            On failure the table is unchanged.
        """
        ...

    @abstractmethod
    def select(self, table: Table) -> Iterator[Row]:
        """Lazily yield every row of the table in insertion order.

        Rows are decoded on demand, so the table must stay open while the
        iterator is consumed.

        Raises:
            InvalidRowIndexError: From ``next()``, if the table was closed
                after iteration started.
        """
        ...


class RowStoreError(Exception):
    """Base class for storage core errors."""

    pass


class CapacityExceededError(RowStoreError):
    """Raised when a table already holds its maximum number of rows."""

    def __init__(self, max_rows: int) -> None:
        super().__init__(f"Table is full ({max_rows} rows)")
        self.max_rows = max_rows


class FieldTooLongError(RowStoreError):
    """Raised when a text column does not fit its fixed width.

    The length is measured in encoded (UTF-8) bytes.
    """

    def __init__(self, field_name: str, length: int, limit: int) -> None:
        super().__init__(f"Column '{field_name}' is {length} bytes, limit is {limit}")
        self.field_name = field_name
        self.length = length
        self.limit = limit


class InvalidFieldValueError(RowStoreError):
    """Raised when a text column holds a NUL character.

    NUL is the zero fill of the fixed-width columns, so it cannot be stored
    and read back unchanged.
    """

    def __init__(self, field_name: str, position: int) -> None:
        super().__init__(f"Column '{field_name}' contains a NUL character at position {position}")
        self.field_name = field_name
        self.position = position


class InvalidRowIndexError(RowStoreError):
    """Raised when a row or page index falls outside the table.

    This signals a defect in the caller: the execution engine checks
    capacity before addressing a row.
    """

    def __init__(self, index: int, limit: int, kind: str = "row") -> None:
        super().__init__(f"{kind} index {index} out of range [0, {limit})")
        self.index = index
        self.limit = limit
