"""Statement executor for append-only inserts and full-table scans.

This module implements the ExecutionEngine port on top of a page-addressed
Table and the fixed-width row codec.

Insert protocol:
    1. Reject if the table is full            -> TABLE_FULL
    2. Reject if a text column is too long    -> FIELD_TOO_LONG
       or contains a NUL character            -> INVALID_FIELD_VALUE
    3. Encode the row into locate(num_rows)
    4. Increment num_rows

Steps 1 and 2 run before any page is touched, so a rejected insert neither
writes a byte nor allocates a page.

Select is a generator over row numbers 0..num_rows that decodes each row
straight from page memory. Every call starts a fresh scan.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Iterator

from row_store.adapters.inbound.statement_parser import (
    InsertStatement,
    SelectStatement,
    Statement,
)
from row_store.adapters.outbound.memory_page_store import InMemoryPageStore
from row_store.domain.entities import Row, deserialize_row, serialize_row
from row_store.domain.services import Table
from row_store.domain.value_objects import DEFAULT_LAYOUT, RowNum, TableLayout
from row_store.infrastructure.logging import get_logger
from row_store.infrastructure.tracing import trace_span
from row_store.ports.inbound.execution_engine import (
    CapacityExceededError,
    ExecuteStatus,
    ExecutionResult,
    FieldTooLongError,
    InvalidFieldValueError,
    InvalidRowIndexError,
)

if TYPE_CHECKING:
    from row_store.infrastructure.metrics import MetricsRegistry

logger = get_logger(__name__)


def create_table(layout: TableLayout = DEFAULT_LAYOUT) -> Table:
    """Create an empty table backed by in-memory pages.

    Args:
        layout: Page geometry (defaults to 4KB pages, 100 page slots).

    Returns:
        An empty table, ready for insert and select.
    """
    page_store = InMemoryPageStore(max_pages=layout.max_pages, page_size=layout.page_size)
    return Table(page_store)


class Executor:
    """Executes insert and select statements against a table.

    The executor holds no table state of its own; the same instance can
    serve any number of tables.
    """

    def __init__(self, metrics: MetricsRegistry | None = None) -> None:
        """Initialize the executor.

        Args:
            metrics: Optional metrics registry to record statement outcomes.
        """
        self._metrics = metrics

    def insert(self, table: Table, row: Row) -> ExecutionResult:
        """Append a row at the end of the table.

        Args:
            table: The target table.
            row: The row to append.

        Returns:
            SUCCESS with affected_rows=1, or TABLE_FULL, FIELD_TOO_LONG or
            INVALID_FIELD_VALUE with the table unchanged.
        """
        start = time.perf_counter()

        with trace_span("insert", {"row_store.num_rows": table.num_rows}):
            try:
                table.check_capacity()
                row.validate()
                serialize_row(row, table.locate(RowNum(table.num_rows)))
                table.increment_rows()
                result = ExecutionResult(affected_rows=1, message="OK")
            except CapacityExceededError as e:
                result = ExecutionResult(status=ExecuteStatus.TABLE_FULL, message=str(e))
            except FieldTooLongError as e:
                result = ExecutionResult(status=ExecuteStatus.FIELD_TOO_LONG, message=str(e))
            except InvalidFieldValueError as e:
                result = ExecutionResult(status=ExecuteStatus.INVALID_FIELD_VALUE, message=str(e))
            except InvalidRowIndexError as e:
                logger.error("insert_invalid_row_index", error=str(e), num_rows=table.num_rows)
                result = ExecutionResult(status=ExecuteStatus.INVALID_ROW_INDEX, message=str(e))

        if not result.success and result.status is not ExecuteStatus.INVALID_ROW_INDEX:
            logger.warning("insert_rejected", status=result.status.value, reason=result.message)

        self._record("insert", result, table, time.perf_counter() - start)
        return result

    def select(self, table: Table) -> Iterator[Row]:
        """Lazily yield every row of the table in insertion order.

        The scan covers the rows present when iteration starts and reads
        them from page memory on demand. Use execute_select for a typed
        result instead of an exception.

        Raises:
            InvalidRowIndexError: From next(), if the table is closed while
                the scan is still being consumed.
        """
        if self._metrics is not None:
            self._metrics.selects_total.inc()

        for row_num in range(table.num_rows):
            row = deserialize_row(table.locate(RowNum(row_num)))
            if self._metrics is not None:
                self._metrics.rows_scanned_total.inc()
            yield row

    def execute_select(self, table: Table) -> ExecutionResult:
        """Run a full scan and materialise the rows into a result."""
        start = time.perf_counter()

        with trace_span("select", {"row_store.num_rows": table.num_rows}):
            try:
                rows = list(self.select(table))
                result = ExecutionResult(rows=rows, message="OK")
            except InvalidRowIndexError as e:
                logger.error("select_invalid_row_index", error=str(e), num_rows=table.num_rows)
                result = ExecutionResult(status=ExecuteStatus.INVALID_ROW_INDEX, message=str(e))

        self._record("select", result, table, time.perf_counter() - start)
        return result

    def execute(self, table: Table, statement: Statement) -> ExecutionResult:
        """Execute a parsed statement.

        Args:
            table: The target table.
            statement: An InsertStatement or SelectStatement.

        Returns:
            The execution result.

        Raises:
            TypeError: If the statement type is not supported.
        """
        if isinstance(statement, InsertStatement):
            return self.insert(table, statement.row)
        if isinstance(statement, SelectStatement):
            return self.execute_select(table)
        raise TypeError(f"Unsupported statement: {type(statement).__name__}")

    def _record(
        self, statement_type: str, result: ExecutionResult, table: Table, elapsed: float
    ) -> None:
        """Update metrics after a statement."""
        if self._metrics is None:
            return

        self._metrics.observe_statement(statement_type, result.status.value, elapsed)
        if not table.is_closed:
            self._metrics.observe_table(table.num_rows, table.allocated_pages)
