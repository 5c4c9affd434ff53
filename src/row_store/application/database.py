"""Database - unified entry point for the row store.

This module provides the Database class that owns one table for its
lifetime and wires the statement parser, the executor and metrics together.

Usage:
    from row_store.application import Database

    with Database() as db:
        db.execute("insert 1 alice alice@example.com")
        result = db.execute("select")
        for row in result.rows:
            print(row)

Leaving the ``with`` block closes the table and releases its pages, also
when the block exits with an exception.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any, Iterator

from row_store.adapters.inbound.statement_parser import (
    PrepareSyntaxError,
    StatementParser,
    UnrecognizedStatementError,
)
from row_store.application.executor import Executor, create_table
from row_store.domain.entities import Row
from row_store.domain.services import Table
from row_store.domain.value_objects import DEFAULT_LAYOUT, ROW_SIZE, TableLayout
from row_store.infrastructure.config import Config
from row_store.infrastructure.logging import get_logger
from row_store.infrastructure.metrics import MetricsRegistry
from row_store.ports.inbound.execution_engine import ExecuteStatus, ExecutionResult

logger = get_logger(__name__)


class Database:
    """Owns a single table and executes statements against it.

    Thread Safety:
        Not thread-safe. A database has one caller.
    """

    def __init__(
        self,
        layout: TableLayout = DEFAULT_LAYOUT,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the database.

        Args:
            layout: Page geometry of the table.
            metrics: Optional metrics registry.
        """
        self._layout = layout
        self._parser = StatementParser()
        self._executor = Executor(metrics=metrics)
        self._table: Table | None = None

    @classmethod
    def from_config(cls, config: Config, metrics: MetricsRegistry | None = None) -> Database:
        """Create a database using the storage settings of a Config."""
        return cls(layout=config.table_layout(), metrics=metrics)

    @property
    def is_started(self) -> bool:
        """Check if the database is started."""
        return self._table is not None

    @property
    def table(self) -> Table:
        """The table owned by this database.

        Raises:
            RuntimeError: If not started.
        """
        if self._table is None:
            raise RuntimeError("Database not started")
        return self._table

    def start(self) -> None:
        """Create the empty table.

        Raises:
            RuntimeError: If already started.
        """
        if self._table is not None:
            raise RuntimeError("Database already started")

        self._table = create_table(self._layout)
        logger.info(
            "database_started",
            page_size=self._layout.page_size,
            max_pages=self._layout.max_pages,
            max_rows=self._layout.max_rows,
        )

    def stop(self) -> None:
        """Close the table and release all of its pages.

        Raises:
            RuntimeError: If not started.
        """
        if self._table is None:
            raise RuntimeError("Database not started")

        table, self._table = self._table, None
        table.close()

    def insert(self, row: Row) -> ExecutionResult:
        """Append a row to the table."""
        return self._executor.insert(self.table, row)

    def select(self) -> Iterator[Row]:
        """Lazily scan the table in insertion order."""
        return self._executor.select(self.table)

    def execute(self, line: str) -> ExecutionResult:
        """Parse and execute one statement.

        Args:
            line: Statement text, e.g. ``insert 1 alice a@b.c`` or ``select``.

        Returns:
            The execution result. Parse failures are reported with
            SYNTAX_ERROR or UNRECOGNIZED_STATEMENT.
        """
        table = self.table
        try:
            statement = self._parser.parse(line)
        except PrepareSyntaxError as e:
            return ExecutionResult(status=ExecuteStatus.SYNTAX_ERROR, message=str(e))
        except UnrecognizedStatementError as e:
            return ExecutionResult(status=ExecuteStatus.UNRECOGNIZED_STATEMENT, message=str(e))

        return self._executor.execute(table, statement)

    def execute_many(self, lines: list[str]) -> list[ExecutionResult]:
        """Execute statements one after another."""
        return [self.execute(line) for line in lines]

    def get_stats(self) -> dict[str, Any]:
        """Get table statistics."""
        stats: dict[str, Any] = {
            "started": self.is_started,
            "page_size": self._layout.page_size,
            "max_pages": self._layout.max_pages,
            "row_size": ROW_SIZE,
            "rows_per_page": self._layout.rows_per_page,
            "max_rows": self._layout.max_rows,
        }
        if self._table is not None:
            stats["num_rows"] = self._table.num_rows
            stats["allocated_pages"] = self._table.allocated_pages
            stats["state"] = self._table.state.value
        return stats

    def __enter__(self) -> Database:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._table is not None:
            self.stop()
