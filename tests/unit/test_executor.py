"""Unit tests for the statement Executor."""

from __future__ import annotations

from typing import Iterator

import pytest

from row_store.adapters.inbound import InsertStatement, SelectStatement, Statement
from row_store.application import Executor, create_table
from row_store.domain.entities import Row
from row_store.domain.services import Table
from row_store.domain.value_objects import (
    EMAIL_SIZE,
    ROWS_PER_PAGE,
    TABLE_MAX_ROWS,
    USERNAME_SIZE,
    TableState,
)
from row_store.infrastructure.metrics import MetricsRegistry
from row_store.ports.inbound import ExecuteStatus, InvalidRowIndexError


def _row(i: int) -> Row:
    return Row(i, f"user{i}", f"user{i}@example.com")


@pytest.mark.unit
class TestInsert:
    """Tests for Executor.insert."""

    def test_insert_and_select(self, executor: Executor, table: Table) -> None:
        """Two inserts come back from select in insertion order."""
        alice = Row(1, "alice", "alice@example.com")
        bob = Row(2, "bob", "bob@example.com")

        assert executor.insert(table, alice).success
        assert executor.insert(table, bob).success

        assert list(executor.select(table)) == [alice, bob]

    def test_insert_result(self, executor: Executor, table: Table) -> None:
        result = executor.insert(table, _row(1))

        assert result.status is ExecuteStatus.SUCCESS
        assert result.affected_rows == 1
        assert table.num_rows == 1

    def test_insert_appends_without_ordering_by_id(self, executor: Executor, table: Table) -> None:
        for i in (5, 1, 3):
            executor.insert(table, _row(i))

        assert [row.id for row in executor.select(table)] == [5, 1, 3]

    def test_duplicate_ids_allowed(self, executor: Executor, table: Table) -> None:
        executor.insert(table, _row(1))
        executor.insert(table, _row(1))

        assert table.num_rows == 2

    def test_username_exact_width(self, executor: Executor, table: Table) -> None:
        result = executor.insert(table, Row(1, "a" * USERNAME_SIZE, "e"))

        assert result.success
        assert next(executor.select(table)).username == "a" * USERNAME_SIZE

    def test_username_too_long(self, executor: Executor, table: Table) -> None:
        result = executor.insert(table, Row(1, "a" * (USERNAME_SIZE + 1), "e"))

        assert result.status is ExecuteStatus.FIELD_TOO_LONG
        assert "username" in result.message
        assert table.num_rows == 0

    def test_email_exact_width(self, executor: Executor, table: Table) -> None:
        assert executor.insert(table, Row(1, "u", "e" * EMAIL_SIZE)).success

    def test_email_too_long(self, executor: Executor, table: Table) -> None:
        result = executor.insert(table, Row(1, "u", "e" * (EMAIL_SIZE + 1)))

        assert result.status is ExecuteStatus.FIELD_TOO_LONG
        assert "email" in result.message

    def test_text_with_nul_rejected(self, executor: Executor, table: Table) -> None:
        """Every accepted row reads back unchanged, so NUL text is refused."""
        result = executor.insert(table, Row(1, "bob\x00", "b@e.c\x00"))

        assert result.status is ExecuteStatus.INVALID_FIELD_VALUE
        assert "username" in result.message
        assert table.num_rows == 0
        assert table.allocated_pages == 0
        assert list(executor.select(table)) == []

    def test_accepted_rows_read_back_equal(self, executor: Executor, table: Table) -> None:
        rows = [
            Row(0, "", ""),
            Row(1, "zoë", "名前@example.com"),
            Row(2, "a" * USERNAME_SIZE, "e" * EMAIL_SIZE),
            Row(3, "tab\there", "x@y.z "),
        ]
        for row in rows:
            assert executor.insert(table, row).success

        assert list(executor.select(table)) == rows

    def test_rejected_insert_allocates_nothing(self, executor: Executor, table: Table) -> None:
        """A rejected row neither writes a byte nor touches a page."""
        executor.insert(table, Row(1, "a" * (USERNAME_SIZE + 1), "e"))

        assert table.allocated_pages == 0
        assert table.state is TableState.EMPTY

    def test_rejected_insert_does_not_disturb_existing_rows(
        self, executor: Executor, table: Table
    ) -> None:
        executor.insert(table, _row(1))
        executor.insert(table, Row(2, "u", "e" * (EMAIL_SIZE + 1)))
        executor.insert(table, _row(3))

        assert list(executor.select(table)) == [_row(1), _row(3)]

    def test_fill_default_table(self, executor: Executor, table: Table) -> None:
        """Exactly TABLE_MAX_ROWS inserts succeed; the next one fails."""
        for i in range(TABLE_MAX_ROWS):
            assert executor.insert(table, _row(i)).success

        assert table.state is TableState.FULL
        assert table.allocated_pages == TABLE_MAX_ROWS // ROWS_PER_PAGE

        result = executor.insert(table, _row(TABLE_MAX_ROWS))

        assert result.status is ExecuteStatus.TABLE_FULL
        assert table.num_rows == TABLE_MAX_ROWS

    def test_table_full_checked_before_field_width(
        self, executor: Executor, small_table: Table
    ) -> None:
        for i in range(small_table.max_rows):
            executor.insert(small_table, _row(i))

        result = executor.insert(small_table, Row(99, "a" * (USERNAME_SIZE + 1), "e"))

        assert result.status is ExecuteStatus.TABLE_FULL

    def test_insert_into_closed_table(self, executor: Executor) -> None:
        table = create_table()
        table.close()

        result = executor.insert(table, _row(1))

        assert result.status is ExecuteStatus.INVALID_ROW_INDEX
        assert table.num_rows == 0


@pytest.mark.unit
class TestSelect:
    """Tests for Executor.select."""

    def test_select_empty_table(self, executor: Executor, table: Table) -> None:
        assert list(executor.select(table)) == []

    def test_select_is_lazy(self, executor: Executor, table: Table) -> None:
        for i in range(3):
            executor.insert(table, _row(i))

        rows = executor.select(table)

        assert isinstance(rows, Iterator)
        assert next(rows) == _row(0)
        assert next(rows) == _row(1)

    def test_select_is_restartable(self, executor: Executor, table: Table) -> None:
        for i in range(ROWS_PER_PAGE * 2 + 1):
            executor.insert(table, _row(i))

        first = list(executor.select(table))
        second = list(executor.select(table))

        assert first == second
        assert len(first) == ROWS_PER_PAGE * 2 + 1

    def test_select_sees_rows_inserted_since_last_scan(
        self, executor: Executor, table: Table
    ) -> None:
        executor.insert(table, _row(1))
        assert len(list(executor.select(table))) == 1

        executor.insert(table, _row(2))
        assert list(executor.select(table)) == [_row(1), _row(2)]

    def test_select_across_pages(self, executor: Executor, small_table: Table) -> None:
        rows = [_row(i) for i in range(small_table.max_rows)]
        for row in rows:
            executor.insert(small_table, row)

        assert list(executor.select(small_table)) == rows

    def test_execute_select(self, executor: Executor, table: Table) -> None:
        executor.insert(table, _row(1))

        result = executor.execute_select(table)

        assert result.success
        assert result.rows == [_row(1)]

    def test_select_raises_once_table_is_closed(self, executor: Executor) -> None:
        table = create_table()
        for i in range(2):
            executor.insert(table, _row(i))
        rows = executor.select(table)
        assert next(rows) == _row(0)

        table.close()

        with pytest.raises(InvalidRowIndexError):
            next(rows)

    def test_execute_select_on_closed_table(self, executor: Executor) -> None:
        table = create_table()
        executor.insert(table, _row(1))
        table.close()

        result = executor.execute_select(table)

        assert result.status is ExecuteStatus.INVALID_ROW_INDEX


@pytest.mark.unit
class TestExecute:
    """Tests for statement dispatch."""

    def test_execute_insert(self, executor: Executor, table: Table) -> None:
        result = executor.execute(table, InsertStatement(row=_row(1)))

        assert result.success
        assert table.num_rows == 1

    def test_execute_select(self, executor: Executor, table: Table) -> None:
        executor.execute(table, InsertStatement(row=_row(1)))

        result = executor.execute(table, SelectStatement())

        assert result.rows == [_row(1)]

    def test_execute_unknown_statement(self, executor: Executor, table: Table) -> None:
        with pytest.raises(TypeError):
            executor.execute(table, Statement())


@pytest.mark.unit
class TestExecutorMetrics:
    """Tests for metrics recording."""

    def test_insert_metrics(
        self, executor: Executor, small_table: Table, metrics_registry: MetricsRegistry
    ) -> None:
        registry = metrics_registry.registry
        for i in range(small_table.max_rows + 1):
            executor.insert(small_table, _row(i))
        executor.insert(small_table, Row(1, "a" * (USERNAME_SIZE + 1), "e"))

        assert registry.get_sample_value(
            "row_store_inserts_total", {"status": "success"}
        ) == small_table.max_rows
        assert registry.get_sample_value("row_store_inserts_total", {"status": "table_full"}) == 2
        assert registry.get_sample_value("row_store_rows") == small_table.max_rows
        assert registry.get_sample_value("row_store_pages_allocated") == 3

    def test_select_metrics(
        self, executor: Executor, table: Table, metrics_registry: MetricsRegistry
    ) -> None:
        registry = metrics_registry.registry
        for i in range(4):
            executor.insert(table, _row(i))

        executor.execute_select(table)
        list(executor.select(table))

        assert registry.get_sample_value("row_store_selects_total") == 2
        assert registry.get_sample_value("row_store_rows_scanned_total") == 8
        assert registry.get_sample_value(
            "row_store_statement_latency_seconds_count", {"statement_type": "select"}
        ) == 1

    def test_executor_without_metrics(self, table: Table) -> None:
        executor = Executor()

        assert executor.insert(table, _row(1)).success
        assert list(executor.select(table)) == [_row(1)]
