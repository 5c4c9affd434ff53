"""Inbound ports - APIs offered to front ends."""

from row_store.ports.inbound.execution_engine import (
    CapacityExceededError,
    ExecuteStatus,
    ExecutionEngine,
    ExecutionResult,
    FieldTooLongError,
    InvalidFieldValueError,
    InvalidRowIndexError,
    RowStoreError,
)

__all__ = [
    "ExecutionEngine",
    "ExecutionResult",
    "ExecuteStatus",
    "RowStoreError",
    "CapacityExceededError",
    "FieldTooLongError",
    "InvalidFieldValueError",
    "InvalidRowIndexError",
]
