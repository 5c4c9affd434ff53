"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: APIs offered to clients (e.g., ExecutionEngine)
- Outbound ports: Dependencies of the domain (e.g., PageStore)

Adapters implement these ports with concrete functionality.
"""

from row_store.ports.inbound import (
    CapacityExceededError,
    ExecuteStatus,
    ExecutionEngine,
    ExecutionResult,
    FieldTooLongError,
    InvalidFieldValueError,
    InvalidRowIndexError,
    RowStoreError,
)
from row_store.ports.outbound import PageStore

__all__ = [
    # Inbound ports
    "ExecutionEngine",
    "ExecutionResult",
    "ExecuteStatus",
    "RowStoreError",
    "CapacityExceededError",
    "FieldTooLongError",
    "InvalidFieldValueError",
    "InvalidRowIndexError",
    # Outbound ports
    "PageStore",
]
