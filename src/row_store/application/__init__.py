"""Application layer for the row store.

The application layer orchestrates domain logic to fulfill use cases.

Exports:
    Database:
        - Database: Owns one table and executes statements against it
    Executor:
        - Executor: Append-only insert and full-scan select
        - create_table: Factory for an empty in-memory table
"""

from row_store.application.database import Database
from row_store.application.executor import Executor, create_table

__all__ = [
    "Database",
    "Executor",
    "create_table",
]
