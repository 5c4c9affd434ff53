"""Domain services for business logic.

Services implement domain logic that doesn't naturally fit within a single
entity. The table coordinates pages and the row layout to map logical row
numbers onto page memory.
"""

from row_store.domain.services.table import Table

__all__ = [
    "Table",
]
