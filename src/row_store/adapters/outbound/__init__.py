"""Outbound adapters for the row store.

Outbound adapters implement the storage ports the domain depends on.
"""

from row_store.adapters.outbound.memory_page_store import InMemoryPageStore

__all__ = ["InMemoryPageStore"]
