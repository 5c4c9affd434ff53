"""Adapters layer - concrete implementations of port interfaces.

Adapters provide the actual implementations:
- Inbound adapters: Handle incoming requests (REPL, REST)
- Outbound adapters: Implement storage dependencies (page memory)
"""

from row_store.adapters.outbound import InMemoryPageStore

__all__ = [
    # Outbound adapters
    "InMemoryPageStore",
]
