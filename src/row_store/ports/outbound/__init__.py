"""Outbound ports - storage the table depends on."""

from row_store.ports.outbound.page_store import PageStore

__all__ = ["PageStore"]
