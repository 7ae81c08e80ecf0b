"""Backing logic: catalog and user-signal stores."""

from .catalog_store import InMemoryCatalogStore, JsonCatalogStore

__all__ = [
    "InMemoryCatalogStore",
    "JsonCatalogStore",
]
