"""Storage layer for smartspend application."""

from smartspend.storage.base import BlobStore
from smartspend.storage.factories import create_sqlite_store
from smartspend.storage.memory import InMemoryBlobStore
from smartspend.storage.persistence import PersistenceAdapter

__all__ = ["BlobStore", "InMemoryBlobStore", "PersistenceAdapter", "create_sqlite_store"]
