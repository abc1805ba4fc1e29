"""Key-value store adapters."""

from medportal_identity.infrastructure.storage.memory_store import (
    InMemoryKeyValueStore,
    StorageArea,
)
from medportal_identity.infrastructure.storage.sqlalchemy import (
    SqlKeyValueStore,
    StorageEventRelay,
)

__all__ = [
    "InMemoryKeyValueStore",
    "SqlKeyValueStore",
    "StorageArea",
    "StorageEventRelay",
]
