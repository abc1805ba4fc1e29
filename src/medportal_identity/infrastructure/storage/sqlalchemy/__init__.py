"""SQLAlchemy-backed persisted storage."""

from medportal_identity.infrastructure.storage.sqlalchemy.models import (
    StorageBase,
    StorageItemModel,
)
from medportal_identity.infrastructure.storage.sqlalchemy.relay import (
    StorageEventRelay,
)
from medportal_identity.infrastructure.storage.sqlalchemy.store import (
    SqlKeyValueStore,
)

__all__ = [
    "SqlKeyValueStore",
    "StorageBase",
    "StorageEventRelay",
    "StorageItemModel",
]
