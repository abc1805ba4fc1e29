"""Application layer ports (aka interfaces)."""

from medportal_identity.application.ports.auth_backend import (
    AuthBackend,
    AuthChangeEvent,
    AuthResponse,
    RemoteSession,
    RemoteUser,
    SessionChangeCallback,
)
from medportal_identity.application.ports.key_value_store import (
    KeyValueStore,
    StorageEvent,
    StorageListener,
)
from medportal_identity.application.ports.subscription import Subscription

__all__ = [
    "AuthBackend",
    "AuthChangeEvent",
    "AuthResponse",
    "KeyValueStore",
    "RemoteSession",
    "RemoteUser",
    "SessionChangeCallback",
    "StorageEvent",
    "StorageListener",
    "Subscription",
]
