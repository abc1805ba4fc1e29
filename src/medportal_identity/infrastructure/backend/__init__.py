"""Auth backend adapters."""

from medportal_identity.infrastructure.backend.gotrue_backend import GoTrueAuthBackend
from medportal_identity.infrastructure.backend.memory_backend import (
    AccountDirectory,
    InMemoryAuthBackend,
)

__all__ = [
    "AccountDirectory",
    "GoTrueAuthBackend",
    "InMemoryAuthBackend",
]
