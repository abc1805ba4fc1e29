"""
Pytest configuration for medportal_identity tests.

Provides in-process collaborators: one ``StorageArea`` per test plays the
origin's local storage, and accounts are hashed with a cheap bcrypt work
factor.
"""

import pytest

from medportal_identity import SessionResolver
from medportal_identity.infrastructure.backend import AccountDirectory, InMemoryAuthBackend
from medportal_identity.infrastructure.storage import InMemoryKeyValueStore, StorageArea
from medportal_identity.services import PasswordHashingService

EMAIL_DOMAIN = "saniatrmel.hospital"


@pytest.fixture
def password_service() -> PasswordHashingService:
    """bcrypt with the lowest work factor."""
    return PasswordHashingService(rounds=4)


@pytest.fixture
def directory(password_service) -> AccountDirectory:
    """Accounts shared by every backend in a test."""
    return AccountDirectory(password_service)


@pytest.fixture
def storage_area() -> StorageArea:
    return StorageArea()


@pytest.fixture
def make_resolver(directory, storage_area):
    """Build a resolver for a new window of the same origin."""

    def _make(backend: InMemoryAuthBackend | None = None, **kwargs) -> SessionResolver:
        return SessionResolver(
            auth_backend=backend or InMemoryAuthBackend(directory),
            store=InMemoryKeyValueStore(storage_area),
            email_domain=EMAIL_DOMAIN,
            **kwargs,
        )

    return _make
