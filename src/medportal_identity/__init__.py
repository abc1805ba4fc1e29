"""medportal identity - who the portal is acting as.

This package handles all identity concerns of the portal:
- Actor resolution (anonymous, standard user, facility admin)
- Override records persisted in the shared key-value store
- Sign-in, sign-up and sign-out against the hosted auth backend

The records side (queues, blood bank, doctors) only sees the resolved
actor, never the backend session.
"""

from medportal_identity.application.ports import (
    AuthBackend,
    AuthChangeEvent,
    AuthResponse,
    KeyValueStore,
    RemoteSession,
    RemoteUser,
    StorageEvent,
    Subscription,
)
from medportal_identity.application.services import (
    CredentialMatcher,
    FixedCredentialMatcher,
    SessionResolver,
    default_credential_matchers,
)
from medportal_identity.domain.actor import (
    AccountEmail,
    Actor,
    ActorKind,
    ActorSource,
    InvalidActorError,
    InvalidEmailError,
    OverrideKind,
    OverrideRecord,
)
from medportal_identity.exceptions import (
    AccountAlreadyExistsError,
    AuthenticationError,
    AuthError,
    BackendUnavailableError,
    RegistrationError,
    TransientStorageError,
    WeakPasswordError,
)
from medportal_identity.schemas import AuthResult

__all__ = [
    # Domain - Actor
    "AccountEmail",
    "Actor",
    "ActorKind",
    "ActorSource",
    "InvalidActorError",
    "InvalidEmailError",
    "OverrideKind",
    "OverrideRecord",
    # Exceptions
    "AccountAlreadyExistsError",
    "AuthError",
    "AuthenticationError",
    "BackendUnavailableError",
    "RegistrationError",
    "TransientStorageError",
    "WeakPasswordError",
    # Ports
    "AuthBackend",
    "AuthChangeEvent",
    "AuthResponse",
    "KeyValueStore",
    "RemoteSession",
    "RemoteUser",
    "StorageEvent",
    "Subscription",
    # Schemas
    "AuthResult",
    # Application Services
    "CredentialMatcher",
    "FixedCredentialMatcher",
    "SessionResolver",
    "default_credential_matchers",
]
