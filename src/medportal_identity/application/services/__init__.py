"""Application services for session management."""

from medportal_identity.application.services.credential_matchers import (
    MOHAMMED_6_ADMIN,
    SANIAT_RMEL_ADMIN,
    TEST_USER,
    CredentialMatcher,
    FixedCredentialMatcher,
    default_credential_matchers,
)
from medportal_identity.application.services.session_resolver import (
    ActorListener,
    Navigator,
    SessionResolver,
    actor_from_remote_user,
)

__all__ = [
    "MOHAMMED_6_ADMIN",
    "SANIAT_RMEL_ADMIN",
    "TEST_USER",
    "ActorListener",
    "CredentialMatcher",
    "FixedCredentialMatcher",
    "Navigator",
    "SessionResolver",
    "actor_from_remote_user",
    "default_credential_matchers",
]
