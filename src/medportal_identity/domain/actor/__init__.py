"""Actor domain: who the portal is currently acting as.

This domain handles:
- Actor value (anonymous, standard or facility admin)
- Override records persisted in the shared key-value store
- Canonical account emails built from portal usernames
"""

from medportal_identity.domain.actor.actor import Actor
from medportal_identity.domain.actor.exceptions import (
    InvalidActorError,
    InvalidEmailError,
)
from medportal_identity.domain.actor.override_record import (
    ADMIN_OVERRIDE_KEY,
    TEST_OVERRIDE_KEY,
    OverrideKind,
    OverrideRecord,
)
from medportal_identity.domain.actor.value_objects import (
    AccountEmail,
    ActorKind,
    ActorSource,
)

__all__ = [
    "ADMIN_OVERRIDE_KEY",
    "TEST_OVERRIDE_KEY",
    "AccountEmail",
    "Actor",
    "ActorKind",
    "ActorSource",
    "InvalidActorError",
    "InvalidEmailError",
    "OverrideKind",
    "OverrideRecord",
]
