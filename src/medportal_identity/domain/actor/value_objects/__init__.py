"""Value objects for the actor domain."""

from medportal_identity.domain.actor.value_objects.account_email import AccountEmail
from medportal_identity.domain.actor.value_objects.actor_kind import (
    ActorKind,
    ActorSource,
)

__all__ = [
    "AccountEmail",
    "ActorKind",
    "ActorSource",
]
