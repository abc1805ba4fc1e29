"""Actor - the resolved identity the whole portal acts as."""

from __future__ import annotations

from dataclasses import dataclass

from medportal_identity.domain.actor.exceptions import InvalidActorError
from medportal_identity.domain.actor.value_objects import ActorKind, ActorSource


@dataclass(frozen=True)
class Actor:
    """
    Immutable view of the current user.

    ``identifier`` is the account email and is stable per login. Admin
    actors always manage exactly one facility, so ``facility_id`` and
    ``facility_name`` are required for them and forbidden for everyone
    else.
    """

    kind: ActorKind = ActorKind.ANONYMOUS
    identifier: str | None = None
    user_id: str | None = None
    facility_id: str | None = None
    facility_name: str | None = None
    source: ActorSource = ActorSource.NONE

    def __post_init__(self) -> None:
        if self.kind == ActorKind.ANONYMOUS:
            if self.identifier or self.user_id or self.facility_id:
                msg = "Anonymous actor cannot carry an identity"
                raise InvalidActorError(msg)
            return

        if not self.identifier:
            msg = f"{self.kind.value} actor requires an identifier"
            raise InvalidActorError(msg)

        has_facility = bool(self.facility_id) and bool(self.facility_name)
        if self.kind == ActorKind.ADMIN and not has_facility:
            msg = "Admin actor requires facility_id and facility_name"
            raise InvalidActorError(msg)
        if self.kind == ActorKind.STANDARD and (self.facility_id or self.facility_name):
            msg = "Only admin actors manage a facility"
            raise InvalidActorError(msg)

    @classmethod
    def anonymous(cls) -> Actor:
        return cls()

    @classmethod
    def standard(
        cls,
        identifier: str,
        user_id: str | None = None,
        source: ActorSource = ActorSource.REMOTE,
    ) -> Actor:
        return cls(
            kind=ActorKind.STANDARD,
            identifier=identifier,
            user_id=user_id,
            source=source,
        )

    @classmethod
    def admin(  # noqa: PLR0913
        cls,
        identifier: str,
        facility_id: str,
        facility_name: str,
        user_id: str | None = None,
        source: ActorSource = ActorSource.ADMIN_OVERRIDE,
    ) -> Actor:
        return cls(
            kind=ActorKind.ADMIN,
            identifier=identifier,
            user_id=user_id,
            facility_id=facility_id,
            facility_name=facility_name,
            source=source,
        )

    @property
    def display_label(self) -> str:
        """Local part of the email-shaped identifier."""
        if not self.identifier:
            return ""
        return self.identifier.split("@", 1)[0]

    @property
    def is_authenticated(self) -> bool:
        return self.kind != ActorKind.ANONYMOUS

    @property
    def is_admin(self) -> bool:
        return self.kind == ActorKind.ADMIN

    def __str__(self) -> str:
        if not self.is_authenticated:
            return "Actor(anonymous)"
        return f"Actor({self.identifier})"

    def __repr__(self) -> str:
        return (
            f"Actor(kind={self.kind.value}, identifier={self.identifier!r}, "
            f"facility_id={self.facility_id!r}, source={self.source.value})"
        )
