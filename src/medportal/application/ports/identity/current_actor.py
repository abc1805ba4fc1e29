"""CurrentActor - the records side's view of who the portal acts as.

This is a port that defines what the records side needs from the identity
system. The actual value is produced by an adapter that translates from
medportal_identity.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CurrentActor:
    """Immutable snapshot of the resolved actor.

    This is medportal's own type - it has no dependency on medportal_identity.
    """

    identifier: str | None = None
    user_id: str | None = None
    is_admin: bool = False
    facility_id: str | None = None
    facility_name: str | None = None

    @classmethod
    def anonymous(cls) -> "CurrentActor":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return self.identifier is not None

    @property
    def display_label(self) -> str:
        """Name shown on records the actor creates (the part before '@')."""
        if not self.identifier:
            return "Anonymous"
        return self.identifier.split("@", 1)[0]

    def __str__(self) -> str:
        return f"CurrentActor({self.identifier or 'anonymous'})"
