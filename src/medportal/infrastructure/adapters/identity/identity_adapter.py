"""Bridge from the resolved identity actor to the records-side port.

Records code never imports medportal_identity; only this module and the
CLI wiring do.
"""

from medportal.application.ports.identity import CurrentActor
from medportal_identity import Actor, SessionResolver


class IdentityAdapter:
    """Translates resolver state into CurrentActor snapshots."""

    @staticmethod
    def to_current_actor(actor: Actor) -> CurrentActor:
        """Convert a resolved ``Actor`` to medportal's CurrentActor port."""
        if not actor.is_authenticated:
            return CurrentActor.anonymous()
        return CurrentActor(
            identifier=actor.identifier,
            user_id=actor.user_id,
            is_admin=actor.is_admin,
            facility_id=actor.facility_id,
            facility_name=actor.facility_name,
        )

    @staticmethod
    def current_actor_of(resolver: SessionResolver) -> CurrentActor:
        return IdentityAdapter.to_current_actor(resolver.actor)
