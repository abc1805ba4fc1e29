"""Actor checks shared by all write commands."""

from medportal.application.ports import CurrentActor
from medportal.domain.shared import AdminRequiredError, NotAuthenticatedError


def require_authenticated(actor: CurrentActor) -> CurrentActor:
    if not actor.is_authenticated:
        raise NotAuthenticatedError()
    return actor


def require_admin(actor: CurrentActor) -> CurrentActor:
    require_authenticated(actor)
    if not actor.is_admin:
        raise AdminRequiredError()
    return actor
