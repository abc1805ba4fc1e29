"""Identity schemas and data structures.

These are simple data classes used for handing identity outcomes back to
the presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass

from medportal_identity.domain.actor import Actor
from medportal_identity.exceptions import AuthError


@dataclass(frozen=True)
class AuthResult:
    """Result of a sign-in or sign-up attempt.

    Attributes
    ----------
    actor
        The actor adopted on success, None on failure
    error
        The backend's error on failure, None on success
    """

    actor: Actor | None = None
    error: AuthError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.actor is not None

    @property
    def message(self) -> str | None:
        """Message suitable for rendering next to the form."""
        return self.error.message if self.error else None

    @classmethod
    def success(cls, actor: Actor) -> AuthResult:
        return cls(actor=actor)

    @classmethod
    def failure(cls, error: AuthError) -> AuthResult:
        return cls(error=error)
