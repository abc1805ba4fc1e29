"""Fixed-credential matchers tried before the hosted backend.

Each matcher is a predicate over ``(identifier, secret)`` paired with the
override record it produces. The session resolver tries them in order and
only calls the backend when none matches.
"""

from __future__ import annotations

import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass

from medportal_identity.domain.actor import OverrideKind, OverrideRecord

SANIAT_RMEL_ADMIN = OverrideRecord(
    kind=OverrideKind.ADMIN,
    user_id="admin-saniat-rmel-id",
    email="admin@saniatrmel.hospital",
    facility_id="saniat-rmel",
    facility_name="Saniat Rmel Hospital",
)

MOHAMMED_6_ADMIN = OverrideRecord(
    kind=OverrideKind.ADMIN,
    user_id="admin-mohammed6-id",
    email="admin@mohammed6.hospital",
    facility_id="mohammed-6",
    facility_name="Mohammed 6 Hospital",
)

TEST_USER = OverrideRecord(
    kind=OverrideKind.TEST,
    user_id="a1b2c3d4-e5f6-4789-a012-b3c4d5e6f789",
    email="test@saniatrmel.hospital",
)


class CredentialMatcher(ABC):
    """Strategy deciding whether a credential maps to a local override."""

    @abstractmethod
    def match(self, identifier: str, secret: str) -> OverrideRecord | None:
        """Return the override for this credential, or None to pass."""


@dataclass(frozen=True)
class FixedCredentialMatcher(CredentialMatcher):
    """Matches one hard-wired username/password pair."""

    identifier: str
    secret: str
    record: OverrideRecord

    def match(self, identifier: str, secret: str) -> OverrideRecord | None:
        if identifier != self.identifier:
            return None
        if not secrets.compare_digest(secret.encode(), self.secret.encode()):
            return None
        return self.record


def default_credential_matchers() -> list[CredentialMatcher]:
    """Two facility admins followed by the shared test account."""
    return [
        FixedCredentialMatcher("admin1", "admin123", SANIAT_RMEL_ADMIN),
        FixedCredentialMatcher("admin2", "admin123", MOHAMMED_6_ADMIN),
        FixedCredentialMatcher("test", "test123", TEST_USER),
    ]
