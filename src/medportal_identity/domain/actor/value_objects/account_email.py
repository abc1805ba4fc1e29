"""Account email value object.

Portal users sign in with a bare username; the hosted backend only knows
email/password accounts. The username is turned into an email-shaped
credential under the portal's account domain.
"""

import re
from dataclasses import dataclass

from medportal_identity.domain.actor.exceptions import InvalidEmailError

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


@dataclass(frozen=True)
class AccountEmail:
    """Value object representing a validated, normalized account email."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            msg = "Email cannot be empty"
            raise InvalidEmailError(msg)

        normalized = self.value.lower().strip()

        if not EMAIL_PATTERN.match(normalized):
            msg = f"Invalid email format: {self.value}"
            raise InvalidEmailError(msg)

        object.__setattr__(self, "value", normalized)

    @classmethod
    def from_username(cls, username: str, domain: str) -> "AccountEmail":
        """Build the canonical credential ``username@domain``."""
        local_part = (username or "").strip()
        if not local_part:
            msg = "Username cannot be empty"
            raise InvalidEmailError(msg)
        if "@" in local_part:
            msg = f"Username must not contain '@': {username}"
            raise InvalidEmailError(msg)
        return cls(f"{local_part}@{domain}")

    @property
    def local_part(self) -> str:
        return self.value.split("@", 1)[0]

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"AccountEmail('{self.value}')"
