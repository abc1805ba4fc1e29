"""Auth backend port.

Defines what the session resolver needs from the hosted backend's
authentication API. The resolver never looks inside a session beyond the
embedded user.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from medportal_identity.application.ports.subscription import Subscription
from medportal_identity.exceptions import AuthError


class AuthChangeEvent(str, Enum):
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"


@dataclass(frozen=True)
class RemoteUser:
    """User record embedded in a backend session."""

    id: str
    email: str | None = None
    user_metadata: dict[str, Any] = field(default_factory=dict)
    app_metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> RemoteUser:
        return cls(
            id=str(payload["id"]),
            email=payload.get("email"),
            user_metadata=dict(payload.get("user_metadata") or {}),
            app_metadata=dict(payload.get("app_metadata") or {}),
        )


@dataclass(frozen=True)
class RemoteSession:
    """Opaque backend session."""

    access_token: str
    user: RemoteUser
    refresh_token: str | None = None
    expires_at: datetime | None = None


@dataclass(frozen=True)
class AuthResponse:
    """Outcome of a registration or credential check.

    Exactly one of ``user`` and ``error`` is set.
    """

    user: RemoteUser | None = None
    session: RemoteSession | None = None
    error: AuthError | None = None

    @classmethod
    def failed(cls, error: AuthError) -> AuthResponse:
        return cls(error=error)


SessionChangeCallback = Callable[[AuthChangeEvent, RemoteSession | None], None]


class AuthBackend(ABC):
    """Port interface for the hosted authentication API."""

    @abstractmethod
    async def get_current_session(self) -> RemoteSession | None:
        """Return the currently stored session, if any."""

    @abstractmethod
    def on_session_change(self, callback: SessionChangeCallback) -> Subscription:
        """Register a callback fired on sign-in, refresh and sign-out."""

    @abstractmethod
    async def sign_up_with_credential(self, email: str, password: str) -> AuthResponse:
        """Register a new email/password account."""

    @abstractmethod
    async def sign_in_with_credential(self, email: str, password: str) -> AuthResponse:
        """Verify an email/password credential and open a session."""

    @abstractmethod
    async def sign_out(self) -> AuthError | None:
        """Close the current session. Returns the error instead of raising."""
