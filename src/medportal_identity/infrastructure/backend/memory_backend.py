"""In-process auth backend.

Behaves like the hosted auth API (same error messages, same events) but
keeps accounts in memory. Several backends can share one
``AccountDirectory`` to model several windows signed in against the same
project.
"""

import logging
import secrets
from uuid import uuid4

from medportal_identity.application.ports import (
    AuthBackend,
    AuthChangeEvent,
    AuthResponse,
    RemoteSession,
    RemoteUser,
    SessionChangeCallback,
    Subscription,
)
from medportal_identity.domain.actor import AccountEmail, InvalidEmailError
from medportal_identity.exceptions import (
    AccountAlreadyExistsError,
    AuthenticationError,
    AuthError,
    RegistrationError,
    WeakPasswordError,
)
from medportal_identity.services import PasswordHashingService

logger = logging.getLogger(__name__)


class AccountDirectory:
    """Registered accounts keyed by normalized email."""

    def __init__(self, password_service: PasswordHashingService | None = None):
        self._password_service = password_service or PasswordHashingService()
        self._accounts: dict[str, tuple[RemoteUser, str]] = {}

    def register(self, email: str, password: str) -> RemoteUser:
        normalized = AccountEmail(email).value
        if normalized in self._accounts:
            raise AccountAlreadyExistsError
        password_hash = self._password_service.hash(password)
        user = RemoteUser(id=str(uuid4()), email=normalized)
        self._accounts[normalized] = (user, password_hash)
        logger.info("Registered account %s", normalized)
        return user

    def verify(self, email: str, password: str) -> RemoteUser | None:
        entry = self._accounts.get(email.lower().strip())
        if entry is None:
            return None
        user, password_hash = entry
        if not self._password_service.verify(password, password_hash):
            return None
        return user

    def __len__(self) -> int:
        return len(self._accounts)


class InMemoryAuthBackend(AuthBackend):
    """Auth backend holding one session for one window."""

    def __init__(self, directory: AccountDirectory | None = None):
        self._directory = directory or AccountDirectory()
        self._session: RemoteSession | None = None
        self._callbacks: list[SessionChangeCallback] = []

    @property
    def directory(self) -> AccountDirectory:
        return self._directory

    async def get_current_session(self) -> RemoteSession | None:
        return self._session

    def on_session_change(self, callback: SessionChangeCallback) -> Subscription:
        self._callbacks.append(callback)

        def _remove() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return Subscription(_remove)

    async def sign_up_with_credential(self, email: str, password: str) -> AuthResponse:
        try:
            user = self._directory.register(email, password)
        except (AccountAlreadyExistsError, WeakPasswordError) as e:
            return AuthResponse.failed(e)
        except InvalidEmailError as e:
            return AuthResponse.failed(RegistrationError(str(e)))

        session = self._open_session(user)
        return AuthResponse(user=user, session=session)

    async def sign_in_with_credential(self, email: str, password: str) -> AuthResponse:
        user = self._directory.verify(email, password)
        if user is None:
            return AuthResponse.failed(AuthenticationError())
        session = self._open_session(user)
        return AuthResponse(user=user, session=session)

    async def sign_out(self) -> AuthError | None:
        if self._session is None:
            return None
        self._session = None
        self._emit(AuthChangeEvent.SIGNED_OUT, None)
        return None

    def _open_session(self, user: RemoteUser) -> RemoteSession:
        self._session = RemoteSession(
            access_token=secrets.token_urlsafe(32),
            refresh_token=secrets.token_urlsafe(32),
            user=user,
        )
        self._emit(AuthChangeEvent.SIGNED_IN, self._session)
        return self._session

    def _emit(self, event: AuthChangeEvent, session: RemoteSession | None) -> None:
        for callback in list(self._callbacks):
            try:
                callback(event, session)
            except Exception:
                logger.exception("Session change callback failed")
