"""Session resolver - the single source of truth for the current actor.

Three identity sources are reconciled into one ``Actor``:

- override records in the persisted key-value store (admin or test),
- the hosted backend's session,
- storage events raised when another window writes an override key.

A stored override always wins over the backend session. Sign-in and
sign-out notify local subscribers directly; other windows learn about
the change through the store's own change notification.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from pydantic import ValidationError

from medportal_identity.application.ports import (
    AuthBackend,
    AuthChangeEvent,
    KeyValueStore,
    RemoteSession,
    RemoteUser,
    StorageEvent,
    Subscription,
)
from medportal_identity.application.services.credential_matchers import (
    CredentialMatcher,
    default_credential_matchers,
)
from medportal_identity.domain.actor import (
    AccountEmail,
    Actor,
    ActorSource,
    InvalidEmailError,
    OverrideKind,
    OverrideRecord,
)
from medportal_identity.exceptions import (
    AuthenticationError,
    AuthError,
    BackendUnavailableError,
    RegistrationError,
    TransientStorageError,
)
from medportal_identity.schemas import AuthResult

if TYPE_CHECKING:
    from medportal_config import Settings

logger = logging.getLogger(__name__)

ActorListener = Callable[[Actor], None]
Navigator = Callable[[str], None]


def actor_from_remote_user(user: RemoteUser | None) -> Actor:
    """Translate a backend user into an actor.

    Backend accounts are standard users unless their metadata marks them
    as the admin of a named facility.
    """
    if user is None or not user.email:
        return Actor.anonymous()

    role = user.app_metadata.get("role") or user.user_metadata.get("role")
    facility_id = user.user_metadata.get("hospital")
    if role == "admin" and facility_id:
        facility_name = user.user_metadata.get("hospitalName") or facility_id
        return Actor.admin(
            identifier=user.email,
            facility_id=str(facility_id),
            facility_name=str(facility_name),
            user_id=user.id,
            source=ActorSource.REMOTE,
        )
    return Actor.standard(identifier=user.email, user_id=user.id)


def _actor_from_session(session: RemoteSession | None) -> Actor:
    return actor_from_remote_user(session.user if session else None)


class SessionResolver:
    """Owns the current actor for one portal window."""

    def __init__(  # noqa: PLR0913
        self,
        auth_backend: AuthBackend,
        store: KeyValueStore,
        email_domain: str,
        matchers: Sequence[CredentialMatcher] | None = None,
        navigator: Navigator | None = None,
        sign_in_route: str = "/login",
    ):
        self._backend = auth_backend
        self._store = store
        self._email_domain = email_domain
        self._matchers = (
            list(matchers) if matchers is not None else default_credential_matchers()
        )
        self._navigator = navigator
        self._sign_in_route = sign_in_route

        self._actor = Actor.anonymous()
        self._remote_actor = Actor.anonymous()
        self._initialized = False
        self._listeners: list[ActorListener] = []
        self._auth_subscription: Subscription | None = None
        self._storage_subscription: Subscription | None = None
        self._pending_reapply: asyncio.Handle | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        auth_backend: AuthBackend,
        store: KeyValueStore,
        navigator: Navigator | None = None,
    ) -> SessionResolver:
        matchers = default_credential_matchers() if settings.fixed_logins_enabled else []
        return cls(
            auth_backend=auth_backend,
            store=store,
            email_domain=settings.account_email_domain,
            matchers=matchers,
            navigator=navigator,
            sign_in_route=settings.sign_in_route,
        )

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def actor(self) -> Actor:
        return self._actor

    @property
    def initialized(self) -> bool:
        """False until the first resolution finished (route guards wait on it)."""
        return self._initialized

    def subscribe(self, listener: ActorListener) -> Subscription:
        """Call ``listener`` with the new actor whenever it changes."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Subscription(_remove)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start(self) -> Actor:
        """Resolve the initial actor and start listening for changes."""
        if self._auth_subscription is not None:
            return self._actor

        self._storage_subscription = self._store.subscribe(self._on_storage_event)
        self._auth_subscription = self._backend.on_session_change(
            self._on_session_change
        )

        admin = self._read_override(OverrideKind.ADMIN)
        if admin is not None:
            self._set_actor(admin.to_actor())
            self._mark_initialized()
            return self._actor

        test = self._read_override(OverrideKind.TEST)
        if test is not None:
            self._set_actor(test.to_actor())

        try:
            session = await self._backend.get_current_session()
        except Exception as e:
            logger.warning("Could not read backend session: %s", e)
            session = None

        self._remote_actor = _actor_from_session(session)
        if test is None:
            self._set_actor(self._remote_actor)

        self._mark_initialized()
        return self._actor

    async def close(self) -> None:
        """Stop listening. The actor value is kept."""
        if self._auth_subscription is not None:
            self._auth_subscription.unsubscribe()
            self._auth_subscription = None
        if self._storage_subscription is not None:
            self._storage_subscription.unsubscribe()
            self._storage_subscription = None
        if self._pending_reapply is not None:
            self._pending_reapply.cancel()
            self._pending_reapply = None
        self._listeners.clear()

    async def __aenter__(self) -> SessionResolver:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def sign_up(self, identifier: str, secret: str) -> AuthResult:
        """Register a backend account for ``identifier`` and adopt it.

        Stored overrides are left alone. While one is present the new account
        only holds until the next ``refresh()`` or storage event, which switch
        back to the override actor.
        """
        try:
            email = AccountEmail.from_username(identifier, self._email_domain)
        except InvalidEmailError as e:
            return AuthResult.failure(RegistrationError(str(e)))

        try:
            response = await self._backend.sign_up_with_credential(email.value, secret)
        except Exception as e:
            logger.warning("Sign-up request failed (%s): %s", type(e).__name__, e)
            return AuthResult.failure(RegistrationError(_error_message(e)))

        if response.error is not None or response.user is None:
            message = response.error.message if response.error else "Sign up failed"
            logger.info("Sign-up rejected for %s: %s", email, message)
            return AuthResult.failure(RegistrationError(message))

        actor = actor_from_remote_user(response.user)
        self._remote_actor = actor
        self._set_actor(actor)
        logger.info("Registered %s", actor.identifier)
        return AuthResult.success(actor)

    async def sign_in(self, identifier: str, secret: str) -> AuthResult:
        """Sign in through a fixed credential or the hosted backend."""
        for matcher in self._matchers:
            record = matcher.match(identifier, secret)
            if record is None:
                continue
            actor = record.to_actor()
            self._persist_override(record)
            self._set_actor(actor)
            logger.info("Signed in %s through %s override", actor, record.kind.value)
            return AuthResult.success(actor)

        try:
            email = AccountEmail.from_username(identifier, self._email_domain)
        except InvalidEmailError as e:
            return AuthResult.failure(AuthenticationError(str(e)))

        try:
            response = await self._backend.sign_in_with_credential(email.value, secret)
        except Exception as e:
            logger.warning("Sign-in request failed (%s): %s", type(e).__name__, e)
            return AuthResult.failure(AuthenticationError(_error_message(e)))

        if response.error is not None or response.user is None:
            message = (
                response.error.message if response.error else "Invalid login credentials"
            )
            logger.info("Sign-in rejected for %s: %s", email, message)
            return AuthResult.failure(AuthenticationError(message))

        # A backend login replaces whatever override this window had.
        self._clear_overrides()
        actor = actor_from_remote_user(response.user)
        self._remote_actor = actor
        self._set_actor(actor)
        logger.info("Signed in %s", actor)
        return AuthResult.success(actor)

    async def sign_out(self) -> None:
        """Drop every identity source and go back to the sign-in screen."""
        self._clear_overrides()
        self._remote_actor = Actor.anonymous()
        self._set_actor(Actor.anonymous())

        try:
            error = await self._backend.sign_out()
            if error is not None:
                logger.warning("Backend sign-out failed: %s", error.message)
        except Exception as e:
            logger.warning("Backend sign-out failed (%s): %s", type(e).__name__, e)

        if self._navigator is not None:
            self._navigator(self._sign_in_route)

    def refresh(self) -> Actor:
        """Re-read both override keys and apply them."""
        self._apply_stored_overrides()
        return self._actor

    # -------------------------------------------------------------------------
    # Change propagation
    # -------------------------------------------------------------------------

    def _on_session_change(
        self,
        event: AuthChangeEvent,
        session: RemoteSession | None,
    ) -> None:
        self._remote_actor = _actor_from_session(session)
        if self._override_present():
            logger.debug("Ignoring %s: override active", event.value)
            return
        self._set_actor(self._remote_actor)
        self._mark_initialized()

    def _on_storage_event(self, event: StorageEvent) -> None:
        kind = OverrideKind.from_storage_key(event.key)
        if kind is None:
            return

        if event.new_value is not None:
            record = self._parse_override(kind, event.new_value)
            if record is not None:
                logger.debug("Adopting %s override from another window", kind.value)
                self._set_actor(record.to_actor())
                return

        self._schedule_reapply()

    def _schedule_reapply(self) -> None:
        # Switching overrides removes one key and writes the other in the same
        # turn; the revert waits until both events have been delivered.
        if self._pending_reapply is not None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._apply_stored_overrides()
            return
        self._pending_reapply = loop.call_soon(self._reapply)

    def _reapply(self) -> None:
        self._pending_reapply = None
        if self._storage_subscription is not None:
            self._apply_stored_overrides()

    def _apply_stored_overrides(self) -> None:
        for kind in (OverrideKind.ADMIN, OverrideKind.TEST):
            record = self._read_override(kind)
            if record is not None:
                self._set_actor(record.to_actor())
                return

        # Only an override-derived actor is reverted; a backend actor stays.
        if self._actor.source.is_override:
            self._set_actor(self._remote_actor)

    # -------------------------------------------------------------------------
    # Store access (fails open)
    # -------------------------------------------------------------------------

    def _read_override(self, kind: OverrideKind) -> OverrideRecord | None:
        try:
            raw = self._store.get_item(kind.storage_key)
        except TransientStorageError as e:
            logger.debug("Override %s unreadable, treating as absent: %s", kind.value, e)
            return None
        if raw is None:
            return None
        return self._parse_override(kind, raw)

    def _parse_override(self, kind: OverrideKind, raw: str) -> OverrideRecord | None:
        try:
            record = OverrideRecord.from_json(raw)
        except ValidationError as e:
            logger.warning("Ignoring malformed %s override: %s", kind.value, e)
            return None
        if record.kind != kind:
            logger.warning(
                "Ignoring %s override stored under %s key",
                record.kind.value,
                kind.value,
            )
            return None
        return record

    def _override_present(self) -> bool:
        return any(
            self._read_override(kind) is not None
            for kind in (OverrideKind.ADMIN, OverrideKind.TEST)
        )

    def _persist_override(self, record: OverrideRecord) -> None:
        other = OverrideKind.TEST if record.kind == OverrideKind.ADMIN else OverrideKind.ADMIN
        try:
            self._store.remove_item(other.storage_key)
            self._store.set_item(record.storage_key, record.to_json())
        except TransientStorageError as e:
            logger.warning("Could not persist %s override: %s", record.kind.value, e)

    def _clear_overrides(self) -> None:
        for kind in OverrideKind:
            try:
                self._store.remove_item(kind.storage_key)
            except TransientStorageError as e:
                logger.warning("Could not clear %s override: %s", kind.value, e)

    # -------------------------------------------------------------------------
    # Notification
    # -------------------------------------------------------------------------

    def _set_actor(self, actor: Actor) -> None:
        if actor == self._actor:
            return
        self._actor = actor
        for listener in list(self._listeners):
            try:
                listener(actor)
            except Exception:
                logger.exception("Actor listener failed")

    def _mark_initialized(self) -> None:
        self._initialized = True


def _error_message(error: Exception) -> str:
    if isinstance(error, AuthError):
        return error.message
    return BackendUnavailableError().message
