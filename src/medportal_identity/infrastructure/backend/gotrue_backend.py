"""HTTP client for a Supabase-compatible auth API (GoTrue).

The session lives in memory for the lifetime of the client and, when a
key-value store is given, is also persisted there so a later client picks
it up. Session change events are raised locally whenever this client signs
in, refreshes or signs out.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx

from medportal_identity.application.ports import (
    AuthBackend,
    AuthChangeEvent,
    AuthResponse,
    KeyValueStore,
    RemoteSession,
    RemoteUser,
    SessionChangeCallback,
    Subscription,
)
from medportal_identity.exceptions import (
    AuthenticationError,
    AuthError,
    BackendUnavailableError,
    RegistrationError,
    TransientStorageError,
)

logger = logging.getLogger(__name__)

# Refresh a little before the access token actually runs out
REFRESH_MARGIN = timedelta(seconds=30)

# Storage key of the persisted session, as the hosted client names it
SESSION_STORAGE_KEY = "sb-auth-token"


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or f"HTTP {response.status_code}"
    if not isinstance(body, dict):
        return f"HTTP {response.status_code}"
    for field in ("msg", "error_description", "message", "error"):
        value = body.get(field)
        if isinstance(value, str) and value:
            return value
    return f"HTTP {response.status_code}"


def _parse_session(payload: dict[str, Any]) -> RemoteSession | None:
    if not payload.get("access_token") or not payload.get("user"):
        return None
    expires_at = None
    if payload.get("expires_at"):
        expires_at = datetime.fromtimestamp(int(payload["expires_at"]), tz=timezone.utc)
    elif payload.get("expires_in"):
        expires_at = datetime.now(tz=timezone.utc) + timedelta(
            seconds=int(payload["expires_in"])
        )
    return RemoteSession(
        access_token=payload["access_token"],
        refresh_token=payload.get("refresh_token"),
        user=RemoteUser.from_payload(payload["user"]),
        expires_at=expires_at,
    )


def _dump_session(session: RemoteSession) -> str:
    payload: dict[str, Any] = {
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
        "user": {
            "id": session.user.id,
            "email": session.user.email,
            "user_metadata": session.user.user_metadata,
            "app_metadata": session.user.app_metadata,
        },
    }
    if session.expires_at is not None:
        payload["expires_at"] = int(session.expires_at.timestamp())
    return json.dumps(payload)


class GoTrueAuthBackend(AuthBackend):
    """Auth backend talking to ``<baas_url>/auth/v1``."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        session_store: KeyValueStore | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport
        self._session_store = session_store
        self._client: httpx.AsyncClient | None = None
        self._session: RemoteSession | None = None
        self._restored = session_store is None
        self._callbacks: list[SessionChangeCallback] = []

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
                headers={
                    "apikey": self._api_key,
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def access_token(self) -> str | None:
        session = self._ensure_restored()
        return session.access_token if session else None

    # -------------------------------------------------------------------------
    # AuthBackend
    # -------------------------------------------------------------------------

    async def get_current_session(self) -> RemoteSession | None:
        session = self._ensure_restored()
        if session is None or session.expires_at is None:
            return session
        if session.expires_at - REFRESH_MARGIN > datetime.now(tz=timezone.utc):
            return session
        return await self._refresh(session)

    def on_session_change(self, callback: SessionChangeCallback) -> Subscription:
        self._callbacks.append(callback)

        def _remove() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return Subscription(_remove)

    async def sign_up_with_credential(self, email: str, password: str) -> AuthResponse:
        try:
            response = await self._post("/signup", {"email": email, "password": password})
        except BackendUnavailableError as e:
            return AuthResponse.failed(e)

        if response.is_error:
            return AuthResponse.failed(RegistrationError(_error_message(response)))

        payload = response.json()
        session = _parse_session(payload)
        if session is not None:
            self._set_session(AuthChangeEvent.SIGNED_IN, session)
            return AuthResponse(user=session.user, session=session)

        # Email confirmation pending: the user exists but has no session yet
        user_payload = payload.get("user") or payload
        if not user_payload.get("id"):
            return AuthResponse.failed(RegistrationError("Unexpected sign-up response"))
        return AuthResponse(user=RemoteUser.from_payload(user_payload))

    async def sign_in_with_credential(self, email: str, password: str) -> AuthResponse:
        try:
            response = await self._post(
                "/token",
                {"email": email, "password": password},
                params={"grant_type": "password"},
            )
        except BackendUnavailableError as e:
            return AuthResponse.failed(e)

        if response.is_error:
            return AuthResponse.failed(AuthenticationError(_error_message(response)))

        session = _parse_session(response.json())
        if session is None:
            return AuthResponse.failed(AuthenticationError("Unexpected sign-in response"))
        self._set_session(AuthChangeEvent.SIGNED_IN, session)
        return AuthResponse(user=session.user, session=session)

    async def sign_out(self) -> AuthError | None:
        session = self._ensure_restored()
        if session is None:
            return None

        # Local session is dropped even when the server call fails
        self._set_session(AuthChangeEvent.SIGNED_OUT, None)
        try:
            client = await self._get_client()
            response = await client.post(
                "/logout",
                headers={"Authorization": f"Bearer {session.access_token}"},
            )
        except httpx.HTTPError as e:
            logger.warning("Auth service sign-out failed: %s", e)
            return BackendUnavailableError(str(e) or BackendUnavailableError().message)

        if response.is_error and response.status_code != httpx.codes.UNAUTHORIZED:
            return AuthError(_error_message(response))
        return None

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _refresh(self, session: RemoteSession) -> RemoteSession | None:
        if not session.refresh_token:
            self._set_session(AuthChangeEvent.SIGNED_OUT, None)
            return None
        try:
            response = await self._post(
                "/token",
                {"refresh_token": session.refresh_token},
                params={"grant_type": "refresh_token"},
            )
        except BackendUnavailableError:
            # Keep the stale session; the next call retries
            return session

        refreshed = None if response.is_error else _parse_session(response.json())
        if refreshed is None:
            logger.info("Session refresh rejected: %s", _error_message(response))
            self._set_session(AuthChangeEvent.SIGNED_OUT, None)
            return None
        self._set_session(AuthChangeEvent.TOKEN_REFRESHED, refreshed)
        return refreshed

    async def _post(
        self,
        path: str,
        body: dict[str, Any],
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        client = await self._get_client()
        try:
            return await client.post(path, json=body, params=params)
        except httpx.ConnectError as e:
            logger.warning("Auth service connection failed: %s", e)
            raise BackendUnavailableError from e
        except httpx.TimeoutException as e:
            logger.warning("Auth service timeout: %s", e)
            raise BackendUnavailableError from e
        except httpx.HTTPError as e:
            logger.warning("Auth service request failed (%s): %s", type(e).__name__, e)
            raise BackendUnavailableError from e

    def _set_session(self, event: AuthChangeEvent, session: RemoteSession | None) -> None:
        self._session = session
        self._restored = True
        self._save_session(session)
        for callback in list(self._callbacks):
            try:
                callback(event, session)
            except Exception:
                logger.exception("Session change callback failed")

    def _ensure_restored(self) -> RemoteSession | None:
        if not self._restored:
            self._restored = True
            self._session = self._load_session()
        return self._session

    def _load_session(self) -> RemoteSession | None:
        if self._session_store is None:
            return None
        try:
            raw = self._session_store.get_item(SESSION_STORAGE_KEY)
        except TransientStorageError as e:
            logger.debug("Persisted session unreadable: %s", e)
            return None
        if not raw:
            return None
        try:
            payload = json.loads(raw)
            return _parse_session(payload) if isinstance(payload, dict) else None
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Ignoring malformed persisted session: %s", e)
            return None

    def _save_session(self, session: RemoteSession | None) -> None:
        if self._session_store is None:
            return
        try:
            if session is None:
                self._session_store.remove_item(SESSION_STORAGE_KEY)
            else:
                self._session_store.set_item(SESSION_STORAGE_KEY, _dump_session(session))
        except TransientStorageError as e:
            logger.warning("Could not persist session: %s", e)
