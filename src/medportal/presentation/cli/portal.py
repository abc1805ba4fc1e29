"""Wiring of one portal window for the command line."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from medportal.infrastructure import PortalContext, PostgrestRowStore
from medportal.infrastructure.adapters.identity import IdentityAdapter
from medportal_config import Settings
from medportal_identity import SessionResolver
from medportal_identity.infrastructure.backend import GoTrueAuthBackend
from medportal_identity.infrastructure.storage import SqlKeyValueStore


@dataclass
class Portal:
    resolver: SessionResolver
    context: PortalContext
    store: SqlKeyValueStore | None = None


@asynccontextmanager
async def open_portal(settings: Settings) -> AsyncIterator[Portal]:
    """Build a started resolver and a records context from settings."""
    api_key = settings.baas_anon_key.get_secret_value()
    store = SqlKeyValueStore.from_url(settings.storage_url)
    auth_backend = GoTrueAuthBackend(
        settings.auth_url,
        api_key,
        timeout=settings.http_timeout,
        session_store=store,
    )
    row_store = PostgrestRowStore(
        settings.rest_url,
        api_key,
        timeout=settings.http_timeout,
        access_token=lambda: auth_backend.access_token,
    )
    resolver = SessionResolver.from_settings(settings, auth_backend, store)
    context = PortalContext(
        row_store,
        actor=lambda: IdentityAdapter.current_actor_of(resolver),
    )

    try:
        await resolver.start()
        yield Portal(resolver=resolver, context=context, store=store)
    finally:
        await resolver.close()
        await row_store.close()
        await auth_backend.close()
        store.dispose()
