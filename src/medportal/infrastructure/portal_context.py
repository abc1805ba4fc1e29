"""Concrete portal factory."""

from __future__ import annotations

from collections.abc import Callable

from medportal.application.ports import CurrentActor, RowStore
from medportal.application.services import ColumnCapabilities


class PortalContext:
    """Gives queries and commands the row store and the live actor.

    ``actor`` is called on every access so commands always act as whoever
    the session resolver currently holds.
    """

    def __init__(
        self,
        row_store: RowStore,
        actor: Callable[[], CurrentActor] = CurrentActor.anonymous,
        capabilities: ColumnCapabilities | None = None,
    ):
        self._row_store = row_store
        self._actor = actor
        self._capabilities = capabilities or ColumnCapabilities()

    @property
    def current_actor(self) -> CurrentActor:
        return self._actor()

    def row_store(self) -> RowStore:
        return self._row_store

    def column_capabilities(self) -> ColumnCapabilities:
        return self._capabilities
