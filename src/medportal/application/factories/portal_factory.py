"""Portal factory protocol for the application layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from medportal.application.ports import CurrentActor, RowStore
    from medportal.application.services import ColumnCapabilities


class PortalFactory(Protocol):
    """Protocol giving queries and commands their collaborators."""

    @property
    def current_actor(self) -> CurrentActor:
        """The actor resolved at the moment of the call."""
        ...

    def row_store(self) -> RowStore:
        """Get the row store."""
        ...

    def column_capabilities(self) -> ColumnCapabilities:
        """Get the shared per-table column cache."""
        ...
