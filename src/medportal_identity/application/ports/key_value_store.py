"""Persisted key-value store port.

Mirrors browser local storage: synchronous string reads and writes shared
by every window of one origin, plus a "key changed" notification that is
delivered only to the *other* windows, never to the writer itself.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from medportal_identity.application.ports.subscription import Subscription


@dataclass(frozen=True)
class StorageEvent:
    """A key changed in another window. ``new_value`` is None on removal."""

    key: str
    old_value: str | None
    new_value: str | None


StorageListener = Callable[[StorageEvent], None]


class KeyValueStore(ABC):
    """Port interface for the persisted key-value store.

    Implementations raise ``TransientStorageError`` when the underlying
    storage is unavailable.
    """

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored value or None."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store a value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove a key. Removing a missing key is a no-op."""

    @abstractmethod
    def subscribe(self, listener: StorageListener) -> Subscription:
        """Receive changes written through other stores of the same origin."""
