"""In-process key-value store.

A ``StorageArea`` plays the role of one origin's local storage; every
``InMemoryKeyValueStore`` attached to it plays one window. Writes are
visible to all windows immediately, and storage events go to every window
except the writer.
"""

import logging

from medportal_identity.application.ports import (
    KeyValueStore,
    StorageEvent,
    StorageListener,
    Subscription,
)
from medportal_identity.exceptions import TransientStorageError

logger = logging.getLogger(__name__)


class StorageArea:
    """Shared data of one origin."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._windows: list["InMemoryKeyValueStore"] = []
        self.available = True

    def attach(self, window: "InMemoryKeyValueStore") -> None:
        self._windows.append(window)

    def get(self, key: str) -> str | None:
        self._check_available()
        return self._data.get(key)

    def put(self, writer: "InMemoryKeyValueStore", key: str, value: str | None) -> None:
        self._check_available()
        old_value = self._data.get(key)
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = value
        if old_value == value:
            return
        event = StorageEvent(key=key, old_value=old_value, new_value=value)
        for window in list(self._windows):
            if window is not writer:
                window.dispatch(event)

    def keys(self) -> list[str]:
        return sorted(self._data)

    def _check_available(self) -> None:
        if not self.available:
            raise TransientStorageError


class InMemoryKeyValueStore(KeyValueStore):
    """One window's view of a ``StorageArea``."""

    def __init__(self, area: StorageArea | None = None):
        self._area = area or StorageArea()
        self._listeners: list[StorageListener] = []
        self._area.attach(self)

    @property
    def area(self) -> StorageArea:
        return self._area

    def get_item(self, key: str) -> str | None:
        return self._area.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._area.put(self, key, value)

    def remove_item(self, key: str) -> None:
        self._area.put(self, key, None)

    def subscribe(self, listener: StorageListener) -> Subscription:
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Subscription(_remove)

    def dispatch(self, event: StorageEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Storage listener failed for key %s", event.key)
