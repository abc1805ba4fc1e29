"""Tests for the in-process key-value store."""

from unittest.mock import Mock

import pytest

from medportal_identity import StorageEvent, TransientStorageError
from medportal_identity.infrastructure.storage import InMemoryKeyValueStore, StorageArea


class TestInMemoryKeyValueStore:
    def setup_method(self):
        self.area = StorageArea()
        self.window_a = InMemoryKeyValueStore(self.area)
        self.window_b = InMemoryKeyValueStore(self.area)

    def test_writes_are_shared(self):
        self.window_a.set_item("k", "v")
        assert self.window_b.get_item("k") == "v"

    def test_remove(self):
        self.window_a.set_item("k", "v")
        self.window_b.remove_item("k")
        assert self.window_a.get_item("k") is None

    def test_events_skip_the_writer(self):
        listener_a, listener_b = Mock(), Mock()
        self.window_a.subscribe(listener_a)
        self.window_b.subscribe(listener_b)

        self.window_a.set_item("k", "v")

        listener_a.assert_not_called()
        listener_b.assert_called_once_with(StorageEvent(key="k", old_value=None, new_value="v"))

    def test_no_event_for_unchanged_value(self):
        listener = Mock()
        self.window_b.subscribe(listener)

        self.window_a.set_item("k", "v")
        self.window_a.set_item("k", "v")
        self.window_a.remove_item("missing")

        assert listener.call_count == 1

    def test_removal_event_has_no_new_value(self):
        self.window_a.set_item("k", "v")
        listener = Mock()
        self.window_b.subscribe(listener)

        self.window_a.remove_item("k")

        listener.assert_called_once_with(StorageEvent(key="k", old_value="v", new_value=None))

    def test_unavailable_area_raises(self):
        self.area.available = False
        with pytest.raises(TransientStorageError):
            self.window_a.get_item("k")
        with pytest.raises(TransientStorageError):
            self.window_a.set_item("k", "v")

    def test_unsubscribed_listener_not_called(self):
        listener = Mock()
        subscription = self.window_b.subscribe(listener)
        subscription.unsubscribe()

        self.window_a.set_item("k", "v")

        listener.assert_not_called()
