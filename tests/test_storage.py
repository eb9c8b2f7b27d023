"""Tests for the observable key-value store."""

import logging

import pytest

from plato_converter.storage import (
    MemoryStore,
    ObservableStore,
    StorageEvent,
    StorageEventType,
)


@pytest.fixture
def store():
    return ObservableStore(MemoryStore())


@pytest.fixture
def events(store):
    received = []
    store.subscribe(received.append)
    return received


class TestMemoryStore:

    def test_get_missing(self):
        assert MemoryStore().get("nope") is None

    def test_initial_values_copied(self):
        initial = {"a": "1"}
        inner = MemoryStore(initial)
        inner.set("b", "2")
        assert initial == {"a": "1"}
        assert len(inner) == 2

    def test_remove_absent_key(self):
        inner = MemoryStore()
        inner.remove("nope")
        assert len(inner) == 0


class TestObservableStore:

    def test_set_forwards_and_publishes(self, store, events):
        store.set("draft", "Alice: hi")
        assert store.get("draft") == "Alice: hi"
        assert len(events) == 1
        event = events[0]
        assert event.type is StorageEventType.set
        assert (event.key, event.value, event.old_value) == ("draft", "Alice: hi", None)

    def test_set_captures_old_value(self, store, events):
        store.set("draft", "v1")
        store.set("draft", "v2")
        assert events[1].old_value == "v1"
        assert events[1].value == "v2"

    def test_remove_event(self, store, events):
        store.set("draft", "v1")
        store.remove("draft")
        event = events[-1]
        assert event.type is StorageEventType.remove
        assert event.key == "draft"
        assert event.value is None
        assert event.old_value == "v1"
        assert store.get("draft") is None

    def test_remove_absent_key_still_publishes(self, store, events):
        store.remove("ghost")
        assert events[0].type is StorageEventType.remove
        assert events[0].old_value is None

    def test_clear_event(self, store, events):
        store.set("a", "1")
        store.set("b", "2")
        store.clear()
        assert store.get("a") is None
        assert events[-1].type is StorageEventType.clear
        assert events[-1].to_dict().keys() == {"type", "timestamp"}

    def test_reads_do_not_publish(self, store, events):
        store.get("anything")
        assert events == []

    def test_timestamp_is_epoch_millis(self, store, events, monkeypatch):
        monkeypatch.setattr("plato_converter.storage.time.time", lambda: 1700000000.5)
        store.set("k", "v")
        assert events[0].timestamp == 1700000000500

    def test_wraps_existing_store(self):
        inner = MemoryStore({"k": "old"})
        received = []
        store = ObservableStore(inner)
        store.subscribe(received.append)
        store.set("k", "new")
        assert inner.get("k") == "new"
        assert received[0].old_value == "old"


class TestListeners:

    def test_subscription_order(self, store):
        calls = []
        store.subscribe(lambda event: calls.append("first"))
        store.subscribe(lambda event: calls.append("second"))
        store.set("k", "v")
        assert calls == ["first", "second"]

    def test_unsubscribe(self, store):
        received = []
        unsubscribe = store.subscribe(received.append)
        store.set("k", "1")
        unsubscribe()
        store.set("k", "2")
        assert len(received) == 1

    def test_unsubscribe_twice_is_harmless(self, store):
        unsubscribe = store.subscribe(lambda event: None)
        unsubscribe()
        unsubscribe()

    def test_failing_listener_does_not_block_others(self, store, caplog):
        received = []

        def broken(event):
            raise RuntimeError("boom")

        store.subscribe(broken)
        store.subscribe(received.append)
        with caplog.at_level(logging.ERROR):
            store.set("k", "v")
        assert len(received) == 1
        assert store.get("k") == "v"
        assert "Storage listener failed" in caplog.text


class TestStorageEvent:

    def test_set_payload(self):
        event = StorageEvent(
            type=StorageEventType.set, timestamp=5, key="k", value="v", old_value="o"
        )
        assert event.to_dict() == {
            "type": "set",
            "timestamp": 5,
            "key": "k",
            "value": "v",
            "oldValue": "o",
        }

    def test_remove_payload_keeps_null_value(self):
        event = StorageEvent(type=StorageEventType.remove, timestamp=5, key="k")
        assert event.to_dict()["value"] is None
