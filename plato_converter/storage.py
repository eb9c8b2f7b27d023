"""Key-value store wrapper that announces every change to listeners.

WHY: The transcript editor keeps drafts in a key-value store, and other
parts of the app (and browser extensions) need to react when a draft is
written, removed, or the store is wiped. Patching a shared global store
would hide that behaviour; an explicit wrapper makes it visible and
testable.

HOW: KeyValueStore is the capability set (get/set/remove/clear).
ObservableStore implements it by forwarding to an inner store and then
publishing a StorageEvent to every subscribed listener.

RULES:
- The conversion modules never use this store
- set/remove capture the old value *before* forwarding the call
- Events are published after the inner call has succeeded
- clear events carry no key, value, or oldValue
- Payload keys follow the event wire format: type, key, value, oldValue,
  timestamp
- remove events always carry value=None
- Listeners run synchronously, in subscription order; one failing
  listener is logged and does not stop delivery to the others
- timestamp is Unix epoch milliseconds
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class StorageEventType(str, Enum):
    set = "set"
    remove = "remove"
    clear = "clear"


@dataclass
class StorageEvent:
    """A change published by ObservableStore."""

    type: StorageEventType
    timestamp: int
    key: Optional[str] = None
    value: Optional[str] = None
    old_value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire payload; key/value fields are omitted for clear."""
        payload: Dict[str, Any] = {"type": self.type.value, "timestamp": self.timestamp}
        if self.type is not StorageEventType.clear:
            payload["key"] = self.key
            payload["value"] = self.value
            payload["oldValue"] = self.old_value
        return payload


StorageListener = Callable[[StorageEvent], None]


class KeyValueStore(ABC):
    """String key-value store capability set."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key``; absent keys are ignored."""

    @abstractmethod
    def clear(self) -> None:
        """Delete every key."""


class MemoryStore(KeyValueStore):
    """Dict-backed store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)


def _now_ms() -> int:
    return int(time.time() * 1000)


class ObservableStore(KeyValueStore):
    """Forwards to an inner store and publishes a StorageEvent per change."""

    def __init__(self, inner: KeyValueStore) -> None:
        self._inner = inner
        self._listeners: List[StorageListener] = []

    def subscribe(self, listener: StorageListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, event: StorageEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Storage listener failed for %s event", event.type.value)

    def get(self, key: str) -> Optional[str]:
        return self._inner.get(key)

    def set(self, key: str, value: str) -> None:
        old_value = self._inner.get(key)
        self._inner.set(key, value)
        self._publish(StorageEvent(
            type=StorageEventType.set,
            timestamp=_now_ms(),
            key=key,
            value=value,
            old_value=old_value,
        ))

    def remove(self, key: str) -> None:
        old_value = self._inner.get(key)
        self._inner.remove(key)
        self._publish(StorageEvent(
            type=StorageEventType.remove,
            timestamp=_now_ms(),
            key=key,
            old_value=old_value,
        ))

    def clear(self) -> None:
        self._inner.clear()
        self._publish(StorageEvent(type=StorageEventType.clear, timestamp=_now_ms()))
