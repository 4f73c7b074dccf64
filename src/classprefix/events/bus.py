"""Synchronous event bus for run lifecycle events."""

import threading
from typing import Any, Callable


class EventBus:
    """Publish-subscribe bus.

    Listeners subscribe to one event type or to every event. Events are
    dispatched synchronously in registration order; emission is serialized so
    listeners never run concurrently.
    """

    def __init__(self) -> None:
        self._listeners: dict[type, list[Callable]] = {}
        self._global_listeners: list[Callable] = []
        self._lock = threading.Lock()

    def subscribe(self, event_type: type, callback: Callable) -> None:
        """Register a callback for a specific event type."""
        self._listeners.setdefault(event_type, []).append(callback)

    def on_all(self, callback: Callable) -> None:
        """Register a callback that receives every event."""
        self._global_listeners.append(callback)

    def emit(self, event: Any) -> None:
        with self._lock:
            for cb in self._global_listeners:
                cb(event)
            for cb in self._listeners.get(type(event), []):
                cb(event)
