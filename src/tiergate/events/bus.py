"""Synchronous pub/sub event bus for tiergate."""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from tiergate.events.types import EventType

logger = logging.getLogger(__name__)

Listener = Callable[[EventType, dict[str, Any]], None]


class EventBus:
    """Simple in-process pub/sub bus keyed by topic.

    Registering the same listener twice on a topic keeps one registration.
    """

    def __init__(self) -> None:
        self._listeners: dict[EventType, list[Listener]] = defaultdict(list)
        self._global_listeners: list[Listener] = []
        self._lock = threading.Lock()

    def on(self, event_type: EventType, listener: Listener) -> None:
        """Register a listener for a specific event type."""
        with self._lock:
            if listener not in self._listeners[event_type]:
                self._listeners[event_type].append(listener)

    def on_all(self, listener: Listener) -> None:
        """Register a listener for all events."""
        with self._lock:
            if listener not in self._global_listeners:
                self._global_listeners.append(listener)

    def off(self, event_type: EventType, listener: Listener) -> None:
        """Remove a listener."""
        with self._lock:
            if listener in self._listeners[event_type]:
                self._listeners[event_type].remove(listener)

    def emit(self, event_type: EventType, data: dict[str, Any] | None = None) -> None:
        """Emit an event to all registered listeners.

        A failing listener is logged and does not stop delivery to the rest.
        """
        data = data or {}
        with self._lock:
            listeners = list(self._listeners.get(event_type, [])) + list(self._global_listeners)

        for listener in listeners:
            try:
                listener(event_type, data)
            except Exception:
                logger.exception("Error in event listener for %s", event_type)

    def listener_count(self, event_type: EventType) -> int:
        with self._lock:
            return len(self._listeners.get(event_type, []))

    def clear(self) -> None:
        """Remove all listeners."""
        with self._lock:
            self._listeners.clear()
            self._global_listeners.clear()
