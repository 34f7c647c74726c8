"""Abstract durable slot holding the current role identifier."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable

logger = logging.getLogger(__name__)

SlotWatcher = Callable[[str | None], None]


class RoleSlot(ABC):
    """A single durable string value shared between contexts.

    Watchers are told when the value changes through another context. A
    write never notifies the watchers registered by its own origin, the same
    way a browser storage event only fires in sibling tabs.
    """

    def __init__(self) -> None:
        self._watchers: list[tuple[SlotWatcher, object | None]] = []
        self._watch_lock = threading.Lock()

    @abstractmethod
    def read(self) -> str | None:
        """Return the stored value, or None if the slot is empty."""

    @abstractmethod
    def _store(self, value: str) -> None:
        """Persist a value."""

    @abstractmethod
    def clear(self) -> None:
        """Empty the slot without notifying watchers."""

    def close(self) -> None:
        """Release resources. The default slot holds none."""

    def poll(self) -> bool:
        """Check for changes made by other contexts. Returns True if watchers were notified."""
        return False

    def store(self, value: str) -> None:
        """Persist a value without notifying anyone."""
        self._store(value)

    def write(self, value: str, *, origin: object | None = None) -> None:
        """Persist a value, then notify watchers from other origins."""
        self.store(value)
        self.notify(value, origin=origin)

    def watch(self, watcher: SlotWatcher, *, owner: object | None = None) -> None:
        with self._watch_lock:
            if not any(w == watcher for w, _ in self._watchers):
                self._watchers.append((watcher, owner))

    def unwatch(self, watcher: SlotWatcher) -> None:
        with self._watch_lock:
            self._watchers = [(w, o) for w, o in self._watchers if w != watcher]

    def notify(self, value: str | None, *, origin: object | None = None) -> None:
        """Tell watchers registered by other origins that the slot changed."""
        with self._watch_lock:
            targets = [w for w, owner in self._watchers if origin is None or owner is not origin]
        for watcher in targets:
            try:
                watcher(value)
            except Exception:
                logger.exception("Error in slot watcher")
