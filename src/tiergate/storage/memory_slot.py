"""In-memory role slot. Share one instance between broadcasters to emulate sibling contexts."""

from __future__ import annotations

import threading

from tiergate.storage.base import RoleSlot


class MemoryRoleSlot(RoleSlot):
    def __init__(self, initial: str | None = None) -> None:
        super().__init__()
        self._value = initial
        self._lock = threading.Lock()

    def read(self) -> str | None:
        with self._lock:
            return self._value

    def _store(self, value: str) -> None:
        with self._lock:
            self._value = value

    def clear(self) -> None:
        with self._lock:
            self._value = None
