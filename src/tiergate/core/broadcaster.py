"""Current-role state container with persistence and change notification."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from tiergate.auth.registry import ROLE_POLICIES, is_role, parse_role
from tiergate.errors import InvalidRoleError
from tiergate.events.bus import EventBus
from tiergate.events.types import EventType
from tiergate.models.policy import RolePolicy
from tiergate.models.role import Role
from tiergate.storage.base import RoleSlot

logger = logging.getLogger(__name__)

RoleListener = Callable[[Role | None, Role], None]


@dataclass(frozen=True)
class RoleChange:
    """Outcome of set_current()."""

    ok: bool
    old_role: Role | None = None
    new_role: Role | None = None
    changed: bool = False
    error: InvalidRoleError | None = None


class RoleBroadcaster:
    """Owns the current role for one context.

    The current role lives in memory and in a durable slot. Both are updated
    together under a lock. Observers get ``(old_role, new_role)`` at most once
    per change, whether it came from this context or a sibling one. The
    payload may already be stale by the time it arrives; observers that act on
    it should re-read ``get_current()``.
    """

    def __init__(
        self,
        slot: RoleSlot,
        *,
        bus: EventBus | None = None,
        default_role: Role = Role.BORROWER_OWNER,
    ) -> None:
        self.slot = slot
        self.bus = bus or EventBus()
        self.default_role = default_role
        self._current: Role | None = None
        self._lock = threading.RLock()
        self._subscriptions: dict[RoleListener, Callable[[EventType, dict[str, Any]], None]] = {}
        self.slot.watch(self._on_slot_changed, owner=self)

    @property
    def ready(self) -> bool:
        return self._current is not None

    def get_current(self) -> Role:
        """Return the current role, loading it from the durable slot on first use."""
        with self._lock:
            if self._current is None:
                self._current = self._load()
            return self._current

    def current_policy(self) -> RolePolicy:
        return ROLE_POLICIES[self.get_current()]

    def set_current(self, role: Role | str) -> RoleChange:
        """Switch the current role. Invalid roles are rejected and nothing changes."""
        try:
            new_role = parse_role(role)
        except InvalidRoleError as e:
            logger.warning("Rejected role change to %r", role)
            self.bus.emit(EventType.ROLE_REJECTED, {"value": role})
            return RoleChange(ok=False, old_role=self._current, error=e)

        # Siblings are notified only after the lock is released; their
        # handlers take their own locks.
        with self._lock:
            old_role = self.get_current()
            rewritten = False
            if new_role == old_role:
                if self.slot.read() != new_role.value:
                    self.slot.store(new_role.value)
                    rewritten = True
            else:
                # Persist first: a failed store leaves memory untouched.
                self.slot.store(new_role.value)
                self._current = new_role

        if new_role == old_role:
            if rewritten:
                self.slot.notify(new_role.value, origin=self)
            return RoleChange(ok=True, old_role=old_role, new_role=new_role)

        self.slot.notify(new_role.value, origin=self)
        logger.info("Role changed: %s -> %s", old_role, new_role)
        self._emit(old_role, new_role)
        return RoleChange(ok=True, old_role=old_role, new_role=new_role, changed=True)

    def subscribe(self, listener: RoleListener) -> Callable[[], None]:
        """Register an observer. Returns a callable that unsubscribes it."""

        def _unsubscribe() -> None:
            self.unsubscribe(listener)

        with self._lock:
            if listener in self._subscriptions:
                return _unsubscribe

            def _deliver(_event: EventType, data: dict[str, Any]) -> None:
                listener(data["old_role"], data["new_role"])

            self._subscriptions[listener] = _deliver
        self.bus.on(EventType.ROLE_CHANGED, _deliver)
        return _unsubscribe

    def unsubscribe(self, listener: RoleListener) -> None:
        with self._lock:
            deliver = self._subscriptions.pop(listener, None)
        if deliver is not None:
            self.bus.off(EventType.ROLE_CHANGED, deliver)

    def sync(self) -> bool:
        """Reconcile with the durable slot. Returns True if the current role changed."""
        with self._lock:
            before = self._current
        self.slot.poll()
        self._apply_external()
        return self._current != before

    def close(self) -> None:
        self.slot.unwatch(self._on_slot_changed)
        with self._lock:
            listeners = list(self._subscriptions)
        for listener in listeners:
            self.unsubscribe(listener)

    def _load(self) -> Role:
        stored = self.slot.read()
        if stored is None:
            return self.default_role
        if not is_role(stored):
            logger.warning(
                "Durable slot holds unknown role %r; falling back to %s",
                stored,
                self.default_role,
            )
            return self.default_role
        return Role(stored)

    def _on_slot_changed(self, _value: str | None) -> None:
        # The notified value may already be superseded by a later store.
        self._apply_external()

    def _apply_external(self) -> bool:
        with self._lock:
            value = self.slot.read()
            if value is None:
                return False
            if not is_role(value):
                logger.warning("Ignoring unknown role %r written by another context", value)
                return False

            new_role = Role(value)
            old_role = self._current
            if new_role == old_role:
                return False
            self._current = new_role

        logger.info("Role changed by another context: %s -> %s", old_role, new_role)
        self._emit(old_role, new_role)
        return True

    def _emit(self, old_role: Role | None, new_role: Role) -> None:
        self.bus.emit(EventType.ROLE_CHANGED, {"old_role": old_role, "new_role": new_role})
