"""Tests for the event bus."""

from __future__ import annotations

from typing import Any

from tiergate.events.bus import EventBus
from tiergate.events.types import EventType


def test_emit_to_listener():
    bus = EventBus()
    received: list[tuple[EventType, dict[str, Any]]] = []
    bus.on(EventType.ROLE_CHANGED, lambda e, d: received.append((e, d)))

    bus.emit(EventType.ROLE_CHANGED, {"new_role": "lender"})
    assert received == [(EventType.ROLE_CHANGED, {"new_role": "lender"})]


def test_duplicate_registration_delivers_once():
    bus = EventBus()
    calls: list[dict[str, Any]] = []

    def listener(_event: EventType, data: dict[str, Any]) -> None:
        calls.append(data)

    bus.on(EventType.ROLE_CHANGED, listener)
    bus.on(EventType.ROLE_CHANGED, listener)
    bus.emit(EventType.ROLE_CHANGED)
    assert len(calls) == 1
    assert bus.listener_count(EventType.ROLE_CHANGED) == 1


def test_topics_are_separate():
    bus = EventBus()
    calls: list[EventType] = []
    bus.on(EventType.ROLE_REJECTED, lambda e, d: calls.append(e))
    bus.emit(EventType.ROLE_CHANGED)
    assert calls == []


def test_on_all_and_off():
    bus = EventBus()
    seen: list[EventType] = []

    def listener(event: EventType, _data: dict[str, Any]) -> None:
        seen.append(event)

    bus.on_all(listener)
    bus.emit(EventType.ROLE_CHANGED)
    bus.emit(EventType.ROLE_REJECTED)
    assert seen == [EventType.ROLE_CHANGED, EventType.ROLE_REJECTED]

    bus.on(EventType.ROLE_REJECTED, listener)
    bus.off(EventType.ROLE_REJECTED, listener)
    assert bus.listener_count(EventType.ROLE_REJECTED) == 0


def test_failing_listener_does_not_block_others():
    bus = EventBus()
    calls: list[str] = []

    def broken(_event: EventType, _data: dict[str, Any]) -> None:
        raise RuntimeError("boom")

    bus.on(EventType.ROLE_CHANGED, broken)
    bus.on(EventType.ROLE_CHANGED, lambda e, d: calls.append("ok"))
    bus.emit(EventType.ROLE_CHANGED)
    assert calls == ["ok"]


def test_clear():
    bus = EventBus()
    bus.on(EventType.ROLE_CHANGED, lambda e, d: None)
    bus.clear()
    assert bus.listener_count(EventType.ROLE_CHANGED) == 0
