"""Tiergate event system."""

from tiergate.events.bus import EventBus
from tiergate.events.types import EventType

__all__ = ["EventBus", "EventType"]
