"""Event type constants for tiergate."""

from enum import StrEnum


class EventType(StrEnum):
    ROLE_CHANGED = "role.changed"
    ROLE_REJECTED = "role.rejected"
