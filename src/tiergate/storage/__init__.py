"""Tiergate durable slot storage."""

from tiergate.storage.base import RoleSlot
from tiergate.storage.memory_slot import MemoryRoleSlot
from tiergate.storage.sqlite_slot import SQLiteRoleSlot

__all__ = ["MemoryRoleSlot", "RoleSlot", "SQLiteRoleSlot"]
