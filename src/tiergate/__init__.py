"""Tiergate — role-based authorization for multi-party lending workflows."""

from tiergate.auth.classifier import classify
from tiergate.auth.permissions import check, check_role
from tiergate.auth.registry import display_name, lookup
from tiergate.auth.scope import can_see
from tiergate.core.broadcaster import RoleBroadcaster, RoleChange
from tiergate.errors import InvalidRoleError, RegistryError, TiergateError

__version__ = "0.1.0"

__all__ = [
    "InvalidRoleError",
    "RegistryError",
    "RoleBroadcaster",
    "RoleChange",
    "TiergateError",
    "can_see",
    "check",
    "check_role",
    "classify",
    "display_name",
    "lookup",
]
