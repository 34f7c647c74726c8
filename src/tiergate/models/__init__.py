"""Tiergate data models."""

from tiergate.models.policy import (
    AccessContext,
    Actor,
    Conditions,
    DataItem,
    MonetaryLimits,
    PermissionRule,
    RolePolicy,
)
from tiergate.models.role import Action, DataAccessScope, OrgCategory, Role

__all__ = [
    "AccessContext",
    "Action",
    "Actor",
    "Conditions",
    "DataAccessScope",
    "DataItem",
    "MonetaryLimits",
    "OrgCategory",
    "PermissionRule",
    "Role",
    "RolePolicy",
]
