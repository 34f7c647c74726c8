"""Coarse organization category for a role, used to branch presentation."""

from __future__ import annotations

import logging

from tiergate.models.role import OrgCategory, Role

logger = logging.getLogger(__name__)

_FAMILY_PREFIXES = (
    ("borrower", OrgCategory.BORROWER),
    ("vendor", OrgCategory.VENDOR),
    ("lender", OrgCategory.LENDER),
    ("broker", OrgCategory.BROKER),
)
_STAFF_MARKERS = ("admin", "officer", "support")

_SYSTEM_ROLES = {Role.SYSTEM_ADMIN, Role.EVA_ADMIN, Role.COMPLIANCE_OFFICER, Role.SUPPORT_REP}


def _family_of(role: Role) -> OrgCategory:
    if role in _SYSTEM_ROLES:
        return OrgCategory.ADMIN
    family = role.value.split("-", 1)[0]
    return OrgCategory(family)


KNOWN_CATEGORIES: dict[Role, OrgCategory] = {role: _family_of(role) for role in Role}


def _guess(value: str) -> OrgCategory:
    """Heuristic for identifiers outside the registry."""
    for prefix, category in _FAMILY_PREFIXES:
        if value.startswith(prefix):
            return category
    if any(marker in value for marker in _STAFF_MARKERS):
        return OrgCategory.ADMIN
    return OrgCategory.UNKNOWN


def classify(role: Role | str | None) -> OrgCategory:
    """Map a role to its organization category. Never raises."""
    if not isinstance(role, str) or not role:
        return OrgCategory.UNKNOWN
    try:
        return KNOWN_CATEGORIES[Role(role)]
    except ValueError:
        category = _guess(role)
        logger.debug("Classified unregistered role %r as %s", role, category)
        return category
