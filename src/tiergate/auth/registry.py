"""Role registry: the one policy record for every role in the closed set."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from tiergate.errors import InvalidRoleError, RegistryError
from tiergate.models.policy import (
    WILDCARD,
    Conditions,
    MonetaryLimits,
    PermissionRule,
    RolePolicy,
)
from tiergate.models.role import ALL_ACTIONS, UNRESTRICTED_ROLES, Action, DataAccessScope, Role

_MAX_TEAM_MANAGER_TIER = 3

C, R, U, D, X = Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE, Action.EXECUTE
CRUD = (C, R, U, D)


def _rule(
    resource: str,
    *actions: Action,
    ownership: bool | None = None,
    status: list[str] | None = None,
    monetary_limit: float | None = None,
) -> PermissionRule:
    conditions = Conditions(
        ownership=ownership,
        status=frozenset(status) if status is not None else None,
        monetary_limit=monetary_limit,
    )
    return PermissionRule(
        resource=resource,
        actions=frozenset(actions),
        conditions=None if conditions.is_empty() else conditions,
    )


def _policy(
    role: Role,
    tier: int,
    scope: DataAccessScope,
    *rules: PermissionRule,
    manages_team: bool = False,
    limit: float | None = None,
) -> RolePolicy:
    limits = None
    if limit is not None:
        limits = MonetaryLimits(max_transaction_amount=limit, requires_approval_above=limit)
    return RolePolicy(
        role=role,
        tier_level=tier,
        can_manage_team=manages_team,
        monetary_limits=limits,
        data_access_scope=scope,
        permissions=rules,
        unrestricted=role in UNRESTRICTED_ROLES,
    )


# Read-only audit coverage for compliance; new resources must be added here explicitly.
AUDITED_RESOURCES = (
    "loan_application",
    "documents",
    "financial_documents",
    "team_management",
    "banking_integration",
    "loan_timeline",
    "asset_listing",
    "asset_inventory",
    "vendor_profile",
    "transaction",
    "sales_team",
    "lending_policies",
    "portfolio",
    "lender_network",
    "commission_structure",
    "broker_team",
    "loan_pipeline",
    "user_profile",
    "support_tickets",
)

ALL, TEAM, ASSIGNED, OWN = (
    DataAccessScope.ALL,
    DataAccessScope.TEAM,
    DataAccessScope.ASSIGNED,
    DataAccessScope.OWN,
)

_POLICIES: tuple[RolePolicy, ...] = (
    # Borrower family
    _policy(
        Role.BORROWER, 6, OWN,
        _rule("loan_application", C, R, U, ownership=True, status=["draft", "in_review"]),
        _rule("documents", C, R, D, ownership=True),
    ),
    _policy(
        Role.BORROWER_OWNER, 1, ALL,
        _rule("loan_application", *ALL_ACTIONS),
        _rule("team_management", *CRUD),
        _rule("financial_documents", *CRUD),
        _rule("banking_integration", X),
        manages_team=True,
    ),
    _policy(
        Role.BORROWER_CFO, 2, ALL,
        _rule("loan_application", C, R, U, monetary_limit=5_000_000),
        _rule("financial_documents", C, R, U),
        limit=5_000_000,
    ),
    _policy(
        Role.BORROWER_CONTROLLER, 3, TEAM,
        _rule("loan_application", C, R, U, monetary_limit=1_000_000, status=["draft"]),
        limit=1_000_000,
    ),
    _policy(
        Role.BORROWER_ACCOUNTING, 4, ASSIGNED,
        _rule("documents", C, R, ownership=False),
    ),
    _policy(
        Role.BORROWER_OPERATIONS, 5, OWN,
        _rule("loan_application", R, ownership=False),
    ),
    _policy(Role.BORROWER_ADMIN, 6, OWN, _rule("loan_timeline", R)),
    # Vendor family
    _policy(
        Role.VENDOR, 6, OWN,
        _rule("asset_listing", R, ownership=True),
        _rule("transaction", R, ownership=True),
    ),
    _policy(
        Role.VENDOR_OWNER, 1, ALL,
        _rule("asset_listing", *CRUD),
        _rule("vendor_profile", C, R, U),
        _rule("transaction", R, X),
        _rule("team_management", *CRUD),
        manages_team=True,
    ),
    _policy(
        Role.VENDOR_SALES_DIRECTOR, 2, ALL,
        _rule("asset_listing", *CRUD),
        _rule("sales_team", R, U),
        manages_team=True,
    ),
    _policy(
        Role.VENDOR_SALES_MANAGER, 3, TEAM,
        _rule("asset_listing", C, R, U, ownership=False),
        manages_team=True,
    ),
    _policy(
        Role.VENDOR_SENIOR_SALES, 4, ASSIGNED,
        _rule("asset_listing", C, R, U, ownership=True),
    ),
    _policy(
        Role.VENDOR_JUNIOR_SALES, 5, ASSIGNED,
        _rule("asset_listing", R, U, ownership=True),
    ),
    _policy(Role.VENDOR_SUPPORT, 6, OWN, _rule("asset_inventory", R, U)),
    # Lender family
    _policy(
        Role.LENDER, 6, ASSIGNED,
        _rule("loan_application", R, status=["submitted", "in_review"]),
    ),
    _policy(
        Role.LENDER_CCO, 1, ALL,
        _rule("loan_application", R, U, X),
        _rule("lending_policies", *CRUD),
        _rule("portfolio", R, X),
        _rule("team_management", *CRUD),
        manages_team=True,
    ),
    _policy(
        Role.LENDER_SENIOR_UNDERWRITER, 2, ALL,
        _rule("loan_application", R, U, X, monetary_limit=10_000_000),
        manages_team=True,
        limit=10_000_000,
    ),
    _policy(
        Role.LENDER_UNDERWRITER, 3, ASSIGNED,
        _rule("loan_application", R, U, monetary_limit=2_000_000),
        limit=2_000_000,
    ),
    _policy(
        Role.LENDER_PROCESSOR, 4, ASSIGNED,
        _rule("loan_application", R, U, status=["processing"]),
    ),
    _policy(
        Role.LENDER_CSR, 5, ASSIGNED,
        _rule("loan_application", R, status=["active"]),
    ),
    _policy(Role.LENDER_ADMIN, 6, OWN, _rule("documents", C, R)),
    # Broker family
    _policy(
        Role.BROKER, 6, OWN,
        _rule("loan_application", C, R, ownership=True),
    ),
    _policy(
        Role.BROKER_PRINCIPAL, 1, ALL,
        _rule("loan_application", *CRUD),
        _rule("lender_network", R, X),
        _rule("commission_structure", R, U),
        _rule("team_management", *CRUD),
        manages_team=True,
    ),
    _policy(
        Role.BROKER_MANAGING, 2, ALL,
        _rule("loan_application", C, R, U),
        _rule("broker_team", R, U),
        manages_team=True,
    ),
    _policy(
        Role.BROKER_SENIOR_OFFICER, 3, OWN,
        _rule("loan_application", C, R, U, ownership=True),
    ),
    _policy(
        Role.BROKER_OFFICER, 4, ASSIGNED,
        _rule("loan_application", C, R, ownership=True, status=["draft"]),
    ),
    _policy(
        Role.BROKER_PROCESSOR, 5, ASSIGNED,
        _rule("loan_application", R, U, ownership=False),
    ),
    _policy(Role.BROKER_ADMIN, 6, OWN, _rule("loan_pipeline", R)),
    # Platform staff
    _policy(Role.SYSTEM_ADMIN, 0, ALL, _rule("*", *ALL_ACTIONS), manages_team=True),
    _policy(Role.EVA_ADMIN, 0, ALL, _rule("*", *ALL_ACTIONS), manages_team=True),
    _policy(
        Role.COMPLIANCE_OFFICER, 1, ALL,
        _rule("compliance_reports", C, R, X),
        *(_rule(resource, R) for resource in AUDITED_RESOURCES),
    ),
    _policy(
        Role.SUPPORT_REP, 5, ASSIGNED,
        _rule("user_profile", R, U, ownership=False),
        _rule("support_tickets", C, R, U),
    ),
)

_DISPLAY_NAMES: dict[Role, str] = {
    Role.BORROWER: "Borrower",
    Role.BORROWER_OWNER: "Borrower - Owner/CEO",
    Role.BORROWER_CFO: "Borrower - CFO",
    Role.BORROWER_CONTROLLER: "Borrower - Controller",
    Role.BORROWER_ACCOUNTING: "Borrower - Accounting Staff",
    Role.BORROWER_OPERATIONS: "Borrower - Operations Manager",
    Role.BORROWER_ADMIN: "Borrower - Admin Assistant",
    Role.VENDOR: "Vendor",
    Role.VENDOR_OWNER: "Vendor - Owner/President",
    Role.VENDOR_SALES_DIRECTOR: "Vendor - Sales Director",
    Role.VENDOR_SALES_MANAGER: "Vendor - Sales Manager",
    Role.VENDOR_SENIOR_SALES: "Vendor - Senior Sales Rep",
    Role.VENDOR_JUNIOR_SALES: "Vendor - Junior Sales Rep",
    Role.VENDOR_SUPPORT: "Vendor - Sales Support",
    Role.LENDER: "Lender",
    Role.LENDER_CCO: "Lender - Chief Credit Officer",
    Role.LENDER_SENIOR_UNDERWRITER: "Lender - Senior Underwriter",
    Role.LENDER_UNDERWRITER: "Lender - Underwriter",
    Role.LENDER_PROCESSOR: "Lender - Loan Processor",
    Role.LENDER_CSR: "Lender - Customer Service Rep",
    Role.LENDER_ADMIN: "Lender - Admin Support",
    Role.BROKER: "Broker",
    Role.BROKER_PRINCIPAL: "Broker - Principal/Owner",
    Role.BROKER_MANAGING: "Broker - Managing Broker",
    Role.BROKER_SENIOR_OFFICER: "Broker - Senior Loan Officer",
    Role.BROKER_OFFICER: "Broker - Loan Officer",
    Role.BROKER_PROCESSOR: "Broker - Loan Processor",
    Role.BROKER_ADMIN: "Broker - Admin Assistant",
    Role.SYSTEM_ADMIN: "System Administrator",
    Role.EVA_ADMIN: "EVA Administrator",
    Role.COMPLIANCE_OFFICER: "Compliance Officer",
    Role.SUPPORT_REP: "Customer Support Representative",
}


def verify_registry(policies: Mapping[Role, RolePolicy]) -> None:
    """Check registry invariants. Raises RegistryError on the first violation."""
    missing = [role for role in Role if role not in policies]
    if missing:
        raise RegistryError(f"Roles without a policy: {', '.join(missing)}")

    for role, policy in policies.items():
        if policy.role != role:
            raise RegistryError(f"Policy for {policy.role} registered under {role}")
        if policy.can_manage_team and policy.tier_level > _MAX_TEAM_MANAGER_TIER:
            raise RegistryError(
                f"{role} manages a team at tier {policy.tier_level} "
                f"(max {_MAX_TEAM_MANAGER_TIER})"
            )
        if policy.unrestricted != (role in UNRESTRICTED_ROLES):
            raise RegistryError(f"Unrestricted flag misplaced on {role}")
        if policy.unrestricted and policy.tier_level != 0:
            raise RegistryError(f"Unrestricted role {role} must be tier 0")
        if not policy.unrestricted and any(r.resource == WILDCARD for r in policy.permissions):
            raise RegistryError(f"Wildcard resource rule on restricted role {role}")

    missing_labels = [role for role in Role if not _DISPLAY_NAMES.get(role)]
    if missing_labels:
        raise RegistryError(f"Roles without a display name: {', '.join(missing_labels)}")


def _build() -> Mapping[Role, RolePolicy]:
    policies: dict[Role, RolePolicy] = {}
    for policy in _POLICIES:
        if policy.role in policies:
            raise RegistryError(f"Duplicate policy for {policy.role}")
        policies[policy.role] = policy
    verify_registry(policies)
    return MappingProxyType({role: policies[role] for role in Role})


ROLE_POLICIES: Mapping[Role, RolePolicy] = _build()


def parse_role(value: Role | str) -> Role:
    """Coerce a string into a Role. Raises InvalidRoleError outside the closed set."""
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError as e:
        raise InvalidRoleError(value) from e


def is_role(value: object) -> bool:
    if not isinstance(value, str):
        return False
    try:
        Role(value)
    except ValueError:
        return False
    return True


def lookup(role: Role | str) -> RolePolicy:
    """Return the policy for a role."""
    return ROLE_POLICIES[parse_role(role)]


def all_policies() -> list[RolePolicy]:
    return list(ROLE_POLICIES.values())


def display_name(role: Role | str) -> str:
    """Human-readable label. Unknown identifiers are echoed back unchanged."""
    if is_role(role):
        return _DISPLAY_NAMES[Role(role)]
    return str(role)
