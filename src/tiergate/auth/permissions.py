"""Permission evaluation for role policies.

Evaluation is pure: no logging, no mutation. It runs on every request.
"""

from __future__ import annotations

from tiergate.auth.registry import ROLE_POLICIES, is_role
from tiergate.models.policy import AccessContext, Conditions, PermissionRule, RolePolicy
from tiergate.models.role import Action, Role


def _as_action(action: Action | str) -> Action | None:
    if isinstance(action, Action):
        return action
    try:
        return Action(action)
    except ValueError:
        return None


def _find_rule(policy: RolePolicy, resource: str, action: Action) -> PermissionRule | None:
    for rule in policy.permissions:
        if rule.matches(resource, action):
            return rule
    return None


def _conditions_met(conditions: Conditions, ctx: AccessContext | None) -> bool:
    """Every condition on the rule must be satisfied; a missing fact fails."""
    ctx = ctx or AccessContext()

    if conditions.ownership is not None:
        if ctx.ownership is None or ctx.ownership != conditions.ownership:
            return False

    if conditions.status is not None:
        if ctx.status is None or ctx.status not in conditions.status:
            return False

    if conditions.monetary_limit is not None:
        if ctx.amount is None or ctx.amount > conditions.monetary_limit:
            return False

    return True


def check(
    policy: RolePolicy,
    resource: str,
    action: Action | str,
    ctx: AccessContext | None = None,
) -> bool:
    """Decide whether a policy allows an action on a resource."""
    if policy.unrestricted:
        return True

    resolved = _as_action(action)
    if resolved is None:
        return False

    rule = _find_rule(policy, resource, resolved)
    if rule is None:
        return False

    if rule.conditions is not None:
        return _conditions_met(rule.conditions, ctx)
    return True


def check_role(
    role: Role | str,
    resource: str,
    action: Action | str,
    ctx: AccessContext | None = None,
) -> bool:
    """Like check(), keyed by role. Unknown roles are denied."""
    if not is_role(role):
        return False
    return check(ROLE_POLICIES[Role(role)], resource, action, ctx)


def meets_tier(role: Role | str, required_tier: int) -> bool:
    """Check if a role is at least as senior as the required tier (lower is more senior)."""
    if not is_role(role):
        return False
    return ROLE_POLICIES[Role(role)].tier_level <= required_tier


def requires_approval(policy: RolePolicy, amount: float) -> bool:
    """Check if an amount exceeds the policy's approval threshold."""
    limits = policy.monetary_limits
    if limits is None or limits.requires_approval_above is None:
        return False
    return amount > limits.requires_approval_above
