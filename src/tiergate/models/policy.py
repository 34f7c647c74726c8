"""Policy models: permission rules, conditions and per-role policies."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tiergate.models.role import UNRESTRICTED_ROLES, Action, DataAccessScope, Role

WILDCARD = "*"


class Conditions(BaseModel):
    """Runtime constraints narrowing an otherwise granted permission."""

    model_config = ConfigDict(frozen=True)

    ownership: bool | None = None
    status: frozenset[str] | None = None
    monetary_limit: float | None = None

    def is_empty(self) -> bool:
        return self.ownership is None and self.status is None and self.monetary_limit is None

    def to_response(self) -> dict:
        data: dict = {}
        if self.ownership is not None:
            data["ownership"] = self.ownership
        if self.status is not None:
            data["status"] = sorted(self.status)
        if self.monetary_limit is not None:
            data["monetary_limit"] = self.monetary_limit
        return data


class PermissionRule(BaseModel):
    """Grants a set of actions on one resource, or on every resource via ``*``."""

    model_config = ConfigDict(frozen=True)

    resource: str
    actions: frozenset[Action]
    conditions: Conditions | None = None

    @model_validator(mode="after")
    def _wildcard_lists_actions(self) -> PermissionRule:
        if self.resource == WILDCARD and not self.actions:
            raise ValueError("A wildcard rule must list its actions explicitly")
        return self

    def matches(self, resource: str, action: Action) -> bool:
        return (self.resource == resource or self.resource == WILDCARD) and action in self.actions


class MonetaryLimits(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_transaction_amount: float | None = None
    max_daily_amount: float | None = None
    requires_approval_above: float | None = None


class RolePolicy(BaseModel):
    """Everything the engine knows about one role. Built once, never mutated."""

    model_config = ConfigDict(frozen=True)

    role: Role
    tier_level: int = Field(ge=0, le=6)
    can_manage_team: bool = False
    monetary_limits: MonetaryLimits | None = None
    data_access_scope: DataAccessScope
    permissions: tuple[PermissionRule, ...] = ()
    # Explicit bypass variant; never derived from a "*" rule or the tier.
    unrestricted: bool = False

    @model_validator(mode="after")
    def _unrestricted_only_for_platform_admins(self) -> RolePolicy:
        if self.unrestricted and self.role not in UNRESTRICTED_ROLES:
            raise ValueError(f"Role {self.role} cannot be unrestricted")
        return self

    def to_response(self) -> dict:
        return {
            "_v": "1.0",
            "role": str(self.role),
            "tier_level": self.tier_level,
            "can_manage_team": self.can_manage_team,
            "data_access_scope": str(self.data_access_scope),
            "unrestricted": self.unrestricted,
            "permissions": [
                {
                    "resource": rule.resource,
                    "actions": sorted(str(a) for a in rule.actions),
                    "conditions": rule.conditions.to_response() if rule.conditions else None,
                }
                for rule in self.permissions
            ],
        }


class AccessContext(BaseModel):
    """Facts about the request, checked against a rule's conditions."""

    model_config = ConfigDict(frozen=True)

    ownership: bool | None = None
    status: str | None = None
    amount: float | None = None


class DataItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner_id: str
    team_id: str | None = None


class Actor(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    team_id: str | None = None
    assigned_ids: frozenset[str] = frozenset()
