"""Data visibility: which records a role's scope lets an actor see."""

from __future__ import annotations

from collections.abc import Iterable

from tiergate.models.policy import Actor, DataItem
from tiergate.models.role import DataAccessScope


def can_see(scope: DataAccessScope | str, item: DataItem, actor: Actor) -> bool:
    """Check if an actor with the given scope may see a record.

    Independent of permission checks: an allowed action on an invisible
    record is still invisible. Unrecognized scopes deny.
    """
    if scope == DataAccessScope.ALL:
        return True
    if scope == DataAccessScope.TEAM:
        return item.team_id is not None and item.team_id == actor.team_id
    if scope == DataAccessScope.ASSIGNED:
        return item.owner_id in actor.assigned_ids
    if scope == DataAccessScope.OWN:
        return item.owner_id == actor.id
    return False


def visible_items(
    scope: DataAccessScope | str, items: Iterable[DataItem], actor: Actor
) -> list[DataItem]:
    return [item for item in items if can_see(scope, item, actor)]
