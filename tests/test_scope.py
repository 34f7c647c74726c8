"""Tests for the data scope resolver."""

from __future__ import annotations

import pytest

from tiergate.auth.permissions import check
from tiergate.auth.registry import lookup
from tiergate.auth.scope import can_see, visible_items
from tiergate.models.policy import AccessContext, Actor, DataItem
from tiergate.models.role import DataAccessScope, Role

IDS = ["u1", "u2", "", "U1", "team-a"]


def test_all_scope_sees_everything():
    actor = Actor(id="u1")
    assert can_see(DataAccessScope.ALL, DataItem(owner_id="someone-else"), actor)
    assert can_see("all", DataItem(owner_id="x", team_id="t9"), actor)


@pytest.mark.parametrize("owner", IDS)
@pytest.mark.parametrize("actor_id", IDS)
def test_own_scope_exactness(owner: str, actor_id: str):
    item = DataItem(owner_id=owner)
    actor = Actor(id=actor_id)
    assert can_see(DataAccessScope.OWN, item, actor) is (owner == actor_id)


def test_team_scope():
    actor = Actor(id="u1", team_id="t1")
    assert can_see(DataAccessScope.TEAM, DataItem(owner_id="u2", team_id="t1"), actor)
    assert not can_see(DataAccessScope.TEAM, DataItem(owner_id="u2", team_id="t2"), actor)


def test_team_scope_without_teams_denies():
    assert not can_see(DataAccessScope.TEAM, DataItem(owner_id="u2"), Actor(id="u1"))
    assert not can_see(
        DataAccessScope.TEAM, DataItem(owner_id="u2"), Actor(id="u1", team_id="t1")
    )


def test_assigned_scope():
    actor = Actor(id="u1", assigned_ids=frozenset({"c1", "c2"}))
    assert can_see(DataAccessScope.ASSIGNED, DataItem(owner_id="c1"), actor)
    assert not can_see(DataAccessScope.ASSIGNED, DataItem(owner_id="c3"), actor)
    assert not can_see(DataAccessScope.ASSIGNED, DataItem(owner_id="u1"), actor)


def test_assigned_scope_matches_whole_ids():
    actor = Actor(id="u1", assigned_ids=frozenset({"client-10"}))
    assert not can_see(DataAccessScope.ASSIGNED, DataItem(owner_id="client-1"), actor)


def test_unknown_scope_denies():
    actor = Actor(id="u1", team_id="t1")
    assert not can_see("global", DataItem(owner_id="u1", team_id="t1"), actor)
    assert not can_see("", DataItem(owner_id="u1"), actor)


def test_visible_items():
    actor = Actor(id="u1")
    items = [DataItem(owner_id="u1"), DataItem(owner_id="u2"), DataItem(owner_id="u1")]
    assert visible_items(DataAccessScope.OWN, items, actor) == [items[0], items[2]]


def test_permission_and_visibility_are_independent():
    policy = lookup(Role.BROKER_PROCESSOR)
    assert check(policy, "loan_application", "read", AccessContext(ownership=False))

    actor = Actor(id="p1", assigned_ids=frozenset({"client-a"}))
    item = DataItem(owner_id="client-b")
    assert not can_see(policy.data_access_scope, item, actor)
