"""Tests for the organization tier charts."""

from __future__ import annotations

from datetime import datetime

import pytest

from tiergate.auth.tiers import (
    TIER_CHARTS,
    TimeWindow,
    approvers_for_action,
    can_perform_action,
    get_tier,
    tier_chart,
    tier_for_role,
    within_access_hours,
)
from tiergate.errors import InvalidRoleError
from tiergate.models.role import OrgCategory, Role

# 2026-03-02 is a Monday, 2026-03-07 a Saturday, 2026-03-08 a Sunday.
MONDAY_10 = datetime(2026, 3, 2, 10, 0)
MONDAY_19 = datetime(2026, 3, 2, 19, 0)
SATURDAY_10 = datetime(2026, 3, 7, 10, 0)
SUNDAY_10 = datetime(2026, 3, 8, 10, 0)


@pytest.mark.parametrize("organization", list(TIER_CHARTS))
def test_charts_have_six_tiers(organization: OrgCategory):
    assert [t.tier for t in tier_chart(organization)] == [1, 2, 3, 4, 5, 6]


def test_unknown_organization():
    with pytest.raises(ValueError):
        tier_chart("admin")
    with pytest.raises(ValueError):
        tier_chart("bank")


def test_get_tier():
    assert get_tier("lender", 3).name == "Underwriter"
    assert get_tier(OrgCategory.VENDOR, 7) is None


def test_can_perform_action():
    assert can_perform_action(2, "borrower", "financial_statements")
    assert not can_perform_action(4, "borrower", "financial_statements")
    assert not can_perform_action(9, "borrower", "financial_statements")


def test_can_perform_action_monetary_limit():
    assert can_perform_action(3, "lender", "loan_approval_under_2m", 2_000_000)
    assert not can_perform_action(3, "lender", "loan_approval_under_2m", 2_000_001)
    assert can_perform_action(1, "lender", "credit_policy", 10**9)


def test_approvers_for_action():
    assert approvers_for_action("vendor", "pricing_changes") == [2]
    assert approvers_for_action("vendor", "pricing_changes", 20_000_000) == []
    assert approvers_for_action("borrower", "document_upload") == [3, 4]
    assert approvers_for_action("broker", "nothing") == []


def test_within_access_hours():
    assert within_access_hours("borrower", 4, MONDAY_10)
    assert not within_access_hours("borrower", 4, MONDAY_19)
    assert not within_access_hours("borrower", 4, SATURDAY_10)
    assert within_access_hours("borrower", 1, SUNDAY_10)
    assert not within_access_hours("borrower", 8, MONDAY_10)


def test_lender_customer_service_works_saturdays():
    assert within_access_hours("lender", 5, SATURDAY_10)
    assert within_access_hours("lender", 5, MONDAY_19)
    assert not within_access_hours("lender", 5, SUNDAY_10)


def test_time_window_end_hour_exclusive():
    window = TimeWindow(start_hour=9, end_hour=17)
    assert window.contains(datetime(2026, 3, 2, 16, 59))
    assert not window.contains(datetime(2026, 3, 2, 17, 0))


def test_tier_for_role():
    assert tier_for_role(Role.LENDER_UNDERWRITER).name == "Underwriter"
    assert tier_for_role("borrower-cfo").monetary_limit == 5_000_000
    assert tier_for_role(Role.SYSTEM_ADMIN) is None


def test_tier_for_role_unknown():
    with pytest.raises(InvalidRoleError):
        tier_for_role("lender-intern")
