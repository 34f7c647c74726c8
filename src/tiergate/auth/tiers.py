"""Organization tier charts: what each seniority tier may approve, and up to what amount."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from tiergate.auth.classifier import classify
from tiergate.auth.registry import ROLE_POLICIES, parse_role
from tiergate.models.role import OrgCategory, Role

ANY_AUTHORITY = "all"
WEEKDAYS = (1, 2, 3, 4, 5)


class TimeWindow(BaseModel):
    """Working-hour window. Days use 0=Sunday .. 6=Saturday."""

    model_config = ConfigDict(frozen=True)

    start_hour: int
    end_hour: int
    days_of_week: tuple[int, ...] = WEEKDAYS

    def contains(self, at: datetime) -> bool:
        day = (at.weekday() + 1) % 7
        return day in self.days_of_week and self.start_hour <= at.hour < self.end_hour


class TierPermission(BaseModel):
    model_config = ConfigDict(frozen=True)

    tier: int
    name: str
    description: str
    monetary_limit: float | None = None  # None: no limit
    data_access_scope: tuple[str, ...] = ()
    communication_rights: tuple[str, ...] = ()
    approval_authority: tuple[str, ...] = ()
    requires_approval: tuple[str, ...] = ()
    geographic: tuple[str, ...] = ()
    time_access: TimeWindow | None = None

    def can_approve(self, action: str, amount: float | None = None) -> bool:
        if amount and self.monetary_limit is not None and amount > self.monetary_limit:
            return False
        return action in self.approval_authority or ANY_AUTHORITY in self.approval_authority


_OFFICE_HOURS = TimeWindow(start_hour=8, end_hour=18)
_CORE_HOURS = TimeWindow(start_hour=9, end_hour=17)

_BORROWER_TIERS = (
    TierPermission(
        tier=1,
        name="Owner/CEO",
        description="Full control over all loan applications and company financial decisions",
        data_access_scope=("all",),
        communication_rights=("all",),
        approval_authority=(
            "loan_application",
            "financial_statements",
            "legal_documents",
            "team_management",
        ),
    ),
    TierPermission(
        tier=2,
        name="CFO",
        description="Financial decisions and loan approvals up to $5M",
        monetary_limit=5_000_000,
        data_access_scope=("financial", "loans", "banking", "team_financial"),
        communication_rights=("lenders", "brokers", "internal_all"),
        approval_authority=("loan_application_under_5m", "financial_statements", "banking_changes"),
        requires_approval=("loans_over_5m", "equity_decisions"),
    ),
    TierPermission(
        tier=3,
        name="Controller",
        description="Create and manage loan drafts up to $1M",
        monetary_limit=1_000_000,
        data_access_scope=("financial_reports", "loan_drafts", "accounting"),
        communication_rights=("brokers", "internal_finance"),
        approval_authority=("draft_creation", "document_upload", "minor_corrections"),
        requires_approval=("loan_submission", "loans_over_1m"),
    ),
    TierPermission(
        tier=4,
        name="Accounting Staff",
        description="Support documentation and data entry",
        monetary_limit=0,
        data_access_scope=("financial_documents", "basic_loan_info"),
        communication_rights=("internal_finance",),
        approval_authority=("document_upload",),
        requires_approval=("loan_creation", "financial_changes"),
        time_access=_OFFICE_HOURS,
    ),
    TierPermission(
        tier=5,
        name="Operations Manager",
        description="View-only access to loan status and basic information",
        monetary_limit=0,
        data_access_scope=("loan_status", "basic_company_info"),
        communication_rights=("internal_ops",),
        requires_approval=("any_modification",),
    ),
    TierPermission(
        tier=6,
        name="Admin Assistant",
        description="Minimal access for scheduling and basic administrative tasks",
        monetary_limit=0,
        data_access_scope=("calendar", "contact_info"),
        communication_rights=("internal_admin",),
        requires_approval=("any_data_access",),
        time_access=_CORE_HOURS,
    ),
)

_VENDOR_TIERS = (
    TierPermission(
        tier=1,
        name="Owner/President",
        description="Full control over all vendor operations and pricing",
        data_access_scope=("all",),
        communication_rights=("all",),
        approval_authority=("pricing", "inventory", "contracts", "team_management"),
    ),
    TierPermission(
        tier=2,
        name="Sales Director",
        description="Strategic sales management and major deal approval",
        monetary_limit=10_000_000,
        data_access_scope=("sales", "inventory", "pricing", "customer_data", "team_sales"),
        communication_rights=("all_customers", "brokers", "lenders"),
        approval_authority=("pricing_changes", "major_deals", "sales_team_management"),
        requires_approval=("exclusive_contracts",),
    ),
    TierPermission(
        tier=3,
        name="Sales Manager",
        description="Day-to-day sales operations and standard deal approval",
        monetary_limit=2_000_000,
        data_access_scope=("sales_pipeline", "inventory", "standard_pricing", "team_reports"),
        communication_rights=("assigned_customers", "brokers"),
        approval_authority=("standard_deals", "discount_up_to_10_percent"),
        requires_approval=("pricing_changes", "deals_over_2m"),
    ),
    TierPermission(
        tier=4,
        name="Senior Sales Rep",
        description="Handle complex deals and customer relationships",
        monetary_limit=500_000,
        data_access_scope=("assigned_accounts", "inventory", "pricing_view"),
        communication_rights=("assigned_customers",),
        approval_authority=("quote_generation", "standard_terms"),
        requires_approval=("custom_pricing", "deals_over_500k"),
        geographic=("assigned_territory",),
    ),
    TierPermission(
        tier=5,
        name="Junior Sales Rep",
        description="Basic sales transactions and customer inquiries",
        monetary_limit=100_000,
        data_access_scope=("basic_inventory", "list_pricing"),
        communication_rights=("customer_inquiries",),
        approval_authority=("information_requests",),
        requires_approval=("any_deal_closure", "pricing_exceptions"),
        time_access=_OFFICE_HOURS,
    ),
    TierPermission(
        tier=6,
        name="Sales Support",
        description="Data entry and administrative support",
        monetary_limit=0,
        data_access_scope=("data_entry_forms",),
        communication_rights=("internal_sales",),
        requires_approval=("customer_contact", "data_modification"),
        time_access=_CORE_HOURS,
    ),
)

_BROKER_TIERS = (
    TierPermission(
        tier=1,
        name="Principal/Owner",
        description="Full brokerage control and compliance oversight",
        data_access_scope=("all",),
        communication_rights=("all",),
        approval_authority=("all_loans", "compliance", "team_management", "commission_structure"),
    ),
    TierPermission(
        tier=2,
        name="Managing Broker",
        description="Office operations and loan approval oversight",
        monetary_limit=20_000_000,
        data_access_scope=("all_loans", "team_performance", "compliance_reports"),
        communication_rights=("all_lenders", "all_clients", "team"),
        approval_authority=("loan_submission", "team_assignments", "commission_approval"),
        requires_approval=("compliance_changes", "partnership_agreements"),
    ),
    TierPermission(
        tier=3,
        name="Senior Loan Officer",
        description="Independent loan portfolio management",
        monetary_limit=5_000_000,
        data_access_scope=("own_portfolio", "lender_programs", "market_rates"),
        communication_rights=("own_clients", "all_lenders"),
        approval_authority=("own_loan_submission", "client_agreements"),
        requires_approval=("loans_over_5m", "new_lender_relationships"),
    ),
    TierPermission(
        tier=4,
        name="Loan Officer",
        description="Supervised loan origination and client management",
        monetary_limit=2_000_000,
        data_access_scope=("assigned_loans", "basic_lender_info"),
        communication_rights=("assigned_clients", "approved_lenders"),
        approval_authority=("loan_preparation",),
        requires_approval=("loan_submission", "loans_over_2m", "rate_exceptions"),
    ),
    TierPermission(
        tier=5,
        name="Processor",
        description="Documentation handling and compliance checking",
        monetary_limit=0,
        data_access_scope=("assigned_files", "document_checklists"),
        communication_rights=("internal_team", "document_requests"),
        approval_authority=("document_collection",),
        requires_approval=("client_communication", "lender_communication"),
        time_access=_OFFICE_HOURS,
    ),
    TierPermission(
        tier=6,
        name="Marketing Assistant",
        description="Basic administrative and marketing tasks",
        monetary_limit=0,
        data_access_scope=("marketing_materials", "contact_lists"),
        communication_rights=("internal_marketing",),
        requires_approval=("client_data_access", "external_communication"),
        time_access=_CORE_HOURS,
    ),
)

_LENDER_TIERS = (
    TierPermission(
        tier=1,
        name="Chief Credit Officer",
        description="All lending decisions and policy setting",
        data_access_scope=("all",),
        communication_rights=("all",),
        approval_authority=("all_loans", "credit_policy", "team_management", "risk_parameters"),
    ),
    TierPermission(
        tier=2,
        name="Senior Underwriter",
        description="Complex loan approval up to $10M",
        monetary_limit=10_000_000,
        data_access_scope=("all_applications", "risk_models", "portfolio_analytics"),
        communication_rights=("brokers", "borrowers", "internal_all"),
        approval_authority=("loan_approval_under_10m", "exception_requests", "team_decisions"),
        requires_approval=("loans_over_10m", "policy_exceptions"),
    ),
    TierPermission(
        tier=3,
        name="Underwriter",
        description="Standard loan approval up to $2M",
        monetary_limit=2_000_000,
        data_access_scope=("assigned_applications", "credit_reports", "risk_guidelines"),
        communication_rights=("assigned_brokers", "internal_credit"),
        approval_authority=("loan_approval_under_2m", "standard_conditions"),
        requires_approval=("loans_over_2m", "guideline_exceptions"),
    ),
    TierPermission(
        tier=4,
        name="Loan Analyst",
        description="Application processing and initial review",
        monetary_limit=0,
        data_access_scope=("application_data", "basic_credit_info"),
        communication_rights=("internal_underwriting",),
        approval_authority=("document_verification", "initial_review"),
        requires_approval=("credit_decisions", "external_communication"),
        time_access=_OFFICE_HOURS,
    ),
    TierPermission(
        tier=5,
        name="Customer Service",
        description="Basic loan status inquiries and support",
        monetary_limit=0,
        data_access_scope=("loan_status", "payment_info"),
        communication_rights=("customer_support",),
        approval_authority=("information_provision",),
        requires_approval=("account_changes", "sensitive_info_access"),
        time_access=TimeWindow(start_hour=8, end_hour=20, days_of_week=(1, 2, 3, 4, 5, 6)),
    ),
    TierPermission(
        tier=6,
        name="Data Entry",
        description="Administrative support and data management",
        monetary_limit=0,
        data_access_scope=("data_entry_screens",),
        communication_rights=("internal_admin",),
        requires_approval=("any_data_modification", "report_generation"),
        time_access=_CORE_HOURS,
    ),
)

TIER_CHARTS: dict[OrgCategory, tuple[TierPermission, ...]] = {
    OrgCategory.BORROWER: _BORROWER_TIERS,
    OrgCategory.VENDOR: _VENDOR_TIERS,
    OrgCategory.BROKER: _BROKER_TIERS,
    OrgCategory.LENDER: _LENDER_TIERS,
}


def tier_chart(organization: OrgCategory | str) -> tuple[TierPermission, ...]:
    """Get the tier chart for an organization type."""
    try:
        return TIER_CHARTS[OrgCategory(organization)]
    except (ValueError, KeyError) as e:
        raise ValueError(f"Unknown organization type: {organization}") from e


def get_tier(organization: OrgCategory | str, tier: int) -> TierPermission | None:
    for entry in tier_chart(organization):
        if entry.tier == tier:
            return entry
    return None


def tier_for_role(role: Role | str) -> TierPermission | None:
    """Tier chart entry matching a role's family and tier level. None for platform staff."""
    resolved = parse_role(role)
    category = classify(resolved)
    if category not in TIER_CHARTS:
        return None
    return get_tier(category, ROLE_POLICIES[resolved].tier_level)


def can_perform_action(
    tier: int, organization: OrgCategory | str, action: str, amount: float | None = None
) -> bool:
    """Check if a tier has approval authority for an action at the given amount."""
    entry = get_tier(organization, tier)
    if entry is None:
        return False
    return entry.can_approve(action, amount)


def approvers_for_action(
    organization: OrgCategory | str, action: str, amount: float | None = None
) -> list[int]:
    """Tiers that can approve an action, most senior first."""
    return [entry.tier for entry in tier_chart(organization) if entry.can_approve(action, amount)]


def within_access_hours(organization: OrgCategory | str, tier: int, at: datetime) -> bool:
    """Check a tier's working-hour window. Tiers without a window are always inside."""
    entry = get_tier(organization, tier)
    if entry is None:
        return False
    if entry.time_access is None:
        return True
    return entry.time_access.contains(at)
