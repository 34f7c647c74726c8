"""Role identifiers and the enumerations policies are built from."""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    BORROWER = "borrower"
    BORROWER_OWNER = "borrower-owner"
    BORROWER_CFO = "borrower-cfo"
    BORROWER_CONTROLLER = "borrower-controller"
    BORROWER_ACCOUNTING = "borrower-accounting"
    BORROWER_OPERATIONS = "borrower-operations"
    BORROWER_ADMIN = "borrower-admin"

    VENDOR = "vendor"
    VENDOR_OWNER = "vendor-owner"
    VENDOR_SALES_DIRECTOR = "vendor-sales-director"
    VENDOR_SALES_MANAGER = "vendor-sales-manager"
    VENDOR_SENIOR_SALES = "vendor-senior-sales"
    VENDOR_JUNIOR_SALES = "vendor-junior-sales"
    VENDOR_SUPPORT = "vendor-support"

    LENDER = "lender"
    LENDER_CCO = "lender-cco"
    LENDER_SENIOR_UNDERWRITER = "lender-senior-underwriter"
    LENDER_UNDERWRITER = "lender-underwriter"
    LENDER_PROCESSOR = "lender-processor"
    LENDER_CSR = "lender-csr"
    LENDER_ADMIN = "lender-admin"

    BROKER = "broker"
    BROKER_PRINCIPAL = "broker-principal"
    BROKER_MANAGING = "broker-managing"
    BROKER_SENIOR_OFFICER = "broker-senior-officer"
    BROKER_OFFICER = "broker-officer"
    BROKER_PROCESSOR = "broker-processor"
    BROKER_ADMIN = "broker-admin"

    SYSTEM_ADMIN = "system-admin"
    EVA_ADMIN = "eva-admin"
    COMPLIANCE_OFFICER = "compliance-officer"
    SUPPORT_REP = "support-rep"


class Action(StrEnum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    EXECUTE = "execute"


class DataAccessScope(StrEnum):
    ALL = "all"
    TEAM = "team"
    ASSIGNED = "assigned"
    OWN = "own"


class OrgCategory(StrEnum):
    BORROWER = "borrower"
    VENDOR = "vendor"
    LENDER = "lender"
    BROKER = "broker"
    ADMIN = "admin"
    UNKNOWN = "unknown"


ALL_ACTIONS = frozenset(Action)
UNRESTRICTED_ROLES = frozenset({Role.SYSTEM_ADMIN, Role.EVA_ADMIN})
