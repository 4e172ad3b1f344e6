"""
Nigeria Tax Engine - Role Taxonomies

Two independent role taxonomies coexist. They share some names ("admin",
"viewer") but not meaning, so each is its own enum type and neither is
accepted where the other is expected.
"""

from enum import Enum


# ===========================================
# SETTINGS ROLES (per-section read/write)
# ===========================================

class SettingsRole(str, Enum):
    """
    Roles governing the company settings screens.

    Checked per settings section with a read/write pair.
    """
    ADMIN = "admin"              # Full control of every settings section
    ACCOUNTANT = "accountant"    # Tax years, categories, auto-categorisation
    STAFF = "staff"              # Read-only on bookkeeping sections
    VIEWER = "viewer"            # Read-only; fallback for absent roles


# ===========================================
# TEAM ROLES (collaboration capabilities)
# ===========================================

class TeamRole(str, Enum):
    """
    Roles for members of a company's collaboration team.

    Resolved to a fixed capability record.
    """
    OWNER = "owner"      # Everything, including deleting data
    ADMIN = "admin"      # Everything except deleting data
    MEMBER = "member"    # Day-to-day bookkeeping
    VIEWER = "viewer"    # Read-only; fallback for absent roles


# ===========================================
# SETTINGS SECTIONS & ACTIONS
# ===========================================

class SettingsSection(str, Enum):
    """Named configuration surfaces guarded by the settings matrix."""
    COMPANY_PROFILE = "companyProfile"
    TAX_YEARS = "taxYears"
    CATEGORIES = "categories"
    AUTO_CATEGORISATION = "autoCategorisation"
    USERS_ROLES = "usersRoles"


class AccessAction(str, Enum):
    """Action checked against a settings section."""
    READ = "read"
    WRITE = "write"


class Capability(str, Enum):
    """Team collaboration capabilities."""
    VIEW_FINANCIALS = "canViewFinancials"
    EDIT_TRANSACTIONS = "canEditTransactions"
    MANAGE_TEAM = "canManageTeam"
    EXPORT_DATA = "canExportData"
    VIEW_REPORTS = "canViewReports"
    MANAGE_SETTINGS = "canManageSettings"
    DELETE_DATA = "canDeleteData"
