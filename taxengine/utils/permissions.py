"""
Nigeria Tax Engine - Permissions System

Two independent RBAC models consulted by callers before they touch
settings or collaborate on a company's books.

Settings Permissions (per-section read/write):
----------------------------------------------
| Section            | Admin | Accountant | Staff | Viewer |
|--------------------|-------|------------|-------|--------|
| companyProfile     | RW    | R          |       | R      |
| taxYears           | RW    | RW         | R     | R      |
| categories         | RW    | RW         | R     | R      |
| autoCategorisation | RW    | RW         |       | R      |
| usersRoles         | RW    |            |       |        |

Team Capabilities:
------------------
| Capability          | Owner | Admin | Member | Viewer |
|---------------------|-------|-------|--------|--------|
| canViewFinancials   | X     | X     | X      | X      |
| canEditTransactions | X     | X     | X      |        |
| canManageTeam       | X     | X     |        |        |
| canExportData       | X     | X     | X      |        |
| canViewReports      | X     | X     | X      | X      |
| canManageSettings   | X     | X     |        |        |
| canDeleteData       | X     |       |        |        |

Resolution rules:
- An absent role (None or "") is treated as the taxonomy's viewer.
- An unrecognised role, section, action or capability is denied.
- A role from the other taxonomy is denied, never reinterpreted.
- In strict mode the last two raise PermissionConfigurationException.
  Strict mode from settings is ignored when running in production.
"""

import logging
from dataclasses import dataclass, asdict
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from taxengine.config import settings
from taxengine.models.roles import (
    AccessAction,
    Capability,
    SettingsRole,
    SettingsSection,
    TeamRole,
)
from taxengine.utils.error_handling import PermissionConfigurationException

logger = logging.getLogger(__name__)

SettingsRoleLike = Union[SettingsRole, str, None]
TeamRoleLike = Union[TeamRole, str, None]


# ===========================================
# PERMISSION RECORDS
# ===========================================

@dataclass(frozen=True)
class SectionAccess:
    """Read/write pair for one settings section."""
    can_read: bool = False
    can_write: bool = False

    def allows(self, action: AccessAction) -> bool:
        return self.can_read if action == AccessAction.READ else self.can_write


@dataclass(frozen=True)
class CapabilityRecord:
    """Fixed capability set for a team role. Defaults deny everything."""
    can_view_financials: bool = False
    can_edit_transactions: bool = False
    can_manage_team: bool = False
    can_export_data: bool = False
    can_view_reports: bool = False
    can_manage_settings: bool = False
    can_delete_data: bool = False

    def allows(self, capability: Capability) -> bool:
        return getattr(self, _CAPABILITY_FIELDS[capability])

    def to_dict(self) -> Dict[str, bool]:
        """Capability name (camelCase) -> granted."""
        values = asdict(self)
        return {cap.value: values[name] for cap, name in _CAPABILITY_FIELDS.items()}


_CAPABILITY_FIELDS: Mapping[Capability, str] = MappingProxyType({
    Capability.VIEW_FINANCIALS: "can_view_financials",
    Capability.EDIT_TRANSACTIONS: "can_edit_transactions",
    Capability.MANAGE_TEAM: "can_manage_team",
    Capability.EXPORT_DATA: "can_export_data",
    Capability.VIEW_REPORTS: "can_view_reports",
    Capability.MANAGE_SETTINGS: "can_manage_settings",
    Capability.DELETE_DATA: "can_delete_data",
})

NO_ACCESS = SectionAccess()
NO_CAPABILITIES = CapabilityRecord()

_RW = SectionAccess(can_read=True, can_write=True)
_R = SectionAccess(can_read=True, can_write=False)


# ===========================================
# PERMISSION MAPPINGS
# ===========================================

# Settings section -> role -> access. Missing pairs resolve to NO_ACCESS.
SETTINGS_PERMISSIONS: Mapping[SettingsSection, Mapping[SettingsRole, SectionAccess]] = MappingProxyType({
    SettingsSection.COMPANY_PROFILE: MappingProxyType({
        SettingsRole.ADMIN: _RW,
        SettingsRole.ACCOUNTANT: _R,
        SettingsRole.STAFF: NO_ACCESS,
        SettingsRole.VIEWER: _R,
    }),
    SettingsSection.TAX_YEARS: MappingProxyType({
        SettingsRole.ADMIN: _RW,
        SettingsRole.ACCOUNTANT: _RW,
        SettingsRole.STAFF: _R,
        SettingsRole.VIEWER: _R,
    }),
    SettingsSection.CATEGORIES: MappingProxyType({
        SettingsRole.ADMIN: _RW,
        SettingsRole.ACCOUNTANT: _RW,
        SettingsRole.STAFF: _R,
        SettingsRole.VIEWER: _R,
    }),
    SettingsSection.AUTO_CATEGORISATION: MappingProxyType({
        SettingsRole.ADMIN: _RW,
        SettingsRole.ACCOUNTANT: _RW,
        SettingsRole.STAFF: NO_ACCESS,
        SettingsRole.VIEWER: _R,
    }),
    SettingsSection.USERS_ROLES: MappingProxyType({
        SettingsRole.ADMIN: _RW,
        SettingsRole.ACCOUNTANT: NO_ACCESS,
        SettingsRole.STAFF: NO_ACCESS,
        SettingsRole.VIEWER: NO_ACCESS,
    }),
})

# Team role -> capabilities. Unknown roles get NO_CAPABILITIES.
TEAM_CAPABILITIES: Mapping[TeamRole, CapabilityRecord] = MappingProxyType({
    TeamRole.OWNER: CapabilityRecord(
        can_view_financials=True,
        can_edit_transactions=True,
        can_manage_team=True,
        can_export_data=True,
        can_view_reports=True,
        can_manage_settings=True,
        can_delete_data=True,
    ),
    TeamRole.ADMIN: CapabilityRecord(
        can_view_financials=True,
        can_edit_transactions=True,
        can_manage_team=True,
        can_export_data=True,
        can_view_reports=True,
        can_manage_settings=True,
        can_delete_data=False,  # Owner only
    ),
    TeamRole.MEMBER: CapabilityRecord(
        can_view_financials=True,
        can_edit_transactions=True,
        can_export_data=True,
        can_view_reports=True,
    ),
    TeamRole.VIEWER: CapabilityRecord(
        can_view_financials=True,
        can_view_reports=True,
    ),
})


# ===========================================
# NAME RESOLUTION
# ===========================================

def _is_strict(strict: Optional[bool]) -> bool:
    if strict is not None:
        return strict
    # Never raise on unknown names in production
    return settings.permissions_strict and not settings.is_production


def _reject(kind: str, value: Any, taxonomy: str, strict: Optional[bool]) -> None:
    if _is_strict(strict):
        raise PermissionConfigurationException(kind, value, taxonomy)
    logger.warning(f"Denying {taxonomy} permission check: unknown {kind} {value!r}")


def _lookup(enum_cls, value: Any):
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        return None


def resolve_settings_role(role: SettingsRoleLike, strict: Optional[bool] = None) -> Optional[SettingsRole]:
    """
    Resolve a settings role.

    Returns None when the role must be denied outright.
    """
    if isinstance(role, TeamRole):
        _reject("role", role.value, "settings (team role given)", strict)
        return None
    if role is None or role == "":
        return SettingsRole.VIEWER
    resolved = _lookup(SettingsRole, role)
    if resolved is None:
        _reject("role", role, "settings", strict)
    return resolved


def resolve_team_role(role: TeamRoleLike, strict: Optional[bool] = None) -> Optional[TeamRole]:
    """
    Resolve a team role.

    Returns None when the role must be denied outright.
    """
    if isinstance(role, SettingsRole):
        _reject("role", role.value, "team (settings role given)", strict)
        return None
    if role is None or role == "":
        return TeamRole.VIEWER
    resolved = _lookup(TeamRole, role)
    if resolved is None:
        _reject("role", role, "team", strict)
    return resolved


# ===========================================
# SETTINGS PERMISSION HELPERS
# ===========================================

def get_section_access(
    role: SettingsRoleLike,
    section: Union[SettingsSection, str],
    strict: Optional[bool] = None,
) -> SectionAccess:
    """Get the read/write pair for a role on one settings section."""
    resolved_role = resolve_settings_role(role, strict)
    resolved_section = _lookup(SettingsSection, section)
    if resolved_section is None:
        _reject("section", section, "settings", strict)
        return NO_ACCESS
    if resolved_role is None:
        return NO_ACCESS
    return SETTINGS_PERMISSIONS.get(resolved_section, {}).get(resolved_role, NO_ACCESS)


def can_access(
    role: SettingsRoleLike,
    section: Union[SettingsSection, str],
    action: Union[AccessAction, str],
    strict: Optional[bool] = None,
) -> bool:
    """Check if a settings role may read or write a settings section."""
    access = get_section_access(role, section, strict)
    resolved_action = _lookup(AccessAction, action)
    if resolved_action is None:
        _reject("action", action, "settings", strict)
        return False
    return access.allows(resolved_action)


def get_settings_permissions(
    role: SettingsRoleLike,
    strict: Optional[bool] = None,
) -> Dict[SettingsSection, SectionAccess]:
    """Get the access pair for every settings section."""
    resolved_role = resolve_settings_role(role, strict)
    return {
        section: (row.get(resolved_role, NO_ACCESS) if resolved_role else NO_ACCESS)
        for section, row in SETTINGS_PERMISSIONS.items()
    }


def get_accessible_sections(
    role: SettingsRoleLike,
    action: Union[AccessAction, str] = AccessAction.READ,
    strict: Optional[bool] = None,
) -> List[SettingsSection]:
    """List the sections a role may read (or write), in table order."""
    resolved_action = _lookup(AccessAction, action)
    if resolved_action is None:
        _reject("action", action, "settings", strict)
        return []
    return [
        section
        for section, access in get_settings_permissions(role, strict).items()
        if access.allows(resolved_action)
    ]


# ===========================================
# TEAM CAPABILITY HELPERS
# ===========================================

def get_capabilities(role: TeamRoleLike, strict: Optional[bool] = None) -> CapabilityRecord:
    """Get the capability record for a team role."""
    resolved = resolve_team_role(role, strict)
    if resolved is None:
        return NO_CAPABILITIES
    return TEAM_CAPABILITIES.get(resolved, NO_CAPABILITIES)


def has_capability(
    role: TeamRoleLike,
    capability: Union[Capability, str],
    strict: Optional[bool] = None,
) -> bool:
    """Check if a team role has a specific capability."""
    record = get_capabilities(role, strict)
    resolved = _lookup(Capability, capability)
    if resolved is None:
        _reject("capability", capability, "team", strict)
        return False
    return record.allows(resolved)


# ===========================================
# ROLE HIERARCHY
# ===========================================

TEAM_ROLE_HIERARCHY: Mapping[TeamRole, int] = MappingProxyType({
    TeamRole.OWNER: 4,
    TeamRole.ADMIN: 3,
    TeamRole.MEMBER: 2,
    TeamRole.VIEWER: 1,
})


def get_team_role_level(role: TeamRoleLike) -> int:
    """Get the hierarchy level of a team role (0 for unknown roles)."""
    resolved = resolve_team_role(role, strict=False)
    return TEAM_ROLE_HIERARCHY.get(resolved, 0) if resolved else 0


def is_team_role_higher_or_equal(role1: TeamRoleLike, role2: TeamRoleLike) -> bool:
    """Check if role1 is higher or equal to role2 in hierarchy."""
    return get_team_role_level(role1) >= get_team_role_level(role2)
