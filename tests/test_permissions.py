"""
Nigeria Tax Engine - Permission Tests

Tests for the settings permission matrix and team capabilities.
"""

import pytest

from taxengine import config
from taxengine.models.roles import (
    AccessAction,
    Capability,
    SettingsRole,
    SettingsSection,
    TeamRole,
)
from taxengine.utils.error_handling import ErrorCode, PermissionConfigurationException
from taxengine.utils import permissions as permissions_module
from taxengine.utils.permissions import (
    NO_CAPABILITIES,
    can_access,
    get_accessible_sections,
    get_capabilities,
    get_section_access,
    get_settings_permissions,
    get_team_role_level,
    has_capability,
    is_team_role_higher_or_equal,
)


# (role, section) -> (can_read, can_write)
EXPECTED_SETTINGS_MATRIX = {
    ("admin", "companyProfile"): (True, True),
    ("admin", "taxYears"): (True, True),
    ("admin", "categories"): (True, True),
    ("admin", "autoCategorisation"): (True, True),
    ("admin", "usersRoles"): (True, True),
    ("accountant", "companyProfile"): (True, False),
    ("accountant", "taxYears"): (True, True),
    ("accountant", "categories"): (True, True),
    ("accountant", "autoCategorisation"): (True, True),
    ("accountant", "usersRoles"): (False, False),
    ("staff", "companyProfile"): (False, False),
    ("staff", "taxYears"): (True, False),
    ("staff", "categories"): (True, False),
    ("staff", "autoCategorisation"): (False, False),
    ("staff", "usersRoles"): (False, False),
    ("viewer", "companyProfile"): (True, False),
    ("viewer", "taxYears"): (True, False),
    ("viewer", "categories"): (True, False),
    ("viewer", "autoCategorisation"): (True, False),
    ("viewer", "usersRoles"): (False, False),
}


class TestSettingsPermissions:
    """Test per-section read/write access."""

    @pytest.mark.parametrize("role,section", sorted(EXPECTED_SETTINGS_MATRIX))
    def test_matrix(self, role, section):
        can_read, can_write = EXPECTED_SETTINGS_MATRIX[(role, section)]

        assert can_access(role, section, "read") is can_read
        assert can_access(role, section, "write") is can_write

    def test_users_roles_examples(self):
        assert can_access("staff", "usersRoles", "read") is False
        assert can_access("admin", "usersRoles", "write") is True

    def test_enum_arguments(self):
        assert can_access(SettingsRole.ACCOUNTANT, SettingsSection.TAX_YEARS, AccessAction.WRITE)

    def test_write_implies_read(self):
        for role in SettingsRole:
            for section in SettingsSection:
                access = get_section_access(role, section)
                assert not access.can_write or access.can_read

    def test_absent_role_is_viewer(self):
        assert can_access(None, "companyProfile", "read") is True
        assert can_access("", "companyProfile", "write") is False
        assert get_settings_permissions(None) == get_settings_permissions("viewer")

    def test_unknown_role_denied(self):
        for section in SettingsSection:
            assert can_access("superuser", section, "read") is False

    def test_team_role_not_accepted(self):
        """TeamRole.ADMIN is not SettingsRole.ADMIN."""
        assert can_access(TeamRole.ADMIN, "usersRoles", "read") is False
        assert can_access(TeamRole.OWNER, "categories", "read") is False

    def test_unknown_section_or_action_denied(self):
        assert can_access("admin", "billing", "read") is False
        assert can_access("admin", "categories", "delete") is False

    def test_accessible_sections(self):
        assert get_accessible_sections("staff") == [SettingsSection.TAX_YEARS, SettingsSection.CATEGORIES]
        assert get_accessible_sections("accountant", AccessAction.WRITE) == [
            SettingsSection.TAX_YEARS,
            SettingsSection.CATEGORIES,
            SettingsSection.AUTO_CATEGORISATION,
        ]

    def test_every_section_listed(self):
        assert list(get_settings_permissions("admin")) == list(SettingsSection)


class TestStrictMode:
    """Unknown names raise instead of denying."""

    def test_unknown_role_raises(self):
        with pytest.raises(PermissionConfigurationException) as exc_info:
            can_access("superuser", "categories", "read", strict=True)

        assert exc_info.value.code == ErrorCode.UNKNOWN_PERMISSION_NAME
        assert exc_info.value.details["value"] == "superuser"

    def test_unknown_section_raises(self):
        with pytest.raises(PermissionConfigurationException):
            can_access("admin", "billing", "read", strict=True)

    def test_cross_taxonomy_raises(self):
        with pytest.raises(PermissionConfigurationException):
            get_capabilities(SettingsRole.ADMIN, strict=True)

    def test_unknown_capability_raises(self):
        with pytest.raises(PermissionConfigurationException):
            has_capability("owner", "canLaunchRockets", strict=True)

    def test_absent_role_still_viewer(self):
        assert can_access(None, "taxYears", "read", strict=True) is True

    def test_strict_setting_raises_in_development(self, monkeypatch):
        monkeypatch.setattr(
            permissions_module, "settings",
            config.Settings(app_env="development", permissions_strict=True),
        )

        with pytest.raises(PermissionConfigurationException):
            can_access("superuser", "categories", "read")

    def test_strict_setting_ignored_in_production(self, monkeypatch):
        """Production never raises on unknown names, it denies."""
        monkeypatch.setattr(
            permissions_module, "settings",
            config.Settings(app_env="production", permissions_strict=True),
        )

        assert can_access("superuser", "categories", "read") is False
        assert has_capability("owner", "canLaunchRockets") is False


class TestTeamCapabilities:
    """Test team role capability records."""

    def test_owner_has_everything(self):
        assert all(get_capabilities("owner").to_dict().values())

    def test_only_owner_deletes(self):
        assert has_capability("owner", Capability.DELETE_DATA)
        assert not has_capability("admin", Capability.DELETE_DATA)
        assert not has_capability("member", Capability.DELETE_DATA)

    def test_member(self):
        capabilities = get_capabilities(TeamRole.MEMBER).to_dict()

        assert capabilities == {
            "canViewFinancials": True,
            "canEditTransactions": True,
            "canManageTeam": False,
            "canExportData": True,
            "canViewReports": True,
            "canManageSettings": False,
            "canDeleteData": False,
        }

    def test_viewer_is_read_only(self):
        assert has_capability("viewer", "canViewReports")
        assert not has_capability("viewer", "canEditTransactions")
        assert not has_capability("viewer", "canExportData")

    def test_absent_role_is_viewer(self):
        assert get_capabilities(None) == get_capabilities(TeamRole.VIEWER)

    def test_unknown_role_gets_nothing(self):
        assert get_capabilities("intern") == NO_CAPABILITIES
        assert not any(get_capabilities("intern").to_dict().values())

    def test_settings_role_not_accepted(self):
        """'accountant' is a settings role, not a team role."""
        assert get_capabilities("accountant") == NO_CAPABILITIES
        assert get_capabilities(SettingsRole.ADMIN) == NO_CAPABILITIES

    def test_unknown_capability_denied(self):
        assert has_capability("owner", "canLaunchRockets") is False


class TestRoleHierarchy:
    """Test team role ordering."""

    def test_levels(self):
        assert [get_team_role_level(role) for role in TeamRole] == [4, 3, 2, 1]
        assert get_team_role_level("intern") == 0

    def test_higher_or_equal(self):
        assert is_team_role_higher_or_equal("owner", "admin")
        assert is_team_role_higher_or_equal("member", "member")
        assert not is_team_role_higher_or_equal("viewer", "member")

    def test_higher_roles_have_superset_capabilities(self):
        ordered = [TeamRole.VIEWER, TeamRole.MEMBER, TeamRole.ADMIN, TeamRole.OWNER]
        for lower, higher in zip(ordered, ordered[1:]):
            low = get_capabilities(lower).to_dict()
            high = get_capabilities(higher).to_dict()
            assert all(high[name] for name, granted in low.items() if granted)
