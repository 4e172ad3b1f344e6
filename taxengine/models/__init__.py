"""
Nigeria Tax Engine - Models Package

Enumerations shared by the permission matrix, the HTTP schemas and the tests.
"""

from taxengine.models.roles import (
    SettingsRole,
    TeamRole,
    SettingsSection,
    AccessAction,
    Capability,
)

__all__ = [
    "SettingsRole",
    "TeamRole",
    "SettingsSection",
    "AccessAction",
    "Capability",
]
