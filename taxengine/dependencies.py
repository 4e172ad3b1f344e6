"""
Nigeria Tax Engine - FastAPI Dependencies

Role-based access dependencies. Session handling lives upstream: the gateway
resolves the caller and forwards the settings role in the X-Settings-Role
header. A missing header is treated as the viewer role.
"""

from typing import Optional

from fastapi import Depends, Header

from taxengine.models.roles import AccessAction, SettingsSection
from taxengine.utils.error_handling import InsufficientPermissionsException
from taxengine.utils.permissions import can_access


async def get_settings_role(
    x_settings_role: Optional[str] = Header(None),
) -> Optional[str]:
    """Settings role forwarded by the gateway, if any."""
    return x_settings_role


def require_settings_access(section: SettingsSection, action: AccessAction):
    """
    Require read or write access to a settings section.

    Usage:
        @router.post("/auto-categorize")
        async def run(
            role: str = Depends(require_settings_access(
                SettingsSection.AUTO_CATEGORISATION, AccessAction.WRITE,
            ))
        ):
            ...
    """
    async def access_checker(
        role: Optional[str] = Depends(get_settings_role),
    ) -> Optional[str]:
        if not can_access(role, section, action):
            raise InsufficientPermissionsException(
                required_permission=f"{section.value}:{action.value}",
                user_role=role or None,
            )
        return role

    return access_checker
