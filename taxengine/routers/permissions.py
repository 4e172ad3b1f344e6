"""
Nigeria Tax Engine - Permissions Router

Read-only views of the settings and team permission matrices, for UI gating.
Unknown roles are answered with no access unless strict permissions are on.
"""

from typing import Optional

from fastapi import APIRouter, Query

from taxengine.schemas.permissions import (
    AccessCheckResponse,
    SectionAccessResponse,
    SettingsPermissionsResponse,
    TeamCapabilitiesResponse,
)
from taxengine.utils.permissions import (
    can_access,
    get_capabilities,
    get_settings_permissions,
    get_team_role_level,
)


router = APIRouter()


@router.get(
    "/settings/{role}",
    response_model=SettingsPermissionsResponse,
    summary="Settings permissions for a role",
)
async def settings_permissions(role: str):
    sections = get_settings_permissions(role)
    return SettingsPermissionsResponse(
        role=role,
        sections=[
            SectionAccessResponse(
                section=section.value,
                can_read=access.can_read,
                can_write=access.can_write,
            )
            for section, access in sections.items()
        ],
    )


@router.get(
    "/team/{role}",
    response_model=TeamCapabilitiesResponse,
    summary="Team capabilities for a role",
)
async def team_capabilities(role: str):
    return TeamCapabilitiesResponse(
        role=role,
        level=get_team_role_level(role),
        capabilities=get_capabilities(role).to_dict(),
    )


@router.get(
    "/check",
    response_model=AccessCheckResponse,
    summary="Check one settings permission",
)
async def check_access(
    section: str = Query(...),
    action: str = Query(...),
    role: Optional[str] = Query(None),
):
    return AccessCheckResponse(
        role=role,
        section=section,
        action=action,
        allowed=can_access(role, section, action),
    )
