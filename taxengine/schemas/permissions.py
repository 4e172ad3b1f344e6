"""
Nigeria Tax Engine - Permission Schemas

Pydantic schemas for permission matrix lookups.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel


class SectionAccessResponse(BaseModel):
    section: str
    can_read: bool
    can_write: bool


class SettingsPermissionsResponse(BaseModel):
    """Every settings section with the role's read/write pair."""
    role: str
    sections: List[SectionAccessResponse]


class TeamCapabilitiesResponse(BaseModel):
    """Capability record for a team role."""
    role: str
    level: int
    capabilities: Dict[str, bool]


class AccessCheckResponse(BaseModel):
    role: Optional[str] = None
    section: str
    action: str
    allowed: bool
