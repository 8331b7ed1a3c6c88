"""Team models for the Nexus lifecycle engine."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TeamMember(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    role: Optional[str] = None  # e.g. "Developer", "Designer", "PM"


class Team(BaseModel):
    """Team that can be assigned to projects, allocations and tasks."""

    model_config = ConfigDict(frozen=True)

    id: str  # Format: team-{uuid}
    name: str
    description: Optional[str] = None
    members: List[TeamMember] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class TeamMemberCreate(BaseModel):
    name: str
    email: str
    role: Optional[str] = None


class TeamCreate(BaseModel):
    name: str
    description: Optional[str] = None
    members: List[TeamMemberCreate] = Field(default_factory=list)


class TeamUpdate(BaseModel):
    """Optional-field patch for a team."""

    name: Optional[str] = None
    description: Optional[str] = None
    members: Optional[List[TeamMember]] = None
