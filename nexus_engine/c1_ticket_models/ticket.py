"""Ticket models for the Nexus lifecycle engine."""

from datetime import datetime
from typing import ClassVar, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from nexus_engine.c1_entity_enums.entity_enums import Priority, TicketType


class Ticket(BaseModel):
    """Ticket, inquiry or backlog item, optionally linked to project work."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    COMPLETION_TIMESTAMP_FIELD: ClassVar[str] = "resolved_at"

    id: str  # Format: ticket-{uuid}

    # Classification
    type: TicketType
    status: str  # Based on the ticket workflow (fully configurable)
    priority: Priority = Field(default=Priority.MEDIUM, validate_default=True)

    # Content
    title: str
    description: str = ""

    # Links & References
    project_id: Optional[str] = None
    linked_task_ids: List[str] = Field(default_factory=list)
    linked_milestone_ids: List[str] = Field(default_factory=list)

    # Reporter
    reporter_name: str
    reporter_email: Optional[str] = None
    reporter_id: Optional[str] = None

    # Assignment
    assigned_team_id: Optional[str] = None
    assigned_member_ids: List[str] = Field(default_factory=list)

    # Resolution
    resolution: Optional[str] = None
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[str] = None

    created_at: datetime
    updated_at: datetime


class TicketCreate(BaseModel):
    """Payload for creating a ticket, typically from the client portal."""

    model_config = ConfigDict(use_enum_values=True)

    type: TicketType
    title: str
    description: str = ""
    priority: Priority = Field(default=Priority.MEDIUM, validate_default=True)
    project_id: Optional[str] = None
    reporter_name: str
    reporter_email: Optional[str] = None
    reporter_id: Optional[str] = None
    linked_task_ids: List[str] = Field(default_factory=list)
    linked_milestone_ids: List[str] = Field(default_factory=list)


class TicketUpdate(BaseModel):
    """Optional-field patch for a ticket. Reporter details are not patchable."""

    model_config = ConfigDict(use_enum_values=True)

    type: Optional[TicketType] = None
    status: Optional[str] = None
    priority: Optional[Priority] = None
    title: Optional[str] = None
    description: Optional[str] = None
    project_id: Optional[str] = None
    linked_task_ids: Optional[List[str]] = None
    linked_milestone_ids: Optional[List[str]] = None
    assigned_team_id: Optional[str] = None
    assigned_member_ids: Optional[List[str]] = None
