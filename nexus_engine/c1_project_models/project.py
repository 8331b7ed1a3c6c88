"""Project, budget and resource models for the Nexus lifecycle engine."""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from nexus_engine.c1_entity_enums.entity_enums import ProjectStatus


class Deliverable(BaseModel):
    """Expected deliverable the client receives on completion."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: Optional[str] = None
    is_completed: bool = False
    due_date: Optional[dt.date] = None
    completed_date: Optional[dt.date] = None


class BudgetExpense(BaseModel):
    """Manual expense recorded against the project budget. Append-only."""

    model_config = ConfigDict(frozen=True)

    id: str
    category: str
    amount: float = Field(..., ge=0)
    date: dt.date
    description: str = ""
    created_by: Optional[str] = None
    created_at: dt.datetime


class ResourceAllocation(BaseModel):
    """Recurring monthly cost committed to a project for a team.

    An allocation without ``end_date`` is ongoing.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    team_id: str
    monthly_rate: float = Field(..., ge=0)
    start_date: dt.date
    end_date: Optional[dt.date] = None
    notes: Optional[str] = None


class ProjectWindow(BaseModel):
    """Date range a project bills within."""

    model_config = ConfigDict(frozen=True)

    start_date: dt.date
    end_date: dt.date


class Project(BaseModel):
    """Project snapshot with budget ledger and resource allocations."""

    model_config = ConfigDict(frozen=True)

    id: str  # Format: proj-{uuid}
    name: str
    description: str = ""
    status: str = ProjectStatus.ACTIVE.value

    # Timeline
    start_date: dt.date
    end_date: dt.date

    # Budget tracking
    budget_allocated: float = Field(..., gt=0)
    currency: str = "USD"
    expenses: List[BudgetExpense] = Field(default_factory=list)
    resource_allocations: List[ResourceAllocation] = Field(default_factory=list)

    deliverables: List[Deliverable] = Field(default_factory=list)
    assigned_team_ids: List[str] = Field(default_factory=list)
    client_id: str

    # Metadata
    created_at: dt.datetime
    updated_at: dt.datetime
    created_by: Optional[str] = None
    archived_at: Optional[dt.datetime] = None

    @property
    def window(self) -> ProjectWindow:
        return ProjectWindow(start_date=self.start_date, end_date=self.end_date)

    @property
    def is_archived(self) -> bool:
        return self.status == ProjectStatus.ARCHIVED.value


class DeliverableCreate(BaseModel):
    """Deliverable as supplied on project creation."""

    title: str
    description: Optional[str] = None
    due_date: Optional[dt.date] = None


class ProjectCreate(BaseModel):
    """Payload for creating a project (generated fields excluded)."""

    name: str
    description: str = ""
    start_date: dt.date
    end_date: dt.date
    budget_allocated: float
    currency: Optional[str] = None  # Falls back to the configured default currency
    client_id: str
    assigned_team_ids: List[str] = Field(default_factory=list)
    deliverables: List[DeliverableCreate] = Field(default_factory=list)
    created_by: Optional[str] = None


class ProjectUpdate(BaseModel):
    """Optional-field patch. Only fields the caller sets count as changes."""

    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    budget_allocated: Optional[float] = None
    currency: Optional[str] = None
    deliverables: Optional[List[Deliverable]] = None
    assigned_team_ids: Optional[List[str]] = None
    client_id: Optional[str] = None


class ExpenseCreate(BaseModel):
    """Payload for recording a manual expense."""

    category: str
    amount: float = Field(..., ge=0)
    date: dt.date
    description: str = ""
    created_by: Optional[str] = None


class AllocationCreate(BaseModel):
    """Payload for committing a team to a project at a monthly rate."""

    team_id: str
    monthly_rate: float = Field(..., ge=0)
    start_date: dt.date
    end_date: Optional[dt.date] = None
    notes: Optional[str] = None
