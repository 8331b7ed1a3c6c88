"""Task and task group models for the Nexus lifecycle engine."""

from datetime import date, datetime
from typing import ClassVar, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nexus_engine.c1_entity_enums.entity_enums import Priority


def _unique(ids: List[str]) -> List[str]:
    return list(dict.fromkeys(ids))


class Task(BaseModel):
    """Task snapshot: a unit of work inside a project.

    ``dependencies`` lists the ids of tasks that must be completed first;
    across a project they form a directed acyclic graph.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    # Workflow engine stamps this field on entering the completion status
    COMPLETION_TIMESTAMP_FIELD: ClassVar[str] = "completed_at"

    id: str  # Format: task-{uuid}
    project_id: str
    group_id: Optional[str] = None

    title: str
    description: str = ""

    status: str
    priority: Priority = Field(default=Priority.MEDIUM, validate_default=True)

    assignee_team_id: Optional[str] = None
    assignee_member_ids: List[str] = Field(default_factory=list)

    start_date: date
    end_date: date
    due_date: Optional[date] = None

    dependencies: List[str] = Field(default_factory=list)

    created_at: datetime
    updated_at: datetime
    created_by: Optional[str] = None
    completed_at: Optional[datetime] = None

    @field_validator("dependencies")
    @classmethod
    def _dedupe_dependencies(cls, value: List[str]) -> List[str]:
        return _unique(value)


class TaskGroup(BaseModel):
    """Group / epic of related tasks. Organizational only."""

    model_config = ConfigDict(frozen=True)

    id: str  # Format: group-{uuid}
    project_id: str
    name: str
    description: Optional[str] = None
    parent_group_id: Optional[str] = None  # For nested groups
    created_at: datetime
    updated_at: datetime


class TaskCreate(BaseModel):
    """Payload for creating a task."""

    model_config = ConfigDict(use_enum_values=True)

    project_id: str
    group_id: Optional[str] = None
    title: str
    description: str = ""
    status: Optional[str] = None  # Falls back to the workflow default
    priority: Priority = Field(default=Priority.MEDIUM, validate_default=True)
    assignee_team_id: Optional[str] = None
    assignee_member_ids: List[str] = Field(default_factory=list)
    start_date: date
    end_date: date
    due_date: Optional[date] = None
    dependencies: List[str] = Field(default_factory=list)
    created_by: Optional[str] = None


class TaskUpdate(BaseModel):
    """Optional-field patch for a task."""

    model_config = ConfigDict(use_enum_values=True)

    group_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[Priority] = None
    assignee_team_id: Optional[str] = None
    assignee_member_ids: Optional[List[str]] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    due_date: Optional[date] = None
    dependencies: Optional[List[str]] = None


class TaskGroupCreate(BaseModel):
    """Payload for creating a task group."""

    project_id: str
    name: str
    description: Optional[str] = None
    parent_group_id: Optional[str] = None
