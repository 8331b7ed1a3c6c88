"""Workflow configuration models for the Nexus lifecycle engine."""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from nexus_engine.c1_entity_enums.entity_enums import TaskStatus, TicketStatus


class WorkflowConfig(BaseModel):
    """Declarative workflow: valid statuses and the transition table.

    Accepts either snake_case field names or the camelCase keys used by the
    configuration provider (``defaultStatus``, ``completionStatus``).
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    statuses: List[str] = Field(..., min_length=1, description="Ordered set of valid statuses")
    transitions: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="status -> permitted next statuses; empty or missing means terminal",
    )
    default_status: str = Field(..., description="Status given to newly created entities")
    completion_status: str = Field(..., description="Status that stamps a completion timestamp")

    @model_validator(mode="after")
    def _check_statuses(self) -> "WorkflowConfig":
        if len(set(self.statuses)) != len(self.statuses):
            raise ValueError(f"Duplicate statuses in workflow: {self.statuses}")

        known = set(self.statuses)
        if self.default_status not in known:
            raise ValueError(
                f"Invalid workflow config: default status '{self.default_status}' not in statuses"
            )
        if self.completion_status not in known:
            raise ValueError(
                f"Invalid workflow config: completion status '{self.completion_status}' not in statuses"
            )

        for source, targets in self.transitions.items():
            if source not in known:
                raise ValueError(f"Invalid workflow config: unknown transition source '{source}'")
            unknown = [t for t in targets if t not in known]
            if unknown:
                raise ValueError(
                    f"Invalid workflow config: '{source}' transitions to unknown statuses {unknown}"
                )
        return self

    def allowed_transitions(self, status: str) -> List[str]:
        """Statuses reachable from ``status`` in one step (excluding the no-op)."""
        return list(self.transitions.get(status, []))

    def is_terminal(self, status: str) -> bool:
        return len(self.transitions.get(status, [])) == 0

    def terminal_statuses(self) -> List[str]:
        return [s for s in self.statuses if self.is_terminal(s)]


_TASK_TRANSITIONS = {
    TaskStatus.TODO: [TaskStatus.IN_PROGRESS, TaskStatus.BLOCKED, TaskStatus.CANCELLED],
    TaskStatus.IN_PROGRESS: [TaskStatus.REVIEW, TaskStatus.BLOCKED, TaskStatus.TODO],
    TaskStatus.REVIEW: [TaskStatus.DONE, TaskStatus.IN_PROGRESS, TaskStatus.BLOCKED],
    TaskStatus.BLOCKED: [TaskStatus.TODO, TaskStatus.IN_PROGRESS],
    TaskStatus.DONE: [],  # Terminal state
    TaskStatus.CANCELLED: [],  # Terminal state
}

_TICKET_TRANSITIONS = {
    TicketStatus.OPEN: [TicketStatus.IN_PROGRESS, TicketStatus.PENDING, TicketStatus.CANCELLED],
    TicketStatus.IN_PROGRESS: [TicketStatus.PENDING, TicketStatus.RESOLVED, TicketStatus.OPEN],
    TicketStatus.PENDING: [TicketStatus.IN_PROGRESS, TicketStatus.RESOLVED, TicketStatus.OPEN],
    TicketStatus.RESOLVED: [TicketStatus.CLOSED, TicketStatus.OPEN],
    TicketStatus.CLOSED: [],  # Terminal state
    TicketStatus.CANCELLED: [],  # Terminal state
}


def _table_values(table):
    return {source.value: [target.value for target in targets] for source, targets in table.items()}


class TaskWorkflowConfig(WorkflowConfig):
    """Task workflow, defaulting to the stock board columns."""

    statuses: List[str] = Field(
        default_factory=lambda: [s.value for s in TaskStatus],
        min_length=1,
    )
    transitions: Dict[str, List[str]] = Field(default_factory=lambda: _table_values(_TASK_TRANSITIONS))
    default_status: str = TaskStatus.TODO.value
    completion_status: str = TaskStatus.DONE.value


class TicketWorkflowConfig(WorkflowConfig):
    """Ticket workflow, independent of the task status set."""

    statuses: List[str] = Field(
        default_factory=lambda: [s.value for s in TicketStatus],
        min_length=1,
    )
    transitions: Dict[str, List[str]] = Field(default_factory=lambda: _table_values(_TICKET_TRANSITIONS))
    default_status: str = TicketStatus.OPEN.value
    completion_status: str = TicketStatus.RESOLVED.value
