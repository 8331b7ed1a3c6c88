"""Lifecycle rules for projects and their budget ledgers."""

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from nexus_engine.c1_entity_enums.entity_enums import HealthStatus, ProjectStatus
from nexus_engine.c1_lifecycle_errors.errors import (
    EntityValidationError,
    ImmutableStateError,
    InvalidTransitionError,
)
from nexus_engine.c1_project_models.project import (
    AllocationCreate,
    BudgetExpense,
    Deliverable,
    ExpenseCreate,
    Project,
    ProjectCreate,
    ProjectUpdate,
    ResourceAllocation,
)
from nexus_engine.c1_task_models.task import Task
from nexus_engine.c1_workflow_models.workflow import TaskWorkflowConfig, WorkflowConfig
from nexus_engine.c2_budget_service.ledger import ProjectLedger
from nexus_engine.c2_budget_service.models import BudgetSummary
from nexus_engine.c2_lifecycle_service.patching import new_id, patch_changes, require_text

logger = logging.getLogger(__name__)

_PROJECT_STATUSES = {s.value for s in ProjectStatus}


class ProjectLifecycleService:
    """Creates, updates, archives and deletes project snapshots.

    Archived projects are frozen: every update path rejects them, and only
    ``delete`` accepts them.
    """

    def __init__(
        self,
        ledger: Optional[ProjectLedger] = None,
        task_workflow: Optional[WorkflowConfig] = None,
        default_currency: str = "USD",
    ):
        """Initialize project lifecycle service.

        Args:
            ledger: Ledger used for spend and health
            task_workflow: Task workflow, used to tell terminal tasks apart
            default_currency: Currency for projects created without one
        """
        self.ledger = ledger or ProjectLedger()
        self.task_workflow = task_workflow or TaskWorkflowConfig()
        self.default_currency = default_currency

    @staticmethod
    def validate_dates(start_date: date, end_date: date) -> bool:
        """Start date must be strictly before end date."""
        return start_date < end_date

    @staticmethod
    def can_archive(project: Project) -> bool:
        return project.status == ProjectStatus.ACTIVE.value

    @staticmethod
    def can_delete(project: Project) -> bool:
        return project.status == ProjectStatus.ARCHIVED.value

    def create(self, payload: ProjectCreate, now: datetime) -> Project:
        """Create a new active project with empty budget ledgers.

        Raises:
            EntityValidationError: Missing name, inverted dates or a
                non-positive budget
        """
        require_text(payload.name, "name", "Project name")
        if not self.validate_dates(payload.start_date, payload.end_date):
            raise EntityValidationError("Start date must be before end date", field="end_date")
        if payload.budget_allocated <= 0:
            raise EntityValidationError("Budget must be greater than zero", field="budget_allocated")

        project = Project(
            id=new_id("proj"),
            name=payload.name,
            description=payload.description,
            status=ProjectStatus.ACTIVE.value,
            start_date=payload.start_date,
            end_date=payload.end_date,
            budget_allocated=payload.budget_allocated,
            currency=payload.currency or self.default_currency,
            expenses=[],
            resource_allocations=[],
            deliverables=[
                Deliverable(
                    id=new_id("deliverable"),
                    title=d.title,
                    description=d.description,
                    is_completed=False,
                    due_date=d.due_date,
                )
                for d in payload.deliverables
            ],
            assigned_team_ids=list(payload.assigned_team_ids),
            client_id=payload.client_id,
            created_at=now,
            updated_at=now,
            created_by=payload.created_by,
        )
        logger.info(f"Created project {project.id} ({project.name})")
        return project

    def update(self, project: Project, patch: ProjectUpdate, now: datetime) -> Project:
        """Apply a patch to a project and return the new snapshot.

        Raises:
            ImmutableStateError: Project is archived
            EntityValidationError: Patch breaks a date or budget invariant, or
                tries to archive through a plain update
        """
        self._ensure_mutable(project)
        changes = patch_changes(patch)
        if not changes:
            return project

        if "status" in changes:
            status = changes["status"]
            if status not in _PROJECT_STATUSES:
                raise EntityValidationError(f"Invalid project status '{status}'", field="status")
            if status == ProjectStatus.ARCHIVED.value:
                raise EntityValidationError("Use archive to archive a project", field="status")

        if "start_date" in changes or "end_date" in changes:
            start = changes.get("start_date", project.start_date)
            end = changes.get("end_date", project.end_date)
            if not self.validate_dates(start, end):
                raise EntityValidationError("Start date must be before end date", field="end_date")

        if "budget_allocated" in changes and changes["budget_allocated"] <= 0:
            raise EntityValidationError("Budget must be greater than zero", field="budget_allocated")

        if "name" in changes:
            require_text(changes["name"], "name", "Project name")

        changes["updated_at"] = now
        logger.info(f"Updated project {project.id}: {sorted(k for k in changes if k != 'updated_at')}")
        return project.model_copy(update=changes)

    def archive(self, project: Project, now: datetime) -> Project:
        """Archive an active project.

        Raises:
            ImmutableStateError: Project is already archived
            InvalidTransitionError: Project is not active (e.g. still a draft)
        """
        if project.is_archived:
            raise ImmutableStateError(project.id, project.status, "Project is already archived")
        if not self.can_archive(project):
            raise InvalidTransitionError(project.status, ProjectStatus.ARCHIVED.value)

        logger.info(f"Archived project {project.id}")
        return project.model_copy(update={
            "status": ProjectStatus.ARCHIVED.value,
            "archived_at": now,
            "updated_at": now,
        })

    def delete(self, project: Project) -> None:
        """Certify a project for permanent removal.

        Raises:
            ImmutableStateError: Project has not been archived first
        """
        if not self.can_delete(project):
            logger.warning(f"Refused to delete project {project.id} in status {project.status}")
            raise ImmutableStateError(
                project.id, project.status, "Project must be archived before deletion"
            )
        logger.info(f"Project {project.id} cleared for deletion")

    def record_expense(self, project: Project, payload: ExpenseCreate, now: datetime) -> Project:
        """Append a manual expense to the project ledger."""
        self._ensure_mutable(project)
        require_text(payload.category, "category", "Expense category")

        expense = BudgetExpense(
            id=new_id("expense"),
            category=payload.category,
            amount=payload.amount,
            date=payload.date,
            description=payload.description,
            created_by=payload.created_by,
            created_at=now,
        )
        logger.info(f"Recorded expense {expense.id} of {expense.amount} on project {project.id}")
        return project.model_copy(update={
            "expenses": list(project.expenses) + [expense],
            "updated_at": now,
        })

    def allocate_resource(self, project: Project, payload: AllocationCreate, now: datetime) -> Project:
        """Commit a team to the project at a monthly rate."""
        self._ensure_mutable(project)
        if payload.end_date is not None and payload.end_date <= payload.start_date:
            raise EntityValidationError("Allocation end date must be after its start date", field="end_date")

        allocation = ResourceAllocation(
            id=new_id("alloc"),
            team_id=payload.team_id,
            monthly_rate=payload.monthly_rate,
            start_date=payload.start_date,
            end_date=payload.end_date,
            notes=payload.notes,
        )
        logger.info(
            f"Allocated team {allocation.team_id} to project {project.id} at {allocation.monthly_rate}/month"
        )
        return project.model_copy(update={
            "resource_allocations": list(project.resource_allocations) + [allocation],
            "updated_at": now,
        })

    def complete_deliverable(self, project: Project, deliverable_id: str, now: datetime) -> Project:
        """Mark a deliverable completed as of ``now``."""
        self._ensure_mutable(project)
        if not any(d.id == deliverable_id for d in project.deliverables):
            raise EntityValidationError(f"Deliverable not found: {deliverable_id}", field="deliverables")

        deliverables = [
            d.model_copy(update={"is_completed": True, "completed_date": now.date()})
            if d.id == deliverable_id else d
            for d in project.deliverables
        ]
        return project.model_copy(update={"deliverables": deliverables, "updated_at": now})

    def total_spend(self, project: Project, as_of: date) -> float:
        return self.ledger.total_spend(project, as_of)

    def remaining_budget(self, project: Project, as_of: date) -> float:
        return self.ledger.remaining_budget(project, as_of)

    def health(self, project: Project, tasks: Sequence[Task], as_of: date) -> HealthStatus:
        return self.ledger.health(project, tasks, as_of, self.task_workflow)

    def budget_summary(self, project: Project, tasks: Sequence[Task], as_of: date) -> BudgetSummary:
        return self.ledger.summarize(project, tasks, as_of, self.task_workflow)

    @staticmethod
    def _ensure_mutable(project: Project) -> None:
        if project.is_archived:
            logger.warning(f"Rejected change to archived project {project.id}")
            raise ImmutableStateError(project.id, project.status, "Cannot update archived project")
