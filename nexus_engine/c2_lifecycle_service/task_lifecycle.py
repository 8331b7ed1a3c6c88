"""Lifecycle rules for tasks and task groups."""

import logging
from datetime import date, datetime
from typing import List, Optional, Sequence

from nexus_engine.c1_lifecycle_errors.errors import EntityValidationError, FeatureDisabledError
from nexus_engine.c1_task_models.task import (
    Task,
    TaskCreate,
    TaskGroup,
    TaskGroupCreate,
    TaskUpdate,
)
from nexus_engine.c1_workflow_models.workflow import TaskWorkflowConfig, WorkflowConfig
from nexus_engine.c2_dependency_service.dependency_graph import DependencyGraph
from nexus_engine.c2_dependency_service.models import DependencyValidationResult
from nexus_engine.c2_lifecycle_service.patching import new_id, patch_changes, require_text
from nexus_engine.c2_task_blocking_service.blocking_service import TaskBlockingService
from nexus_engine.c2_workflow_service.workflow_engine import WorkflowEngine

logger = logging.getLogger(__name__)

# TaskUpdate fields an explicit None may clear
_NULLABLE_TASK_FIELDS = ("group_id", "assignee_team_id", "due_date")


def _check_dates(start_date: date, end_date: date, due_date: Optional[date]) -> None:
    if start_date >= end_date:
        raise EntityValidationError("Start date must be before end date", field="end_date")
    if due_date is not None and due_date < start_date:
        raise EntityValidationError("Due date cannot be before start date", field="due_date")


class TaskLifecycleService:
    """Creates, updates, transitions and deletes task snapshots.

    Every operation that touches dependencies takes the sibling tasks of
    the project so the graph rules can be checked against that snapshot.
    """

    def __init__(
        self,
        workflow: Optional[WorkflowConfig] = None,
        dependencies_enabled: bool = True,
        workflow_engine: Optional[WorkflowEngine] = None,
        dependency_graph: Optional[DependencyGraph] = None,
        blocking_service: Optional[TaskBlockingService] = None,
    ):
        """Initialize task lifecycle service.

        Args:
            workflow: Task workflow configuration
            dependencies_enabled: Feature gate for task dependencies
            workflow_engine: Engine applying status transitions
            dependency_graph: Graph validator for dependency sets
            blocking_service: Completion guard
        """
        self.workflow = workflow or TaskWorkflowConfig()
        self.dependencies_enabled = dependencies_enabled
        self.workflow_engine = workflow_engine or WorkflowEngine()
        self.dependency_graph = dependency_graph or DependencyGraph()
        self.blocking_service = blocking_service or TaskBlockingService()

    def can_transition(self, current: str, target: str) -> bool:
        return self.workflow_engine.can_transition(current, target, self.workflow)

    def validate_dependencies(self, task: Task, project_tasks: Sequence[Task]) -> DependencyValidationResult:
        return self.dependency_graph.validate(task, project_tasks)

    def dependents(self, task_id: str, all_tasks: Sequence[Task]) -> List[Task]:
        return self.dependency_graph.dependents(task_id, all_tasks)

    def create(self, payload: TaskCreate, project_tasks: Sequence[Task], now: datetime) -> Task:
        """Create a task in the workflow's default (or requested) status.

        Args:
            payload: Task creation data
            project_tasks: Existing tasks of the project, for dependency checks
            now: Creation timestamp

        Returns:
            Created task

        Raises:
            EntityValidationError: Missing title, bad dates or unknown status
            FeatureDisabledError: Dependencies supplied while the gate is off
            DependencyNotFoundError / CrossProjectDependencyError /
            CircularDependencyError: Dependency set rejected by the graph
            IncompleteDependenciesError: Created directly in the completion
                status with unfinished dependencies
        """
        require_text(payload.title, "title", "Task title")
        _check_dates(payload.start_date, payload.end_date, payload.due_date)

        status = payload.status or self.workflow.default_status
        if status not in self.workflow.statuses:
            raise EntityValidationError(
                f"Invalid status '{status}'. Valid statuses: {self.workflow.statuses}",
                field="status",
            )

        dependencies = list(dict.fromkeys(payload.dependencies))
        self._ensure_dependencies_allowed(dependencies)

        task = Task(
            id=new_id("task"),
            project_id=payload.project_id,
            group_id=payload.group_id,
            title=payload.title,
            description=payload.description,
            status=status,
            priority=payload.priority,
            assignee_team_id=payload.assignee_team_id,
            assignee_member_ids=list(payload.assignee_member_ids),
            start_date=payload.start_date,
            end_date=payload.end_date,
            due_date=payload.due_date,
            dependencies=dependencies,
            created_at=now,
            updated_at=now,
            created_by=payload.created_by,
            completed_at=now if status == self.workflow.completion_status else None,
        )

        if dependencies:
            self.dependency_graph.validate_or_raise(task, project_tasks)
        if status == self.workflow.completion_status:
            self.blocking_service.ensure_can_complete(task, project_tasks, self.workflow)

        logger.info(f"Created task {task.id} in project {task.project_id} with status {status}")
        return task

    def update(self, task: Task, patch: TaskUpdate, project_tasks: Sequence[Task], now: datetime) -> Task:
        """Apply a patch to a task and return the new snapshot.

        A status change in the patch goes through ``update_status`` after the
        other fields are applied, so the completion guard sees the patched
        dependency set.
        """
        changes = patch_changes(patch, nullable=_NULLABLE_TASK_FIELDS)
        if not changes:
            return task

        target_status = changes.pop("status", None)

        if "title" in changes:
            require_text(changes["title"], "title", "Task title")

        if {"start_date", "end_date", "due_date"} & changes.keys():
            _check_dates(
                changes.get("start_date", task.start_date),
                changes.get("end_date", task.end_date),
                changes.get("due_date", task.due_date),
            )

        updated = task
        if "dependencies" in changes:
            changes["dependencies"] = list(dict.fromkeys(changes["dependencies"]))
            if changes["dependencies"] != task.dependencies:
                self._ensure_dependencies_allowed(changes["dependencies"])
                candidate = task.model_copy(update={"dependencies": changes["dependencies"]})
                self.dependency_graph.validate_or_raise(candidate, project_tasks)

        if changes:
            changes["updated_at"] = now
            updated = task.model_copy(update=changes)

        if target_status is not None and target_status != task.status:
            updated = self.update_status(updated, target_status, project_tasks, now)

        logger.info(f"Updated task {task.id}")
        return updated

    def update_status(self, task: Task, target: str, project_tasks: Sequence[Task], now: datetime) -> Task:
        """Move a task through the workflow.

        Entering the completion status first requires every direct
        dependency to be completed already.

        Raises:
            IncompleteDependenciesError: Completion with unfinished dependencies
            InvalidTransitionError: Workflow forbids the move
        """
        if target == task.status:
            return task
        if target == self.workflow.completion_status:
            self.blocking_service.ensure_can_complete(task, project_tasks, self.workflow)
        return self.workflow_engine.transition(task, target, self.workflow, now)

    def delete(self, task: Task, all_tasks: Sequence[Task]) -> None:
        """Certify a task for deletion.

        Dependent tasks are never cascaded; the caller removes those edges or
        deletes the dependents first.

        Raises:
            DependentsExistError: Other tasks still depend on this one
        """
        self.dependency_graph.ensure_deletable(task.id, all_tasks)
        logger.info(f"Task {task.id} cleared for deletion")

    def create_group(
        self,
        payload: TaskGroupCreate,
        now: datetime,
        existing_groups: Optional[Sequence[TaskGroup]] = None,
    ) -> TaskGroup:
        """Create a task group (epic), optionally nested under a parent.

        When ``existing_groups`` is supplied the parent must be one of them
        and belong to the same project.
        """
        require_text(payload.name, "name", "Group name")

        if payload.parent_group_id is not None and existing_groups is not None:
            parent = next((g for g in existing_groups if g.id == payload.parent_group_id), None)
            if parent is None:
                raise EntityValidationError(
                    f"Parent group not found: {payload.parent_group_id}", field="parent_group_id"
                )
            if parent.project_id != payload.project_id:
                raise EntityValidationError(
                    f"Parent group {parent.id} belongs to a different project", field="parent_group_id"
                )

        group = TaskGroup(
            id=new_id("group"),
            project_id=payload.project_id,
            name=payload.name,
            description=payload.description,
            parent_group_id=payload.parent_group_id,
            created_at=now,
            updated_at=now,
        )
        logger.info(f"Created task group {group.id} in project {group.project_id}")
        return group

    def _ensure_dependencies_allowed(self, dependencies: List[str]) -> None:
        if dependencies and not self.dependencies_enabled:
            raise FeatureDisabledError("taskDependenciesEnabled")
