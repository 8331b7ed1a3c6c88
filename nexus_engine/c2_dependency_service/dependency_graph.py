"""Dependency graph validation for tasks within a project."""

import logging
from typing import Dict, List, Sequence

from nexus_engine.c1_entity_enums.entity_enums import ErrorKind
from nexus_engine.c1_lifecycle_errors.errors import (
    CircularDependencyError,
    CrossProjectDependencyError,
    DependencyNotFoundError,
    DependentsExistError,
)
from nexus_engine.c1_task_models.task import Task
from nexus_engine.c2_dependency_service.models import DependencyIssue, DependencyValidationResult

logger = logging.getLogger(__name__)

# DFS node colouring
_UNVISITED = 0
_ON_PATH = 1
_DONE = 2


class DependencyGraph:
    """Validates "must finish before" edges and answers reverse queries.

    Stateless: every call works on the task collection it is given.
    """

    @staticmethod
    def validate(task: Task, all_tasks: Sequence[Task]) -> DependencyValidationResult:
        """Validate a candidate task's dependency set.

        Checks existence, project scope and acyclicity. The candidate's own
        ``dependencies`` replace whatever copy of it ``all_tasks`` holds, so a
        proposed edit can be validated before it is stored.

        Args:
            task: Candidate task snapshot
            all_tasks: Tasks to resolve dependency ids against

        Returns:
            DependencyValidationResult with one issue per unresolved or
            cross-project id, plus at most one circular-dependency issue
        """
        tasks_by_id: Dict[str, Task] = {t.id: t for t in all_tasks}
        errors: List[DependencyIssue] = []

        for dep_id in task.dependencies:
            dep_task = tasks_by_id.get(dep_id)
            if dep_task is None:
                errors.append(DependencyIssue(
                    kind=ErrorKind.DEPENDENCY_NOT_FOUND,
                    dependency_id=dep_id,
                    message=f"Dependency {dep_id} not found",
                ))
            elif dep_task.project_id != task.project_id:
                errors.append(DependencyIssue(
                    kind=ErrorKind.CROSS_PROJECT_DEPENDENCY,
                    dependency_id=dep_id,
                    message=f"Dependency {dep_id} is in a different project",
                ))

        if DependencyGraph.has_cycle(task, all_tasks):
            errors.append(DependencyIssue(
                kind=ErrorKind.CIRCULAR_DEPENDENCY,
                message="Circular dependency detected",
            ))

        if errors:
            logger.debug(f"Dependency validation failed for {task.id}: {[e.message for e in errors]}")

        return DependencyValidationResult(valid=not errors, errors=errors)

    @staticmethod
    def validate_or_raise(task: Task, all_tasks: Sequence[Task]) -> None:
        """Validate and raise the typed error for the first failing rule.

        Raises:
            DependencyNotFoundError: Unresolved ids (all of them)
            CrossProjectDependencyError: Ids resolving to another project
            CircularDependencyError: The dependency set closes a cycle
        """
        result = DependencyGraph.validate(task, all_tasks)
        if result.valid:
            return

        missing = [e.dependency_id for e in result.errors if e.kind == ErrorKind.DEPENDENCY_NOT_FOUND]
        if missing:
            raise DependencyNotFoundError(missing)

        foreign = [e.dependency_id for e in result.errors if e.kind == ErrorKind.CROSS_PROJECT_DEPENDENCY]
        if foreign:
            raise CrossProjectDependencyError(foreign)

        raise CircularDependencyError(task.id)

    @staticmethod
    def has_cycle(task: Task, all_tasks: Sequence[Task]) -> bool:
        """Depth-first search for a cycle reachable from ``task``.

        Tasks are laid out in an index arena with integer adjacency lists and
        walked with an explicit work stack, so graph depth is not bounded by
        the interpreter's recursion limit. Unresolved ids are skipped; they
        are reported by the existence check. Stops at the first cycle.
        """
        index: Dict[str, int] = {}
        arena: List[Task] = []
        for t in all_tasks:
            if t.id not in index:
                index[t.id] = len(arena)
                arena.append(t)
        if task.id in index:
            arena[index[task.id]] = task
        else:
            index[task.id] = len(arena)
            arena.append(task)

        adjacency: List[List[int]] = [
            [index[dep_id] for dep_id in t.dependencies if dep_id in index]
            for t in arena
        ]

        state = [_UNVISITED] * len(arena)
        root = index[task.id]
        state[root] = _ON_PATH
        stack = [(root, 0)]

        while stack:
            node, position = stack[-1]
            children = adjacency[node]
            if position == len(children):
                stack.pop()
                state[node] = _DONE
                continue

            stack[-1] = (node, position + 1)
            child = children[position]
            if state[child] == _ON_PATH:
                logger.debug(f"Cycle closes at {arena[child].id} while validating {task.id}")
                return True
            if state[child] == _DONE:
                continue  # Already proven cycle-free

            state[child] = _ON_PATH
            stack.append((child, 0))

        return False

    @staticmethod
    def would_create_cycle(task_id: str, dependency_id: str, all_tasks: Sequence[Task]) -> bool:
        """Check whether adding the edge ``task_id -> dependency_id`` closes a cycle."""
        task = next((t for t in all_tasks if t.id == task_id), None)
        if task is None:
            return False
        if dependency_id in task.dependencies:
            return DependencyGraph.has_cycle(task, all_tasks)
        candidate = task.model_copy(update={"dependencies": task.dependencies + [dependency_id]})
        return DependencyGraph.has_cycle(candidate, all_tasks)

    @staticmethod
    def dependents(task_id: str, all_tasks: Sequence[Task]) -> List[Task]:
        """Get tasks that list ``task_id`` as a direct dependency."""
        return [t for t in all_tasks if task_id in t.dependencies]

    @staticmethod
    def ensure_deletable(task_id: str, all_tasks: Sequence[Task]) -> None:
        """Deletion guard: nothing may still depend on the task.

        Raises:
            DependentsExistError: If any task lists ``task_id`` as a dependency
        """
        dependent_tasks = DependencyGraph.dependents(task_id, all_tasks)
        if dependent_tasks:
            logger.warning(f"Task {task_id} has {len(dependent_tasks)} dependent task(s); delete blocked")
            raise DependentsExistError(len(dependent_tasks))
