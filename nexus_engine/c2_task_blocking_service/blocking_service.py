"""Service for reporting tasks blocked by unfinished dependencies."""

import logging
from typing import Any, Dict, List, Sequence

from nexus_engine.c1_lifecycle_errors.errors import IncompleteDependenciesError
from nexus_engine.c1_task_models.task import Task
from nexus_engine.c1_workflow_models.workflow import WorkflowConfig

logger = logging.getLogger(__name__)


class TaskBlockingService:
    """Answers "can this task be completed yet?" over a task snapshot."""

    @staticmethod
    def incomplete_dependencies(
        task: Task, all_tasks: Sequence[Task], config: WorkflowConfig
    ) -> List[str]:
        """Direct dependency ids that are missing or not yet completed.

        Only direct dependencies count; a dependency's own dependencies are
        its problem, not this task's.
        """
        tasks_by_id = {t.id: t for t in all_tasks}
        incomplete = []
        for dep_id in task.dependencies:
            dep_task = tasks_by_id.get(dep_id)
            if dep_task is None or dep_task.status != config.completion_status:
                incomplete.append(dep_id)
        return incomplete

    @staticmethod
    def check_task_blocked(
        task: Task, all_tasks: Sequence[Task], config: WorkflowConfig
    ) -> Dict[str, Any]:
        """Check if a task is blocked by its dependencies.

        Args:
            task: Task to check
            all_tasks: Tasks of the same project
            config: Task workflow configuration

        Returns:
            Dictionary with:
                - is_blocked: bool
                - blocking_task_ids: list of dependency ids not yet completed
                - blocking_tasks: list of dicts with dependency details
        """
        blocker_ids = TaskBlockingService.incomplete_dependencies(task, all_tasks, config)
        if not blocker_ids:
            return {
                "is_blocked": False,
                "blocking_task_ids": [],
                "blocking_tasks": [],
            }

        tasks_by_id = {t.id: t for t in all_tasks}
        blocker_details = []
        for dep_id in blocker_ids:
            dep_task = tasks_by_id.get(dep_id)
            if dep_task is None:
                logger.warning(f"Task {task.id} references non-existent task {dep_id}")
                blocker_details.append({"task_id": dep_id, "missing": True})
                continue
            blocker_details.append({
                "task_id": dep_task.id,
                "title": dep_task.title,
                "status": dep_task.status,
                "priority": dep_task.priority,
                "missing": False,
            })

        return {
            "is_blocked": True,
            "blocking_task_ids": blocker_ids,
            "blocking_tasks": blocker_details,
        }

    @staticmethod
    def ensure_can_complete(task: Task, all_tasks: Sequence[Task], config: WorkflowConfig) -> None:
        """Completion guard.

        Raises:
            IncompleteDependenciesError: If any direct dependency is not in the
                completion status
        """
        incomplete = TaskBlockingService.incomplete_dependencies(task, all_tasks, config)
        if incomplete:
            logger.warning(f"Task {task.id} cannot complete; waiting on {incomplete}")
            raise IncompleteDependenciesError(incomplete)

    @staticmethod
    def get_all_blocked_tasks(all_tasks: Sequence[Task], config: WorkflowConfig) -> List[Dict[str, Any]]:
        """Get every non-terminal task that still waits on a dependency.

        Returns:
            List of blocked task details with blocker information
        """
        results = []
        for task in all_tasks:
            if config.is_terminal(task.status):
                continue
            blocking_info = TaskBlockingService.check_task_blocked(task, all_tasks, config)
            if not blocking_info["is_blocked"]:
                continue
            results.append({
                "task_id": task.id,
                "title": task.title,
                "status": task.status,
                "priority": task.priority,
                "project_id": task.project_id,
                "blocking_task_ids": blocking_info["blocking_task_ids"],
                "blocking_tasks": blocking_info["blocking_tasks"],
            })

        logger.debug(f"{len(results)} blocked task(s) out of {len(all_tasks)}")
        return results
