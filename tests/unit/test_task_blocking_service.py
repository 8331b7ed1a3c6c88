"""Unit tests for TaskBlockingService."""

import pytest

from nexus_engine.c1_lifecycle_errors.errors import IncompleteDependenciesError
from nexus_engine.c2_task_blocking_service.blocking_service import TaskBlockingService


class TestCheckTaskBlocked:
    def test_no_dependencies_not_blocked(self, make_task, task_workflow):
        task = make_task("A")

        info = TaskBlockingService.check_task_blocked(task, [task], task_workflow)

        assert info == {"is_blocked": False, "blocking_task_ids": [], "blocking_tasks": []}

    def test_blocked_by_unfinished_dependency(self, make_task, task_workflow):
        dep = make_task("B", status="in-progress")
        task = make_task("A", ["B"])

        info = TaskBlockingService.check_task_blocked(task, [task, dep], task_workflow)

        assert info["is_blocked"] is True
        assert info["blocking_task_ids"] == ["B"]
        assert info["blocking_tasks"][0]["status"] == "in-progress"
        assert info["blocking_tasks"][0]["missing"] is False

    def test_missing_dependency_counts_as_blocker(self, make_task, task_workflow):
        task = make_task("A", ["ghost"])

        info = TaskBlockingService.check_task_blocked(task, [task], task_workflow)

        assert info["blocking_task_ids"] == ["ghost"]
        assert info["blocking_tasks"] == [{"task_id": "ghost", "missing": True}]

    def test_cancelled_dependency_still_blocks(self, make_task, task_workflow):
        """Only the completion status satisfies a dependency."""
        dep = make_task("B", status="cancelled")
        task = make_task("A", ["B"])

        assert TaskBlockingService.incomplete_dependencies(task, [task, dep], task_workflow) == ["B"]

    def test_only_direct_dependencies_count(self, make_task, task_workflow):
        tasks = [make_task("A", ["B"]), make_task("B", ["C"], status="done"), make_task("C")]

        assert TaskBlockingService.incomplete_dependencies(tasks[0], tasks, task_workflow) == []


class TestEnsureCanComplete:
    def test_raises_with_incomplete_ids(self, make_task, task_workflow):
        tasks = [make_task("A", ["B", "C"]), make_task("B", status="done"), make_task("C", status="review")]

        with pytest.raises(IncompleteDependenciesError) as exc_info:
            TaskBlockingService.ensure_can_complete(tasks[0], tasks, task_workflow)

        assert exc_info.value.dependency_ids == ["C"]
        assert "1 dependency(ies) not completed" in str(exc_info.value)

    def test_passes_when_all_done(self, make_task, task_workflow):
        tasks = [make_task("A", ["B"]), make_task("B", status="done")]
        TaskBlockingService.ensure_can_complete(tasks[0], tasks, task_workflow)


class TestGetAllBlockedTasks:
    def test_lists_only_open_blocked_tasks(self, make_task, task_workflow):
        tasks = [
            make_task("A", ["C"]),
            make_task("B", ["C"], status="cancelled"),
            make_task("C", status="in-progress"),
            make_task("D", ["E"]),
            make_task("E", status="done"),
        ]

        blocked = TaskBlockingService.get_all_blocked_tasks(tasks, task_workflow)

        assert [b["task_id"] for b in blocked] == ["A"]
        assert blocked[0]["blocking_task_ids"] == ["C"]
        assert blocked[0]["project_id"] == "proj-1"
