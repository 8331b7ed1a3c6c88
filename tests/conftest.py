"""Pytest configuration and shared fixtures for the lifecycle engine tests.

Every fixture builds plain snapshots; nothing here touches the environment
or the wall clock.
"""

from datetime import date, datetime

import pytest

from nexus_engine.c1_project_models.project import Project, ResourceAllocation
from nexus_engine.c1_task_models.task import Task
from nexus_engine.c1_workflow_models.workflow import TaskWorkflowConfig, TicketWorkflowConfig
from nexus_engine.c2_lifecycle_service.lifecycle_manager import EntityLifecycleManager


@pytest.fixture
def now():
    """Fixed 'current time' passed into every engine call."""
    return datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture
def task_workflow():
    return TaskWorkflowConfig()


@pytest.fixture
def ticket_workflow():
    return TicketWorkflowConfig()


@pytest.fixture
def manager():
    """Lifecycle manager with stock workflows and all features enabled."""
    return EntityLifecycleManager()


@pytest.fixture
def make_task(now):
    """Factory for task snapshots.

    Usage:
        def test_something(make_task):
            a = make_task("A", dependencies=["B"])
    """
    def _make(
        task_id,
        dependencies=(),
        status="todo",
        project_id="proj-1",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 12, 31),
        **extra,
    ):
        return Task(
            id=task_id,
            project_id=project_id,
            title=f"Task {task_id}",
            status=status,
            start_date=start_date,
            end_date=end_date,
            dependencies=list(dependencies),
            created_at=now,
            updated_at=now,
            **extra,
        )

    return _make


@pytest.fixture
def make_allocation():
    """Factory for resource allocations."""
    counter = {"n": 0}

    def _make(monthly_rate, start_date, end_date=None, team_id="team-1"):
        counter["n"] += 1
        return ResourceAllocation(
            id=f"alloc-{counter['n']}",
            team_id=team_id,
            monthly_rate=monthly_rate,
            start_date=start_date,
            end_date=end_date,
        )

    return _make


@pytest.fixture
def make_project(now):
    """Factory for project snapshots spanning 2024 by default."""
    def _make(
        budget_allocated=100000.0,
        status="active",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 12, 31),
        **extra,
    ):
        return Project(
            id=extra.pop("id", "proj-1"),
            name=extra.pop("name", "Website relaunch"),
            status=status,
            start_date=start_date,
            end_date=end_date,
            budget_allocated=budget_allocated,
            client_id=extra.pop("client_id", "client-1"),
            created_at=now,
            updated_at=now,
            **extra,
        )

    return _make
