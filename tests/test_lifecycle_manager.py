"""Tests for EntityLifecycleManager wiring and end-to-end flows."""

from datetime import date, timedelta

import pytest

from nexus_engine.c1_entity_enums.entity_enums import HealthStatus
from nexus_engine.c1_lifecycle_errors.errors import (
    FeatureDisabledError,
    IncompleteDependenciesError,
    LifecycleError,
)
from nexus_engine.c1_project_models.project import AllocationCreate, ProjectCreate
from nexus_engine.c1_task_models.task import TaskCreate
from nexus_engine.c1_ticket_models.ticket import TicketCreate
from nexus_engine.c1_workflow_models.workflow import TaskWorkflowConfig, WorkflowConfig
from nexus_engine.core.config import EngineSettings, FeatureFlags
from nexus_engine.c2_lifecycle_service.lifecycle_manager import EntityLifecycleManager


class TestWiring:
    def test_defaults(self, manager):
        assert manager.task_workflow == TaskWorkflowConfig()
        assert manager.features.client_ticketing_enabled
        assert manager.tasks.workflow is manager.task_workflow
        assert manager.tickets.workflow is manager.ticket_workflow
        assert manager.projects.ledger is manager.ledger

    def test_settings_flow_into_services(self):
        settings = EngineSettings.from_provider({
            "features": {"clientTicketingEnabled": False, "taskDependenciesEnabled": False},
            "defaultCurrency": "CHF",
        })

        manager = EntityLifecycleManager(settings)

        assert not manager.tickets.can_create()
        assert manager.tasks.dependencies_enabled is False
        assert manager.projects.default_currency == "CHF"

    def test_keyword_overrides_win_over_settings(self):
        settings = EngineSettings.from_provider({"features": {"clientTicketingEnabled": False}})
        workflow = WorkflowConfig(
            statuses=["todo", "done"],
            transitions={"todo": ["done"]},
            default_status="todo",
            completion_status="done",
        )

        manager = EntityLifecycleManager(
            settings, task_workflow=workflow, features=FeatureFlags()
        )

        assert manager.task_workflow is workflow
        assert manager.tickets.can_create()

    def test_two_managers_do_not_share_configuration(self):
        strict = EntityLifecycleManager(features=FeatureFlags(client_ticketing_enabled=False))
        loose = EntityLifecycleManager()

        assert not strict.tickets.can_create()
        assert loose.tickets.can_create()

    def test_ticketing_gate_raises(self, now):
        manager = EntityLifecycleManager(features=FeatureFlags(client_ticketing_enabled=False))
        payload = TicketCreate(type="inquiry", title="Hello", reporter_name="Client")

        with pytest.raises(FeatureDisabledError):
            manager.tickets.create(payload, now)


class TestEndToEnd:
    def test_project_task_flow(self, manager, now):
        """Create a project, chain two tasks, finish them in order and check health."""
        project = manager.projects.create(
            ProjectCreate(
                name="Mobile app",
                start_date=date(2024, 1, 1),
                end_date=date(2024, 12, 31),
                budget_allocated=100000,
                client_id="client-1",
            ),
            now,
        )
        project = manager.projects.allocate_resource(
            project,
            AllocationCreate(team_id="team-1", monthly_rate=5000, start_date=date(2024, 1, 1)),
            now,
        )

        design = manager.tasks.create(
            TaskCreate(
                project_id=project.id,
                title="Design",
                start_date=date(2024, 1, 1),
                end_date=date(2024, 2, 1),
            ),
            [],
            now,
        )
        build = manager.tasks.create(
            TaskCreate(
                project_id=project.id,
                title="Build",
                start_date=date(2024, 2, 1),
                end_date=date(2024, 9, 1),
                dependencies=[design.id],
            ),
            [design],
            now,
        )
        tasks = [design, build]

        build = manager.tasks.update_status(build, "in-progress", tasks, now)
        build = manager.tasks.update_status(build, "review", tasks, now)
        with pytest.raises(IncompleteDependenciesError):
            manager.tasks.update_status(build, "done", tasks, now)

        # Design is overdue as of 2024-03-01 until it is finished
        as_of = date(2024, 3, 1)
        assert manager.projects.health(project, tasks, as_of) == HealthStatus.YELLOW

        for status in ("in-progress", "review", "done"):
            design = manager.tasks.update_status(design, status, tasks, now)
        tasks = [design, build]

        build = manager.tasks.update_status(build, "done", tasks, now + timedelta(days=1))

        assert build.completed_at == now + timedelta(days=1)
        assert manager.projects.health(project, [design, build], as_of) == HealthStatus.GREEN

    def test_every_rejection_is_a_lifecycle_error(self, manager, make_task, now):
        task = make_task("A")
        with pytest.raises(LifecycleError):
            manager.tasks.update_status(task, "done", [task], now)
        with pytest.raises(ValueError):
            manager.tasks.update_status(task, "done", [task], now)
