"""Entity lifecycle manager: one entry point over all lifecycle services."""

import logging
from typing import Optional

from nexus_engine.c1_workflow_models.workflow import (
    TaskWorkflowConfig,
    TicketWorkflowConfig,
    WorkflowConfig,
)
from nexus_engine.c2_budget_service.ledger import ProjectLedger
from nexus_engine.c2_dependency_service.dependency_graph import DependencyGraph
from nexus_engine.c2_lifecycle_service.project_lifecycle import ProjectLifecycleService
from nexus_engine.c2_lifecycle_service.task_lifecycle import TaskLifecycleService
from nexus_engine.c2_lifecycle_service.team_lifecycle import TeamLifecycleService
from nexus_engine.c2_lifecycle_service.ticket_lifecycle import TicketLifecycleService
from nexus_engine.c2_task_blocking_service.blocking_service import TaskBlockingService
from nexus_engine.c2_workflow_service.workflow_engine import WorkflowEngine
from nexus_engine.core.config import EngineSettings, FeatureFlags

logger = logging.getLogger(__name__)


class EntityLifecycleManager:
    """Composes the workflow engine, dependency graph and ledger.

    Short-lived and stateless apart from the configuration it was built
    with. Usage::

        manager = EntityLifecycleManager(EngineSettings.from_yaml("engine.yaml"))
        project = manager.projects.create(payload, now=now)
        task = manager.tasks.update_status(task, "done", project_tasks, now=now)

    Any operation raises a ``LifecycleError`` subclass on rejection and
    leaves its inputs untouched.
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        *,
        task_workflow: Optional[WorkflowConfig] = None,
        ticket_workflow: Optional[WorkflowConfig] = None,
        features: Optional[FeatureFlags] = None,
        workflow_engine: Optional[WorkflowEngine] = None,
        dependency_graph: Optional[DependencyGraph] = None,
        ledger: Optional[ProjectLedger] = None,
    ):
        """Initialize the manager.

        Explicit keyword arguments override the matching part of
        ``settings``; anything left unset falls back to the stock defaults.
        The environment is never read here.

        Args:
            settings: Engine settings (features and both workflows)
            task_workflow: Task workflow override
            ticket_workflow: Ticket workflow override
            features: Feature gate override
            workflow_engine: Transition engine
            dependency_graph: Dependency validator
            ledger: Project ledger
        """
        if settings is not None:
            task_workflow = task_workflow or settings.task_workflow
            ticket_workflow = ticket_workflow or settings.ticket_workflow
            features = features or settings.features
            default_currency = settings.default_currency
        else:
            default_currency = "USD"

        self.task_workflow = task_workflow or TaskWorkflowConfig()
        self.ticket_workflow = ticket_workflow or TicketWorkflowConfig()
        self.features = features or FeatureFlags()

        self.workflow_engine = workflow_engine or WorkflowEngine()
        self.dependency_graph = dependency_graph or DependencyGraph()
        self.ledger = ledger or ProjectLedger()

        self.projects = ProjectLifecycleService(
            ledger=self.ledger,
            task_workflow=self.task_workflow,
            default_currency=default_currency,
        )
        self.tasks = TaskLifecycleService(
            workflow=self.task_workflow,
            dependencies_enabled=self.features.task_dependencies_enabled,
            workflow_engine=self.workflow_engine,
            dependency_graph=self.dependency_graph,
            blocking_service=TaskBlockingService(),
        )
        self.tickets = TicketLifecycleService(
            workflow=self.ticket_workflow,
            ticketing_enabled=self.features.client_ticketing_enabled,
            workflow_engine=self.workflow_engine,
        )
        self.teams = TeamLifecycleService()

        logger.debug(
            f"EntityLifecycleManager initialized (task default={self.task_workflow.default_status}, "
            f"ticketing={self.features.client_ticketing_enabled})"
        )
