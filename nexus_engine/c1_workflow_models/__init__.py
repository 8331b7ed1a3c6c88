"""C1 Workflow Models - Workflow configuration."""
from nexus_engine.c1_workflow_models.workflow import (
    TaskWorkflowConfig,
    TicketWorkflowConfig,
    WorkflowConfig,
)

__all__ = ["TaskWorkflowConfig", "TicketWorkflowConfig", "WorkflowConfig"]
