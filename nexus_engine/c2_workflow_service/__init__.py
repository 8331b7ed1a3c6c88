"""C2 Workflow Service - Status transition rules."""
from nexus_engine.c2_workflow_service.workflow_engine import WorkflowEngine

__all__ = ["WorkflowEngine"]
