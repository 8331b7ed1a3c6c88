"""C2 Task Blocking Service - Completion guard over task dependencies."""
from nexus_engine.c2_task_blocking_service.blocking_service import TaskBlockingService

__all__ = ["TaskBlockingService"]
