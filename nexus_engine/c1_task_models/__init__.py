"""C1 Task Models - Task and task group snapshots."""
from nexus_engine.c1_task_models.task import (
    Task,
    TaskCreate,
    TaskGroup,
    TaskGroupCreate,
    TaskUpdate,
)

__all__ = ["Task", "TaskCreate", "TaskGroup", "TaskGroupCreate", "TaskUpdate"]
