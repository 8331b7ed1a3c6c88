"""C2 Lifecycle Service - Entity lifecycle rules."""
from nexus_engine.c2_lifecycle_service.lifecycle_manager import EntityLifecycleManager
from nexus_engine.c2_lifecycle_service.project_lifecycle import ProjectLifecycleService
from nexus_engine.c2_lifecycle_service.task_lifecycle import TaskLifecycleService
from nexus_engine.c2_lifecycle_service.team_lifecycle import TeamLifecycleService
from nexus_engine.c2_lifecycle_service.ticket_lifecycle import TicketLifecycleService

__all__ = [
    "EntityLifecycleManager",
    "ProjectLifecycleService",
    "TaskLifecycleService",
    "TeamLifecycleService",
    "TicketLifecycleService",
]
