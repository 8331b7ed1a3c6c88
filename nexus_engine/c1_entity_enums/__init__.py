"""C1 Entity Enums - Status, priority, type and error-kind enums."""
from nexus_engine.c1_entity_enums.entity_enums import (
    ErrorKind,
    HealthStatus,
    Priority,
    ProjectStatus,
    TaskStatus,
    TicketStatus,
    TicketType,
)

__all__ = [
    "ErrorKind",
    "HealthStatus",
    "Priority",
    "ProjectStatus",
    "TaskStatus",
    "TicketStatus",
    "TicketType",
]
