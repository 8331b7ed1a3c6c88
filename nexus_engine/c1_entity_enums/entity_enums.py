"""Entity enums for the Nexus lifecycle engine."""

from enum import Enum


class ProjectStatus(Enum):
    """Enum for project lifecycle status."""
    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


class TaskStatus(Enum):
    """Enum for the default task workflow statuses.

    Workflows are configurable, so task status fields hold plain strings.
    These values describe the stock workflow only.
    """
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    REVIEW = "review"
    BLOCKED = "blocked"
    DONE = "done"
    CANCELLED = "cancelled"


class TicketStatus(Enum):
    """Enum for the default ticket workflow statuses."""
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    PENDING = "pending"  # Waiting on client/team response
    RESOLVED = "resolved"
    CLOSED = "closed"
    CANCELLED = "cancelled"


class TicketType(Enum):
    """Enum for ticket classification."""
    INQUIRY = "inquiry"
    ISSUE = "issue"
    FEATURE_REQUEST = "feature-request"
    BACKLOG_ITEM = "backlog-item"


class Priority(Enum):
    """Enum for task and ticket priority."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class HealthStatus(Enum):
    """Enum for project health classification."""
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class ErrorKind(Enum):
    """Machine-checkable failure kinds raised by the engine."""
    VALIDATION = "validation_error"
    INVALID_TRANSITION = "invalid_transition"
    CIRCULAR_DEPENDENCY = "circular_dependency"
    DEPENDENCY_NOT_FOUND = "dependency_not_found"
    CROSS_PROJECT_DEPENDENCY = "cross_project_dependency"
    INCOMPLETE_DEPENDENCIES = "incomplete_dependencies"
    DEPENDENTS_EXIST = "dependents_exist"
    IMMUTABLE_STATE = "immutable_state"
    FEATURE_DISABLED = "feature_disabled"
