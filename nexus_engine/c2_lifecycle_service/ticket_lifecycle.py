"""Lifecycle rules for tickets."""

import logging
from datetime import datetime
from typing import Optional

from nexus_engine.c1_lifecycle_errors.errors import FeatureDisabledError
from nexus_engine.c1_ticket_models.ticket import Ticket, TicketCreate, TicketUpdate
from nexus_engine.c1_workflow_models.workflow import TicketWorkflowConfig, WorkflowConfig
from nexus_engine.c2_lifecycle_service.patching import new_id, patch_changes, require_text
from nexus_engine.c2_workflow_service.workflow_engine import WorkflowEngine

logger = logging.getLogger(__name__)

_NULLABLE_TICKET_FIELDS = ("project_id", "assigned_team_id")


class TicketLifecycleService:
    """Service for ticket creation, updates and resolution."""

    def __init__(
        self,
        workflow: Optional[WorkflowConfig] = None,
        ticketing_enabled: bool = True,
        workflow_engine: Optional[WorkflowEngine] = None,
    ):
        """Initialize ticket lifecycle service.

        Args:
            workflow: Ticket workflow configuration
            ticketing_enabled: Feature gate for ticket creation
            workflow_engine: Engine applying status transitions
        """
        self.workflow = workflow or TicketWorkflowConfig()
        self.ticketing_enabled = ticketing_enabled
        self.workflow_engine = workflow_engine or WorkflowEngine()

    def can_create(self) -> bool:
        return self.ticketing_enabled

    def can_transition(self, current: str, target: str) -> bool:
        return self.workflow_engine.can_transition(current, target, self.workflow)

    def create(self, payload: TicketCreate, now: datetime) -> Ticket:
        """Create a ticket in the ticket workflow's default status.

        Raises:
            FeatureDisabledError: Client ticketing is disabled
            EntityValidationError: Missing title or reporter name
        """
        if not self.can_create():
            logger.warning("Ticket creation rejected: client ticketing is disabled")
            raise FeatureDisabledError("clientTicketingEnabled")

        require_text(payload.title, "title", "Ticket title")
        require_text(payload.reporter_name, "reporter_name", "Reporter name")

        ticket = Ticket(
            id=new_id("ticket"),
            type=payload.type,
            status=self.workflow.default_status,
            priority=payload.priority,
            title=payload.title,
            description=payload.description,
            project_id=payload.project_id,
            linked_task_ids=list(payload.linked_task_ids),
            linked_milestone_ids=list(payload.linked_milestone_ids),
            reporter_name=payload.reporter_name,
            reporter_email=payload.reporter_email,
            reporter_id=payload.reporter_id,
            created_at=now,
            updated_at=now,
        )
        logger.info(f"Created {ticket.type} ticket {ticket.id} ({ticket.priority})")
        return ticket

    def update(self, ticket: Ticket, patch: TicketUpdate, now: datetime) -> Ticket:
        """Apply a patch to a ticket; a status change is workflow-validated."""
        changes = patch_changes(patch, nullable=_NULLABLE_TICKET_FIELDS)
        if not changes:
            return ticket

        target_status = changes.pop("status", None)
        if "title" in changes:
            require_text(changes["title"], "title", "Ticket title")

        updated = ticket
        if changes:
            changes["updated_at"] = now
            updated = ticket.model_copy(update=changes)

        if target_status is not None and target_status != ticket.status:
            updated = self.update_status(updated, target_status, now)

        logger.info(f"Updated ticket {ticket.id}")
        return updated

    def update_status(self, ticket: Ticket, target: str, now: datetime) -> Ticket:
        """Move a ticket through the workflow.

        Reopening a resolved ticket (moving to a non-terminal status) clears
        its resolution details; closing it keeps them.

        Raises:
            InvalidTransitionError: Workflow forbids the move
        """
        updated = self.workflow_engine.transition(ticket, target, self.workflow, now)
        reopened = (
            ticket.status == self.workflow.completion_status
            and updated.status != ticket.status
            and not self.workflow.is_terminal(updated.status)
        )
        if reopened:
            updated = updated.model_copy(update={"resolution": None, "resolved_by": None})
        return updated

    def resolve(self, ticket: Ticket, resolution: str, resolved_by: str, now: datetime) -> Ticket:
        """Resolve a ticket and record who resolved it and how.

        Raises:
            EntityValidationError: Empty resolution text or resolver
            InvalidTransitionError: Workflow forbids moving to resolved
        """
        require_text(resolution, "resolution", "Resolution")
        require_text(resolved_by, "resolved_by", "Resolver")

        resolved = self.workflow_engine.transition(ticket, self.workflow.completion_status, self.workflow, now)
        logger.info(f"Ticket {ticket.id} resolved by {resolved_by}")
        return resolved.model_copy(update={
            "resolution": resolution,
            "resolved_by": resolved_by,
            "resolved_at": resolved.resolved_at or now,
            "updated_at": now,
        })
