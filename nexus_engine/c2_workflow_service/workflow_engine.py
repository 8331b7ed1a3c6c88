"""Workflow engine: validates and applies status transitions."""

import logging
from datetime import datetime
from typing import List, TypeVar

from pydantic import BaseModel

from nexus_engine.c1_lifecycle_errors.errors import InvalidTransitionError
from nexus_engine.c1_workflow_models.workflow import WorkflowConfig

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)


class WorkflowEngine:
    """Applies a declarative transition table to task and ticket snapshots.

    Pure: every answer is a function of (current status, target status,
    config). The same engine serves both entity types; which timestamp gets
    stamped on completion comes from the entity's
    ``COMPLETION_TIMESTAMP_FIELD``.
    """

    @staticmethod
    def can_transition(current: str, target: str, config: WorkflowConfig) -> bool:
        """Check if a status change is permitted.

        Args:
            current: Current status
            target: Desired status
            config: Workflow configuration

        Returns:
            True for the no-op transition, otherwise True iff ``target`` is
            listed in ``config.transitions[current]``
        """
        if current == target:
            return True  # No-op transition
        return target in config.transitions.get(current, [])

    @staticmethod
    def allowed_transitions(current: str, config: WorkflowConfig) -> List[str]:
        return config.allowed_transitions(current)

    @staticmethod
    def is_terminal(status: str, config: WorkflowConfig) -> bool:
        return config.is_terminal(status)

    @staticmethod
    def transition(entity: EntityT, target: str, config: WorkflowConfig, now: datetime) -> EntityT:
        """Move an entity to ``target`` and return the new snapshot.

        Entering ``config.completion_status`` stamps the entity's completion
        timestamp with ``now``; leaving it clears the timestamp.

        Args:
            entity: Task or ticket snapshot (not modified)
            target: Desired status
            config: Workflow configuration for the entity type
            now: Current time, supplied by the caller

        Returns:
            Updated entity, or the same entity for a no-op transition

        Raises:
            InvalidTransitionError: If the configuration forbids the move
        """
        current = entity.status
        if current == target:
            return entity

        if target not in config.statuses or not WorkflowEngine.can_transition(current, target, config):
            logger.warning(f"Rejected transition {current} -> {target} for {entity.id}")
            raise InvalidTransitionError(current, target)

        changes = {"status": target, "updated_at": now}
        stamp_field = type(entity).COMPLETION_TIMESTAMP_FIELD
        if target == config.completion_status:
            changes[stamp_field] = now
        elif current == config.completion_status:
            changes[stamp_field] = None

        logger.info(f"{entity.id} status changed from {current} to {target}")
        return entity.model_copy(update=changes)
