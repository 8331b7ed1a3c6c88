"""Helpers for optional-field update patches."""

import uuid
from typing import Any, Dict, Iterable

from pydantic import BaseModel

from nexus_engine.c1_lifecycle_errors.errors import EntityValidationError


def new_id(prefix: str) -> str:
    """Generate an entity id of the form ``<prefix>-<uuid4>``."""
    return f"{prefix}-{uuid.uuid4()}"


def patch_changes(patch: BaseModel, nullable: Iterable[str] = ()) -> Dict[str, Any]:
    """Extract the fields a caller explicitly set on a patch.

    Unset fields are not changes. An explicit ``None`` clears a field, which
    is only allowed for the names in ``nullable``.

    Raises:
        EntityValidationError: If a required field is explicitly cleared
    """
    allowed_nulls = set(nullable)
    changes = {name: getattr(patch, name) for name in patch.model_fields_set}
    for name, value in changes.items():
        if value is None and name not in allowed_nulls:
            raise EntityValidationError(f"{name} cannot be cleared", field=name)
    return changes


def require_text(value: str, field: str, label: str) -> None:
    """Reject empty or whitespace-only required text."""
    if not value or not value.strip():
        raise EntityValidationError(f"{label} is required", field=field)
