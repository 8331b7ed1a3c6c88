"""Pydantic models for dependency validation results."""

from typing import List, Optional

from pydantic import BaseModel, Field

from nexus_engine.c1_entity_enums.entity_enums import ErrorKind


class DependencyIssue(BaseModel):
    """A single problem found in a task's dependency set."""

    kind: ErrorKind = Field(..., description="Failure kind")
    dependency_id: Optional[str] = Field(None, description="Offending dependency id, if any")
    message: str = Field(..., description="Human-readable detail")


class DependencyValidationResult(BaseModel):
    """Outcome of validating a task's dependency set against its project."""

    valid: bool = Field(..., description="True when no issues were found")
    errors: List[DependencyIssue] = Field(default_factory=list, description="Issues found")

    def kinds(self) -> List[ErrorKind]:
        return [issue.kind for issue in self.errors]
