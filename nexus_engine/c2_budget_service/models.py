"""Pydantic models for project budget reporting."""

from typing import List

from pydantic import BaseModel, Field

from nexus_engine.c1_entity_enums.entity_enums import HealthStatus


class BudgetSummary(BaseModel):
    """Budget and schedule position of a project at a point in time."""

    project_id: str
    budget_allocated: float = Field(..., description="Total budget")
    manual_expenses: float = Field(..., ge=0, description="Sum of recorded expenses")
    accrued_resources: float = Field(..., ge=0, description="Accrued resource allocation cost")
    total_spend: float = Field(..., description="Manual expenses plus accrued resources")
    remaining_budget: float = Field(..., description="Allocated minus total; negative when over")
    spent_ratio: float = Field(..., ge=0, description="Total spend over allocated budget")
    monthly_burn: float = Field(..., ge=0, description="Sum of allocation monthly rates")
    months_remaining: int = Field(..., ge=0, description="Whole months until project end")
    projected_final_spend: float = Field(..., description="Total plus burn over remaining months")
    health: HealthStatus
    overdue_task_ids: List[str] = Field(default_factory=list, description="Non-terminal tasks past end date")
