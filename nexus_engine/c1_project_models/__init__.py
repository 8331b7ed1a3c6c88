"""C1 Project Models - Project, budget and resource snapshots."""
from nexus_engine.c1_project_models.project import (
    AllocationCreate,
    BudgetExpense,
    Deliverable,
    DeliverableCreate,
    ExpenseCreate,
    Project,
    ProjectCreate,
    ProjectUpdate,
    ProjectWindow,
    ResourceAllocation,
)

__all__ = [
    "AllocationCreate",
    "BudgetExpense",
    "Deliverable",
    "DeliverableCreate",
    "ExpenseCreate",
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectWindow",
    "ResourceAllocation",
]
