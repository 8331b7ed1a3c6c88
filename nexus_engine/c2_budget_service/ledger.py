"""Project ledger: spend aggregation and health classification."""

import logging
from datetime import date, datetime
from typing import List, Optional, Sequence, Union

from nexus_engine.c1_entity_enums.entity_enums import HealthStatus
from nexus_engine.c1_project_models.project import Project
from nexus_engine.c1_task_models.task import Task
from nexus_engine.c1_workflow_models.workflow import TaskWorkflowConfig, WorkflowConfig
from nexus_engine.c2_budget_service.accrual import AccrualCalculator
from nexus_engine.c2_budget_service.models import BudgetSummary

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]

RED_THRESHOLD = 1.0
YELLOW_THRESHOLD = 0.85


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


class ProjectLedger:
    """Aggregates manual expenses and allocation accruals for a project."""

    def __init__(self, accrual_calculator: Optional[AccrualCalculator] = None):
        """Initialize the ledger.

        Args:
            accrual_calculator: Calculator for allocation accruals
        """
        self.accrual_calculator = accrual_calculator or AccrualCalculator()

    def manual_expenses(self, project: Project) -> float:
        return sum(expense.amount for expense in project.expenses)

    def accrued_resources(self, project: Project, as_of: DateLike) -> float:
        window = project.window
        return sum(
            self.accrual_calculator.accrue(allocation, window, as_of)
            for allocation in project.resource_allocations
        )

    def total_spend(self, project: Project, as_of: DateLike) -> float:
        """Manual expenses plus accrued resource costs up to ``as_of``."""
        return self.manual_expenses(project) + self.accrued_resources(project, as_of)

    def remaining_budget(self, project: Project, as_of: DateLike) -> float:
        """Allocated budget minus total spend. Negative when over budget."""
        return project.budget_allocated - self.total_spend(project, as_of)

    def spent_ratio(self, project: Project, as_of: DateLike) -> float:
        return self.total_spend(project, as_of) / project.budget_allocated

    @staticmethod
    def monthly_burn(project: Project) -> float:
        return sum(a.monthly_rate for a in project.resource_allocations)

    @staticmethod
    def months_remaining(project: Project, as_of: DateLike) -> int:
        """Whole calendar months from ``as_of`` to the project end, clamped at 0."""
        as_of = _as_date(as_of)
        end = project.end_date
        return max(0, (end.year - as_of.year) * 12 + (end.month - as_of.month))

    @staticmethod
    def overdue_tasks(tasks: Sequence[Task], as_of: DateLike, task_workflow: WorkflowConfig) -> List[Task]:
        """Non-terminal tasks whose end date has passed."""
        as_of = _as_date(as_of)
        return [
            t for t in tasks
            if not task_workflow.is_terminal(t.status) and t.end_date < as_of
        ]

    def health(
        self,
        project: Project,
        tasks: Sequence[Task],
        as_of: DateLike,
        task_workflow: Optional[WorkflowConfig] = None,
    ) -> HealthStatus:
        """Classify project health. First matching rule wins.

        1. spent ratio >= 1.0 -> red
        2. spent ratio >= 0.85, or any overdue non-terminal task -> yellow
        3. projected final spend above the budget -> yellow
        4. otherwise green
        """
        return self._classify(project, tasks, as_of, task_workflow or TaskWorkflowConfig())[0]

    def summarize(
        self,
        project: Project,
        tasks: Sequence[Task],
        as_of: DateLike,
        task_workflow: Optional[WorkflowConfig] = None,
    ) -> BudgetSummary:
        """Full budget position of a project, including its health."""
        task_workflow = task_workflow or TaskWorkflowConfig()
        health, overdue = self._classify(project, tasks, as_of, task_workflow)

        manual = self.manual_expenses(project)
        accrued = self.accrued_resources(project, as_of)
        total = manual + accrued
        burn = self.monthly_burn(project)
        months_left = self.months_remaining(project, as_of)

        return BudgetSummary(
            project_id=project.id,
            budget_allocated=project.budget_allocated,
            manual_expenses=manual,
            accrued_resources=accrued,
            total_spend=total,
            remaining_budget=project.budget_allocated - total,
            spent_ratio=total / project.budget_allocated,
            monthly_burn=burn,
            months_remaining=months_left,
            projected_final_spend=total + burn * months_left,
            health=health,
            overdue_task_ids=[t.id for t in overdue],
        )

    def _classify(self, project, tasks, as_of, task_workflow):
        total = self.total_spend(project, as_of)
        ratio = total / project.budget_allocated
        overdue = self.overdue_tasks(tasks, as_of, task_workflow)

        if ratio >= RED_THRESHOLD:
            return HealthStatus.RED, overdue

        if ratio >= YELLOW_THRESHOLD or overdue:
            return HealthStatus.YELLOW, overdue

        projected = total + self.monthly_burn(project) * self.months_remaining(project, as_of)
        if projected > project.budget_allocated:
            logger.debug(
                f"Project {project.id} projected spend {projected:.2f} exceeds {project.budget_allocated:.2f}"
            )
            return HealthStatus.YELLOW, overdue

        return HealthStatus.GREEN, overdue
