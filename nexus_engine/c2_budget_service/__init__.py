"""C2 Budget Service - Accrual and project ledger."""
from nexus_engine.c2_budget_service.accrual import AccrualCalculator
from nexus_engine.c2_budget_service.ledger import ProjectLedger
from nexus_engine.c2_budget_service.models import BudgetSummary

__all__ = ["AccrualCalculator", "BudgetSummary", "ProjectLedger"]
