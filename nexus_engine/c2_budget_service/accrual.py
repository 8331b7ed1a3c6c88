"""Accrued cost of recurring resource allocations."""

import logging
from datetime import date, datetime
from typing import Optional, Tuple, Union

from nexus_engine.c1_project_models.project import ProjectWindow, ResourceAllocation

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


class AccrualCalculator:
    """Fractional-month accrual for a single resource allocation.

    Months are approximated calendar-wise: whole months from the year and
    month fields, plus the day-of-month difference over a flat 30 days.
    Financial figures depend on that exact formula.
    """

    DAYS_PER_MONTH = 30

    @staticmethod
    def elapsed_months(start: DateLike, end: DateLike) -> float:
        """Fractional months between two dates (negative when end < start)."""
        start, end = _as_date(start), _as_date(end)
        years = end.year - start.year
        months = end.month - start.month
        days = end.day - start.day
        return (years * 12) + months + (days / AccrualCalculator.DAYS_PER_MONTH)

    @staticmethod
    def billing_window(
        allocation: ResourceAllocation, window: ProjectWindow, as_of: DateLike
    ) -> Optional[Tuple[date, date]]:
        """Billable (start, end) span, or None when nothing is billable yet.

        Billing starts at the later of the allocation and project starts and
        ends at the earliest of ``as_of``, the allocation end and the project
        end.
        """
        as_of = _as_date(as_of)
        start = max(allocation.start_date, window.start_date)
        end = min(as_of, allocation.end_date or as_of, window.end_date)
        if end <= start:
            return None
        return start, end

    @staticmethod
    def accrue(allocation: ResourceAllocation, window: ProjectWindow, as_of: DateLike) -> float:
        """Cost accrued by ``allocation`` up to ``as_of``.

        Args:
            allocation: Resource allocation with monthly rate
            window: Project date range
            as_of: Point in time to accrue up to, supplied by the caller

        Returns:
            Accrued amount, never negative
        """
        span = AccrualCalculator.billing_window(allocation, window, as_of)
        if span is None:
            return 0.0

        elapsed = AccrualCalculator.elapsed_months(*span)
        amount = max(0.0, elapsed * allocation.monthly_rate)
        logger.debug(
            f"Allocation {allocation.id}: {elapsed:.4f} months x {allocation.monthly_rate} = {amount:.2f}"
        )
        return amount
