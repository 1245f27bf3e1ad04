"""
Scope Estimator - Budget Reconciler

Cumulative and total over-budget checks for an estimate breakdown.
All operations are pure functions of their inputs.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from scope_estimator.domain.exceptions import OutOfRangeError
from scope_estimator.domain.models import (
    BudgetInfo,
    BudgetReconciliation,
    BudgetUsage,
    EstimateBreakdownLine,
    GeneratedEstimate,
    LineBudgetStatus,
)

logger = logging.getLogger(__name__)


def format_currency(amount: float) -> str:
    """Format USD with no fraction digits, e.g. 5500 -> "$5,500"."""
    rounded = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.0f}"


class BudgetReconciler:
    """Reconciles breakdown costs against a parsed budget range."""

    def cumulative_cost(self, breakdown: Sequence[EstimateBreakdownLine], up_to_index: int) -> float:
        """
        Sum of cost for lines [0, up_to_index].

        Raises:
            OutOfRangeError: If up_to_index is negative or not a line position
        """
        if up_to_index < 0 or up_to_index >= len(breakdown):
            raise OutOfRangeError(
                f"Breakdown index {up_to_index} out of range",
                index=up_to_index,
                length=len(breakdown),
            )
        return sum(line.cost for line in breakdown[: up_to_index + 1])

    def is_line_over_budget(
        self, breakdown: Sequence[EstimateBreakdownLine], index: int, budget_info: BudgetInfo
    ) -> bool:
        """True iff the running total through index exceeds the budget max."""
        if budget_info.range is None:
            return False
        return self.cumulative_cost(breakdown, index) > budget_info.range.max

    def is_total_over_budget(self, total_cost: float, budget_info: BudgetInfo) -> bool:
        if budget_info.range is None:
            return False
        return total_cost > budget_info.range.max

    def overage_amount(self, total_cost: float, budget_info: BudgetInfo) -> float:
        """max(0, total_cost - budget max), or 0 without a budget range."""
        if budget_info.range is None:
            return 0.0
        return max(0.0, total_cost - budget_info.range.max)

    def budget_usage(
        self, breakdown: Sequence[EstimateBreakdownLine], up_to_index: int, budget_info: BudgetInfo
    ) -> BudgetUsage:
        """
        Budget consumed by lines [0, up_to_index].

        Returns:
            BudgetUsage; all zero when no budget range applies

        Raises:
            OutOfRangeError: If up_to_index is not a line position
        """
        if budget_info.range is None:
            return BudgetUsage(used_amount=0.0, remaining_amount=0.0, percentage_used=0.0)

        used = self.cumulative_cost(breakdown, up_to_index)
        budget_max = budget_info.range.max
        remaining = max(0.0, budget_max - used)
        percentage = (used / budget_max) * 100 if budget_max > 0 else 0.0
        return BudgetUsage(used_amount=used, remaining_amount=remaining, percentage_used=percentage)

    def reconcile(self, estimate: GeneratedEstimate, budget_info: BudgetInfo) -> BudgetReconciliation:
        """
        Full reconciliation report for presentation layers.

        Args:
            estimate: Generated estimate
            budget_info: Parsed budget

        Returns:
            BudgetReconciliation with per-line running totals and flags
        """
        statuses = []
        running = 0.0
        budget_max = budget_info.range.max if budget_info.range is not None else None

        for index, line in enumerate(estimate.breakdown):
            running += line.cost
            statuses.append(
                LineBudgetStatus(
                    index=index,
                    feature=line.feature,
                    cost=line.cost,
                    cumulative_cost=running,
                    over_budget=budget_max is not None and running > budget_max,
                )
            )

        total_over = self.is_total_over_budget(estimate.total_cost, budget_info)
        overage = self.overage_amount(estimate.total_cost, budget_info)
        if total_over:
            logger.info(
                f"Estimate {format_currency(estimate.total_cost)} exceeds budget "
                f"'{budget_info.original_value}' by {format_currency(overage)}"
            )

        return BudgetReconciliation(
            budget=budget_info,
            lines=tuple(statuses),
            total_cost=estimate.total_cost,
            total_over_budget=total_over,
            overage_amount=overage,
        )
